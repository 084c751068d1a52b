# MIT License
# Copyright (c) 2025 Hashborn

import random
import pytest
from stakeledger.protocol.types.account import Account
from stakeledger.protocol.types.block import Block
from stakeledger.protocol.types.envelope import PendingBatch
from stakeledger.protocol.config.params import LedgerConfig
from stakeledger.blockchain.consensus.selection import StakeSelector


@pytest.fixture
def config():
    """Devnet-like config with a small nonce bound so failures surface quickly."""
    return LedgerConfig(network_id="test", difficulty_prefix="0", max_nonce_attempts=200_000, progress_interval=10_000)


@pytest.fixture
def selector():
    return StakeSelector(rng=random.Random(1234).random)


@pytest.fixture
def genesis_block():
    """Hand-written genesis as a host would receive it; its hash is not recomputed."""
    return Block(
        id=0,
        hash="00110101",
        previous_hash="",
        timestamp=123456789,
        data=[
            Account(address="Camper", staked=0, tokens=20),
            Account(address="Tom", staked=20, tokens=100),
        ],
        nonce=123,
        next_miner="Camper",
        next_validators=["Tom"],
    )


@pytest.fixture
def make_batch(genesis_block):
    def _make(transactions, chain=None, network=None):
        return PendingBatch.model_validate({
            "chain": [b.model_dump() for b in (chain if chain is not None else [genesis_block])],
            "network": network if network is not None else ["Camper"],
            "transactions": transactions,
        })
    return _make
