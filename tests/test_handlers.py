# MIT License
# Copyright (c) 2025 Hashborn

import pytest
from stakeledger.protocol.types.account import Account
from stakeledger.protocol.types.common import ChainTooShortError, InputError
from stakeledger.protocol.types.envelope import PendingBatch
from stakeledger.blockchain import handlers


def test_initialise_chain(config, selector):
    blocks = handlers.initialise_chain("Camper", config=config, selector=selector)
    assert len(blocks) == 1
    genesis = blocks[0]
    assert genesis.id == 0
    assert genesis.previous_hash == ""
    assert genesis.data == [Account(address="Camper", staked=0, tokens=20)]
    assert genesis.next_miner == "Camper"
    assert genesis.next_validators == ["Camper"]
    assert genesis.hash.startswith(config.difficulty_prefix)

def test_initialise_requires_address(config):
    with pytest.raises(InputError):
        handlers.initialise_chain("", config=config)

def test_single_block_chain_cannot_be_validated(config, selector):
    blocks = handlers.initialise_chain("Camper", config=config, selector=selector)
    with pytest.raises(ChainTooShortError, match="Chain is too short"):
        handlers.validate_chain(blocks, config=config)

def test_initialise_mine_validate(config, selector):
    blocks = handlers.initialise_chain("Camper", config=config, selector=selector)
    batch = PendingBatch(chain=blocks, network=["Camper"], transactions=[
        {"address": "Camper", "event": "Stake"},
        {"address": "Tom", "event": "AddAccount"},
    ])
    result = handlers.mine_block(batch, config=config, selector=selector)

    assert result.errors == []
    assert len(result.chain) == 2
    assert result.chain[1].data == [
        Account(address="Camper", staked=1, tokens=20),
        Account(address="Tom", staked=0, tokens=20),
    ]
    assert handlers.validate_chain(result.chain, config=config)
    report = handlers.inspect_chain(result.chain, config=config)
    assert report.valid and report.block_id == 1

def test_stake_shifts_next_miner(config, selector):
    blocks = handlers.initialise_chain("Camper", config=config, selector=selector)
    batch = PendingBatch(chain=blocks, network=["Camper", "Tom"], transactions=[
        {"address": "Camper", "event": "Stake"},
        {"address": "Tom", "event": "AddAccount"},
    ])
    result = handlers.mine_block(batch, config=config, selector=selector)
    # Genesis carries no stake at all: uniform over the single account
    assert result.chain[1].next_miner == "Camper"

    # After block 1 Camper holds all the stake
    follow_up = PendingBatch(chain=result.chain, network=["Camper", "Tom"],
                             transactions=[{"address": "Tom", "event": "Stake"}])
    final = handlers.mine_block(follow_up, config=config, selector=selector)
    assert final.chain[2].next_miner == "Camper"
    assert final.chain[2].next_validators == ["Camper"]
