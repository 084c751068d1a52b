# MIT License
# Copyright (c) 2025 Hashborn

import pytest
from stakeledger.protocol.types.account import Account
from stakeledger.protocol.types.common import BlockValidationError
from stakeledger.blockchain.core.chain import Blockchain


@pytest.fixture
def chain(config, selector, genesis_block):
    chain = Blockchain([genesis_block], config=config, selector=selector)
    chain.mine_block([Account(address="Tom", staked=21, tokens=100)], ["Camper"])
    return chain


def test_empty_chain():
    chain = Blockchain()
    assert len(chain) == 0
    assert chain.height == -1
    assert chain.last_block is None
    assert chain.last_hash == ""
    assert chain.get_accounts() == []
    assert chain.get_account_by_address("Tom") is None

def test_latest_copy_wins(chain):
    assert chain.get_account_by_address("Tom").staked == 21
    assert chain.get_account_by_address("Camper").tokens == 20
    assert chain.get_account_by_address("Ghost") is None

def test_get_accounts_is_distinct_newest_first(chain):
    accounts = chain.get_accounts()
    assert [a.address for a in accounts] == ["Tom", "Camper"]
    assert accounts[0].staked == 21

def test_input_blocks_are_copied(genesis_block, config):
    chain = Blockchain([genesis_block], config=config)
    chain.blocks[0].data[0].tokens = 0
    assert genesis_block.data[0].tokens == 20

def test_add_block_rejects_unlinked_block(chain):
    stray = chain.last_block.model_copy(update={"id": 7})
    with pytest.raises(BlockValidationError):
        chain.add_block(stray)
    assert chain.height == 1

def test_add_block_rejects_bad_genesis(chain, config):
    empty = Blockchain(config=config)
    with pytest.raises(BlockValidationError):
        empty.add_block(chain.last_block)
