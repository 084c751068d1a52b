# MIT License
# Copyright (c) 2025 Hashborn

import json
import pytest
from stakeledger.protocol.codec import decode_chain, decode_envelope, encode_chain, encode_mine_result
from stakeledger.protocol.types.common import EventKind, InputError
from stakeledger.protocol.types.envelope import MineResult
from stakeledger.protocol.types.tx import Transaction, Transfer

ENVELOPE = """
{
  "chain": [
    {
      "id": 0,
      "hash": "00110101",
      "previous_hash": "",
      "timestamp": 123456789,
      "data": [
        {"address": "Camper", "staked": 0, "tokens": 20},
        {"address": "Tom", "staked": 20, "tokens": 100}
      ],
      "nonce": 123,
      "next_miner": "Camper",
      "next_validators": ["Tom"]
    }
  ],
  "network": ["Camper"],
  "transactions": [
    {"address": "Camper", "event": "Stake"},
    {"address": "Tom", "event": {"Transfer": ["Camper", 1]}}
  ]
}
"""


def test_decode_envelope():
    batch = decode_envelope(ENVELOPE)
    assert batch.network == ["Camper"]
    assert batch.chain[0].data[1].staked == 20
    assert batch.transactions[0].event == EventKind.STAKE
    assert batch.transactions[1].event == Transfer(to="Camper", amount=1)
    assert [t.kind for t in batch.transactions] == ["Stake", "Transfer"]

def test_decode_accepts_parsed_json():
    batch = decode_envelope(json.loads(ENVELOPE))
    assert len(batch.transactions) == 2

def test_transfer_wire_shape():
    tx = Transaction(address="Tom", event=Transfer(to="Camper", amount=5))
    assert json.loads(tx.model_dump_json()) == {"address": "Tom", "event": {"Transfer": ["Camper", 5]}}
    assert Transaction(address="Tom", event="Unstake").model_dump(mode="json") == {"address": "Tom", "event": "Unstake"}

def test_chain_survives_encoding():
    blocks = decode_envelope(ENVELOPE).chain
    assert decode_chain(encode_chain(blocks)) == blocks
    assert json.loads(encode_chain(blocks, indent=2))[0]["next_validators"] == ["Tom"]

def test_encode_mine_result():
    result = MineResult(chain=decode_envelope(ENVELOPE).chain, errors=["'Ahmad' not found in chain"])
    data = json.loads(encode_mine_result(result))
    assert data["errors"] == ["'Ahmad' not found in chain"]
    assert data["chain"][0]["hash"] == "00110101"

@pytest.mark.parametrize("raw", [
    "not json",
    '{"transactions": [{"address": "Tom", "event": "Mint"}]}',
    '{"transactions": [{"address": "Tom", "event": {"Transfer": ["Camper"]}}]}',
    '{"transactions": [{"address": "Tom", "event": {"Transfer": ["Camper", -1]}}]}',
    '{"chain": [{"id": 0}]}',
])
def test_bad_envelope(raw):
    with pytest.raises(InputError):
        decode_envelope(raw)

def test_bad_chain():
    with pytest.raises(InputError):
        decode_chain('[{"id": -1}]')
    with pytest.raises(InputError):
        decode_chain('{"id": 0}')

def test_missing_fields_default_to_empty():
    batch = decode_envelope("{}")
    assert batch.chain == [] and batch.network == [] and batch.transactions == []
