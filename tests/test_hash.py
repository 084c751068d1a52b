# MIT License
# Copyright (c) 2025 Hashborn

from stakeledger.protocol.crypto.hash import calculate_hash, canonical_json, hash_to_binary
from stakeledger.protocol.types.account import Account


def test_hash_to_binary_is_not_padded():
    digest = bytes(range(16))
    binary = hash_to_binary(digest)
    assert binary == "01101110010111011110001001101010111100110111101111"
    assert len(binary) == 50

def test_hash_to_binary_full_digest():
    digest = bytes([
        5, 115, 102, 222, 65, 49, 98, 111, 42, 138, 233, 77, 213, 12, 96, 154, 168, 222, 27,
        251, 144, 8, 233, 164, 50, 174, 141, 146, 8, 145, 8, 72,
    ])
    binary = hash_to_binary(digest)
    assert binary == (
        "10111100111100110110111101000001110001110001011011111010101000101011101001100110"
        "11101010111001100000100110101010100011011110110111111101110010000100011101001101"
        "0010011001010101110100011011001001010001001000110001001000"
    )
    assert len(binary) == 218

def test_single_bytes():
    assert hash_to_binary(b"\x05") == "101"
    assert hash_to_binary(b"\x00") == "0"
    assert hash_to_binary(b"\xff") == "11111111"

def test_canonical_json_ignores_key_order():
    assert canonical_json({"b": 1, "a": [1, 2]}) == canonical_json({"a": [1, 2], "b": 1})
    assert canonical_json({"b": 1, "a": 2}) == b'{"a":2,"b":1}'

def _hash(**overrides):
    fields = dict(
        data=[Account.new("Shaun").model_dump()],
        id=1,
        next_miner="test",
        next_validators=["test"],
        nonce=1,
        previous_hash="test",
        timestamp=1,
    )
    fields.update(overrides)
    return calculate_hash(**fields)

def test_calculate_hash_is_deterministic_sha256():
    assert len(_hash()) == 32
    assert _hash() == _hash()

def test_calculate_hash_covers_every_field():
    base = _hash()
    assert _hash(data=[Account.new("Tom").model_dump()]) != base
    assert _hash(id=2) != base
    assert _hash(next_miner="Mrugesh") != base
    assert _hash(next_validators=["Shaun"]) != base
    assert _hash(nonce=2) != base
    assert _hash(previous_hash="Quincy") != base
    assert _hash(timestamp=2) != base

def test_calculate_hash_known_vectors():
    assert list(_hash()) == [
        104, 101, 236, 24, 3, 47, 224, 77, 47, 52, 255, 237, 205, 181, 209, 162, 180, 139, 160,
        115, 147, 254, 129, 29, 245, 49, 171, 8, 28, 29, 116, 198,
    ]
    digest = _hash(
        data=[Account.new("Tom").model_dump()],
        next_miner="Mrugesh",
        next_validators=["Shaun"],
        previous_hash="Quincy",
    )
    assert list(digest) == [
        5, 115, 102, 222, 65, 49, 98, 111, 42, 138, 233, 77, 213, 12, 96, 154, 168, 222, 27,
        251, 144, 8, 233, 164, 50, 174, 141, 146, 8, 145, 8, 72,
    ]
