# MIT License
# Copyright (c) 2025 Hashborn

import hashlib
import json
from typing import Any, Dict, List

def sha256(data: bytes) -> bytes:
    """Returns SHA256 hash of bytes."""
    return hashlib.sha256(data).digest()

def canonical_json(payload: Any) -> bytes:
    """Compact, key-sorted JSON. Used for hashing only, never for the wire."""
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")

def hash_to_binary(digest: bytes) -> str:
    """
    Concatenates the base-2 text of every byte.

    Bytes are NOT left-padded to 8 digits: 5 -> "101", 0 -> "0".
    Difficulty prefixes are checked against this exact string.
    """
    return "".join(format(byte, "b") for byte in digest)

def calculate_hash(data: List[Dict[str, Any]],
                   id: int,
                   next_miner: str,
                   next_validators: List[str],
                   nonce: int,
                   previous_hash: str,
                   timestamp: int) -> bytes:
    """SHA256 over the canonical encoding of a candidate block's fields."""
    payload = {
        "id": id,
        "previous_hash": previous_hash,
        "data": data,
        "timestamp": timestamp,
        "nonce": nonce,
        "next_miner": next_miner,
        "next_validators": next_validators,
    }
    return sha256(canonical_json(payload))
