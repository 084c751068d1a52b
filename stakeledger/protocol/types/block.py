# MIT License
# Copyright (c) 2025 Hashborn

from pydantic import BaseModel, Field
from typing import List
from .account import Account
from .common import U64_MAX
from ..crypto.hash import calculate_hash, hash_to_binary

class Block(BaseModel):
    id: int = Field(ge=0, le=U64_MAX)
    hash: str                   # binary text of the digest
    previous_hash: str          # "" for the genesis block
    timestamp: int = Field(ge=0, le=U64_MAX)
    data: List[Account]         # accounts changed by this block (delta, not a snapshot)
    nonce: int = Field(ge=0, le=U64_MAX)
    next_miner: str
    next_validators: List[str]

    def calculate_hash(self) -> str:
        """Recomputes the binary-text hash from the block's own fields."""
        return hash_to_binary(calculate_hash(
            [account.model_dump() for account in self.data],
            self.id,
            self.next_miner,
            self.next_validators,
            self.nonce,
            self.previous_hash,
            self.timestamp,
        ))

    def meets_difficulty(self, prefix: str) -> bool:
        return self.hash.startswith(prefix)
