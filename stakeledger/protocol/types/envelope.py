# MIT License
# Copyright (c) 2025 Hashborn

"""
Typed request/response structures exchanged at the host boundary.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from .block import Block
from .tx import Transaction

class PendingBatch(BaseModel):
    """Everything a node hands over to mine the next block."""
    chain: List[Block] = Field(default_factory=list)
    network: List[str] = Field(default_factory=list)        # participant addresses
    transactions: List[Transaction] = Field(default_factory=list)

class InitialiseRequest(BaseModel):
    address: str = Field(min_length=1)

class MineResult(BaseModel):
    chain: List[Block]
    errors: List[str] = Field(default_factory=list)   # per-transaction failures

class ValidationReport(BaseModel):
    valid: bool
    block_id: Optional[int] = None
    reason: Optional[str] = None
