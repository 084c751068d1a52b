# MIT License
# Copyright (c) 2025 Hashborn

"""
Boundary operations: the three calls a host makes into the ledger.

Each call takes a complete input snapshot and returns a complete output
snapshot; nothing is kept between calls.
"""

import logging
import threading
from typing import List, Optional, Sequence
from ..protocol.types.account import Account
from ..protocol.types.block import Block
from ..protocol.types.common import InputError
from ..protocol.types.envelope import MineResult, PendingBatch, ValidationReport
from ..protocol.config.params import CURRENT_NETWORK, LedgerConfig
from .consensus.block_validator import BlockValidator
from .consensus.selection import StakeSelector
from .core.batch import TransactionBatchProcessor
from .core.chain import Blockchain

logger = logging.getLogger(__name__)

def initialise_chain(address: str,
                     config: Optional[LedgerConfig] = None,
                     selector: Optional[StakeSelector] = None,
                     timeout: Optional[float] = None) -> List[Block]:
    """
    Starts a new chain whose genesis block holds a default account for `address`.
    Only the first participant of a network calls this.
    """
    if not address:
        raise InputError("Address must not be empty")

    config = config or CURRENT_NETWORK
    chain = Blockchain(config=config, selector=selector)
    genesis = Account.new(address, tokens=config.initial_tokens)
    chain.mine_block([genesis], [address], timeout=timeout)
    logger.info(f"Chain initialised for '{address}'")
    return chain.blocks

def mine_block(batch: PendingBatch,
               config: Optional[LedgerConfig] = None,
               selector: Optional[StakeSelector] = None,
               cancel: Optional[threading.Event] = None,
               timeout: Optional[float] = None) -> MineResult:
    """Applies the batch's transactions and mines the next block. Raises BatchError or InputError."""
    processor = TransactionBatchProcessor(config=config, selector=selector)
    return processor.process(batch, cancel=cancel, timeout=timeout)

def inspect_chain(blocks: Sequence[Block], config: Optional[LedgerConfig] = None) -> ValidationReport:
    return BlockValidator(config).inspect_chain(blocks)

def validate_chain(blocks: Sequence[Block], config: Optional[LedgerConfig] = None) -> bool:
    """Validates the last two blocks. Raises ChainTooShortError for fewer than two."""
    return BlockValidator(config).validate_chain(blocks)
