# MIT License
# Copyright (c) 2025 Hashborn

import logging
import threading
from typing import Dict, Iterable, List, Optional
from ...protocol.types.account import Account
from ...protocol.types.block import Block
from ...protocol.config.params import CURRENT_NETWORK, LedgerConfig
from ..consensus.selection import StakeSelector
from ..consensus.block_validator import BlockValidator
from ..consensus.sealer import BlockSealer

logger = logging.getLogger(__name__)

class Blockchain:
    """
    Append-only sequence of sealed blocks.

    Blocks only carry the accounts they changed, so the state of an address
    is its most recent copy scanning from the newest block backwards.
    """

    def __init__(self,
                 blocks: Optional[Iterable[Block]] = None,
                 config: Optional[LedgerConfig] = None,
                 selector: Optional[StakeSelector] = None):
        self.config = config or CURRENT_NETWORK
        self.selector = selector or StakeSelector(default_address=self.config.default_miner)
        self.validator = BlockValidator(self.config)
        self.sealer = BlockSealer(self.config)
        self.blocks: List[Block] = [b.model_copy(deep=True) for b in blocks] if blocks else []

    def __len__(self) -> int:
        return len(self.blocks)

    @property
    def height(self) -> int:
        """Id of the last block, -1 for an empty chain."""
        return len(self.blocks) - 1

    @property
    def last_block(self) -> Optional[Block]:
        return self.blocks[-1] if self.blocks else None

    @property
    def last_hash(self) -> str:
        return self.blocks[-1].hash if self.blocks else ""

    def get_account_by_address(self, address: str) -> Optional[Account]:
        for block in reversed(self.blocks):
            for account in reversed(block.data):
                if account.address == address:
                    return account
        return None

    def get_accounts(self) -> List[Account]:
        """Latest copy of every distinct address, newest first."""
        resolved: Dict[str, Account] = {}
        for block in reversed(self.blocks):
            for account in reversed(block.data):
                if account.address not in resolved:
                    resolved[account.address] = account
        return list(resolved.values())

    def get_next_miner(self) -> str:
        return self.selector.select_miner(self.get_accounts())

    def get_next_validators(self, next_miner: str, network: List[str]) -> List[str]:
        return self.selector.select_validators(self.get_accounts(), next_miner, network)

    def add_block(self, block: Block) -> None:
        """Appends a sealed block. Raises BlockValidationError if it does not extend the chain."""
        if self.last_block is None:
            self.validator.verify_genesis(block)
        else:
            self.validator.verify_block(block, self.last_block)
        self.blocks.append(block)
        logger.debug(f"Block {block.id} appended (chain length {len(self.blocks)})")

    def mine_block(self,
                   data: List[Account],
                   network: List[str],
                   cancel: Optional[threading.Event] = None,
                   timeout: Optional[float] = None) -> Block:
        """Seals `data` into the next block and appends it."""
        block = self.sealer.seal(self, data, network, cancel=cancel, timeout=timeout)
        self.add_block(block)
        return block
