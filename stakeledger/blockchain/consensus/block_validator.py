# MIT License
# Copyright (c) 2025 Hashborn

import logging
from typing import Optional, Sequence
from ...protocol.types.block import Block
from ...protocol.types.common import BlockValidationError, ChainTooShortError
from ...protocol.types.envelope import ValidationReport
from ...protocol.config.params import CURRENT_NETWORK, LedgerConfig
from ..observability.metrics import validations_total

logger = logging.getLogger(__name__)

CHAIN_TOO_SHORT = "Chain is too short"

class BlockValidator:
    def __init__(self, config: Optional[LedgerConfig] = None):
        self.config = config or CURRENT_NETWORK

    def verify_block(self, block: Block, previous_block: Block) -> None:
        """
        Checks that `block` correctly follows `previous_block`.
        Raises BlockValidationError on the first failed check.
        """
        # 1. Linkage
        if block.previous_hash != previous_block.hash:
            raise BlockValidationError(f"block with id: {block.id} has wrong previous hash")

        # 2. Difficulty
        if not block.meets_difficulty(self.config.difficulty_prefix):
            raise BlockValidationError(f"block with id: {block.id} has invalid difficulty")

        # 3. Height
        if block.id != previous_block.id + 1:
            raise BlockValidationError(
                f"block with id: {block.id} is not the next block after the latest: {previous_block.id}"
            )

        # 4. Hash
        if block.calculate_hash() != block.hash:
            raise BlockValidationError(f"block with id: {block.id} has invalid hash")

    def verify_genesis(self, block: Block) -> None:
        if block.id != 0:
            raise BlockValidationError(f"genesis block has id: {block.id}")
        if block.previous_hash != "":
            raise BlockValidationError("genesis block must have an empty previous hash")
        if not block.meets_difficulty(self.config.difficulty_prefix):
            raise BlockValidationError(f"block with id: {block.id} has invalid difficulty")
        if block.calculate_hash() != block.hash:
            raise BlockValidationError(f"block with id: {block.id} has invalid hash")

    def validate_block(self, block: Block, previous_block: Block) -> bool:
        """Same checks as verify_block; failures are logged and reported as False."""
        try:
            self.verify_block(block, previous_block)
        except BlockValidationError as e:
            logger.warning(str(e))
            validations_total.labels(result="invalid").inc()
            return False
        validations_total.labels(result="valid").inc()
        return True

    def inspect_chain(self, blocks: Sequence[Block]) -> ValidationReport:
        """Validates the last block against its predecessor, keeping the diagnostic."""
        if len(blocks) < 2:
            raise ChainTooShortError(CHAIN_TOO_SHORT)

        block, previous_block = blocks[-1], blocks[-2]
        try:
            self.verify_block(block, previous_block)
        except BlockValidationError as e:
            logger.warning(str(e))
            validations_total.labels(result="invalid").inc()
            return ValidationReport(valid=False, block_id=block.id, reason=str(e))
        validations_total.labels(result="valid").inc()
        return ValidationReport(valid=True, block_id=block.id)

    def validate_chain(self, blocks: Sequence[Block]) -> bool:
        return self.inspect_chain(blocks).valid
