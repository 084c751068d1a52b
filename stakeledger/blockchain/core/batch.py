# MIT License
# Copyright (c) 2025 Hashborn

import logging
import threading
from typing import Optional, Sequence
from ...protocol.types.block import Block
from ...protocol.types.common import BatchError, InputError, TransactionError
from ...protocol.types.envelope import MineResult, PendingBatch
from ...protocol.config.params import CURRENT_NETWORK, LedgerConfig
from ..consensus.selection import StakeSelector
from ..observability.metrics import batches_rejected_total, transactions_total
from .chain import Blockchain
from .state import AccountState

logger = logging.getLogger(__name__)

NO_CHANGE = "Invalid transactions. No change in chain"

def check_chain_shape(blocks: Sequence[Block]) -> None:
    """
    Rejects chains that cannot be extended: ids must count up from 0, the
    first block has an empty previous hash and every block links to the one
    before it. Raises InputError.
    """
    for index, block in enumerate(blocks):
        if block.id != index:
            raise InputError(f"Block at position {index} has id {block.id}")
        expected = blocks[index - 1].hash if index else ""
        if block.previous_hash != expected:
            raise InputError(f"Block {block.id} does not link to the block before it")

class TransactionBatchProcessor:
    """
    Applies a batch of transactions against the chain and mines the result.

    Transactions are applied in order and independently: a failing one is
    recorded and the rest still run. The batch is only rejected as a whole
    when every transaction failed or nothing would change.
    """

    def __init__(self, config: Optional[LedgerConfig] = None, selector: Optional[StakeSelector] = None):
        self.config = config or CURRENT_NETWORK
        self.selector = selector

    def process(self,
                batch: PendingBatch,
                cancel: Optional[threading.Event] = None,
                timeout: Optional[float] = None) -> MineResult:
        check_chain_shape(batch.chain)

        # Work on copies; the caller's envelope is never touched
        chain = Blockchain(batch.chain, config=self.config, selector=self.selector)

        # 1. Snapshot every known address touched by the batch
        state = AccountState(chain)
        state.snapshot(tx.address for tx in batch.transactions)

        # 2. Apply in input order
        errors = []
        for tx in batch.transactions:
            try:
                state.apply_transaction(tx)
                transactions_total.labels(event=tx.kind, status="applied").inc()
            except TransactionError as e:
                errors.append(str(e))
                transactions_total.labels(event=tx.kind, status="failed").inc()
                logger.info(f"Transaction failed: {e}")

        # 3. Commit decision
        if len(errors) == len(batch.transactions) or len(state) == 0:
            batches_rejected_total.inc()
            logger.warning(f"Batch rejected: {len(errors)}/{len(batch.transactions)} transactions failed")
            raise BatchError(NO_CHANGE)

        chain.mine_block(state.accounts(), list(batch.network), cancel=cancel, timeout=timeout)
        return MineResult(chain=chain.blocks, errors=errors)
