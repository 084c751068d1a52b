# MIT License
# Copyright (c) 2025 Hashborn

import time
import logging
import threading
from typing import TYPE_CHECKING, Callable, List, Optional
from ...protocol.types.account import Account
from ...protocol.types.block import Block
from ...protocol.types.common import MiningAborted
from ...protocol.crypto.hash import calculate_hash, hash_to_binary
from ...protocol.config.params import CURRENT_NETWORK, LedgerConfig
from ..observability.metrics import mining_aborted_total, update_block_metrics

if TYPE_CHECKING:
    from ..core.chain import Blockchain

logger = logging.getLogger(__name__)

# How often (in attempts) cancellation and timeout are polled
CHECK_INTERVAL = 1_000

class BlockSealer:
    """
    Seals blocks by searching for a nonce whose binary-text hash starts with
    the difficulty prefix.

    The search is the only long-running step of the ledger. It stops when a
    nonce is found, when `max_nonce_attempts` is reached, when `cancel` is
    set or when `timeout` expires; the last three raise MiningAborted.
    """

    def __init__(self, config: Optional[LedgerConfig] = None, clock: Callable[[], float] = time.time):
        self.config = config or CURRENT_NETWORK
        self.clock = clock
        self.on_progress: Optional[Callable[[int], None]] = None

    def seal(self,
             chain: "Blockchain",
             data: List[Account],
             network: List[str],
             cancel: Optional[threading.Event] = None,
             timeout: Optional[float] = None,
             max_attempts: Optional[int] = None) -> Block:
        """
        Builds and seals the block that would follow `chain`. Does not append it.

        Args:
            chain: Chain the block extends
            data: Accounts changed by the block
            network: Participant addresses, caps the validator count
            cancel: Set from another thread to stop the search
            timeout: Seconds before giving up (None = no limit)
            max_attempts: Overrides config.max_nonce_attempts

        Returns:
            The sealed Block
        """
        # 1. Header fields
        id = len(chain)
        next_miner = chain.get_next_miner()
        next_validators = chain.get_next_validators(next_miner, network)
        previous_hash = chain.last_hash
        timestamp = int(self.clock())
        accounts = [account.model_dump() for account in data]

        if max_attempts is None:
            max_attempts = self.config.max_nonce_attempts
        prefix = self.config.difficulty_prefix
        progress_interval = self.config.progress_interval
        deadline = time.monotonic() + timeout if timeout is not None else None

        logger.info(f"Mining block {id}: {len(data)} accounts, miner {next_miner}, "
                    f"{len(next_validators)} validators, difficulty '{prefix}'")

        # 2. Nonce search
        if cancel is not None and cancel.is_set():
            self._abort("cancelled", 0)
        started = time.monotonic()
        nonce = 0
        while True:
            hash = hash_to_binary(calculate_hash(
                accounts, id, next_miner, next_validators, nonce, previous_hash, timestamp
            ))
            if hash.startswith(prefix):
                break

            nonce += 1
            if max_attempts is not None and nonce >= max_attempts:
                self._abort("exhausted", nonce)
            if nonce % progress_interval == 0:
                logger.info(f"Mining block {id}: {nonce} attempts so far")
                if self.on_progress:
                    self.on_progress(nonce)
            if nonce % CHECK_INTERVAL == 0:
                if cancel is not None and cancel.is_set():
                    self._abort("cancelled", nonce)
                if deadline is not None and time.monotonic() >= deadline:
                    self._abort("timeout", nonce)

        duration = time.monotonic() - started
        block = Block(
            id=id,
            hash=hash,
            previous_hash=previous_hash,
            timestamp=timestamp,
            data=[account.model_copy() for account in data],
            nonce=nonce,
            next_miner=next_miner,
            next_validators=next_validators,
        )
        update_block_metrics(block, nonce + 1, duration)
        logger.info(f"Sealed block {id} with nonce {nonce} in {duration:.3f}s")
        return block

    def _abort(self, reason: str, attempts: int):
        mining_aborted_total.labels(reason=reason).inc()
        logger.warning(f"Mining aborted ({reason}) after {attempts} attempts")
        raise MiningAborted(reason, attempts)
