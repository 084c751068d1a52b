# MIT License
# Copyright (c) 2025 Hashborn

from enum import Enum

U64_MAX = 2**64 - 1

class EventKind(str, Enum):
    ADD_ACCOUNT = "AddAccount"
    PUNISH = "Punish"     # Declared, not processed
    REWARD = "Reward"     # Declared, not processed
    STAKE = "Stake"
    UNSTAKE = "Unstake"

class ProtocolError(Exception):
    pass

class LedgerError(ProtocolError):
    pass

class InputError(LedgerError):
    """Input could not be decoded into the data model."""
    pass

class TransactionError(LedgerError):
    """A single transaction failed its guard. Collected, never fatal for the batch."""
    pass

class BatchError(LedgerError):
    """Every transaction of a batch failed, or nothing changed."""
    pass

class BlockValidationError(LedgerError):
    pass

class ChainTooShortError(LedgerError):
    pass

class MiningAborted(LedgerError):
    def __init__(self, reason: str, attempts: int):
        super().__init__(f"Mining aborted ({reason}) after {attempts} attempts")
        self.reason = reason
        self.attempts = attempts
