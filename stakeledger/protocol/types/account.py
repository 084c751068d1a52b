# MIT License
# Copyright (c) 2025 Hashborn

from pydantic import BaseModel, Field
from .common import U64_MAX
from ..config.params import INITIAL_TOKENS, RACK_PRICE

class Account(BaseModel):
    address: str
    staked: int = Field(default=0, ge=0, le=U64_MAX)
    tokens: int = Field(default=INITIAL_TOKENS, ge=0, le=U64_MAX)

    # Note: staked <= tokens is only enforced by the Stake/Unstake guards.
    # A Transfer may leave tokens below staked.

    @classmethod
    def new(cls, address: str, tokens: int = INITIAL_TOKENS) -> "Account":
        return cls(address=address, staked=0, tokens=tokens)

    def can_buy_rack(self, price: int = RACK_PRICE) -> bool:
        """Check if the account can afford a server rack with its unstaked tokens."""
        return self.tokens - self.staked >= price

    def can_stake(self) -> bool:
        """Check if the account has any unstaked tokens."""
        return self.tokens > self.staked

    def can_unstake(self) -> bool:
        return self.staked > 0

    def can_transfer(self, amount: int) -> bool:
        return self.tokens >= amount

    def can_punish(self) -> bool:
        return self.tokens > 0

    def weight_as_miner(self) -> int:
        return self.staked

    def weight_as_validator(self) -> int:
        return self.staked
