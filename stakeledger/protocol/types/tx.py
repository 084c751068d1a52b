# MIT License
# Copyright (c) 2025 Hashborn

from pydantic import BaseModel, Field, model_serializer, model_validator
from typing import Any, Union
from .common import EventKind, U64_MAX

TRANSFER_TAG = "Transfer"

class Transfer(BaseModel):
    """Moves `amount` tokens from the transaction's address to `to`."""
    to: str
    amount: int = Field(ge=0, le=U64_MAX)

    @model_validator(mode="before")
    @classmethod
    def _unwrap_tag(cls, value: Any) -> Any:
        # Wire form is externally tagged: {"Transfer": ["Tom", 1]}
        if isinstance(value, dict) and TRANSFER_TAG in value:
            inner = value[TRANSFER_TAG]
            if isinstance(inner, (list, tuple)):
                if len(inner) != 2:
                    raise ValueError("Transfer expects [to, amount]")
                return {"to": inner[0], "amount": inner[1]}
            return inner
        return value

    @model_serializer
    def _tagged(self) -> dict:
        return {TRANSFER_TAG: [self.to, self.amount]}

Event = Union[Transfer, EventKind]

class Transaction(BaseModel):
    address: str
    event: Event

    @property
    def kind(self) -> str:
        """Event name, e.g. "Stake" or "Transfer"."""
        if isinstance(self.event, Transfer):
            return TRANSFER_TAG
        return self.event.value
