"""
Pydantic schemas for accounts and account lookups.
"""

from decimal import Decimal
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    """
    In-memory copy of a stored account.

    Obtained from a store lookup and discarded after the operation that
    needed it; the store stays the source of truth.
    """
    card_number: str = Field(..., min_length=2, max_length=16, pattern=r"^\d+$")
    pin: str = Field(..., min_length=1, max_length=12, pattern=r"^\d+$")
    balance: Decimal = Field(default=Decimal("0.00"), decimal_places=2)

    model_config = ConfigDict(from_attributes=True, validate_assignment=True)

    def __str__(self) -> str:
        return f"Card number: {self.card_number}, PIN: {self.pin}"


class Found(BaseModel):
    """Lookup result for a card number that exists."""
    account: Account


class NotFound(BaseModel):
    """Lookup result for a card number that does not exist."""
    card_number: str


AccountLookup = Union[Found, NotFound]
