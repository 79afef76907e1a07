"""Account store Protocol.

The ledger engine and the card generator only see this contract; the
SQLAlchemy store and the in-memory store both implement it.

Every operation is atomic. adjust_balance applies a signed change to the
stored balance and refuses to take it below zero (InsufficientFundsError).
Missing card numbers raise AccountNotFoundError, duplicates raise
DuplicateCardError, and infrastructure failures raise StorageError.
"""

from decimal import Decimal
from typing import Optional, Protocol

from card_ledger.schemas.account import Account, AccountLookup


class AccountStore(Protocol):
    def insert(self, card_number: str, pin: str, balance: Decimal) -> Account: ...

    def get(self, card_number: str) -> AccountLookup: ...

    def update_balance(self, card_number: str, new_balance: Decimal) -> Account: ...

    def adjust_balance(self, card_number: str, delta: Decimal) -> Account: ...

    def delete(self, card_number: str) -> None: ...

    def last_identifier(self) -> Optional[str]: ...

    def transfer(self, from_card: str, to_card: str, amount: Decimal) -> Account: ...

    def close(self) -> None: ...
