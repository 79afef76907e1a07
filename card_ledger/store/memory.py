"""
In-memory account store.
Same contract as the SQL store; holds accounts in an insertion-ordered dict.
"""

from decimal import Decimal
from typing import Dict, Optional

from card_ledger.core.exceptions import (
    AccountNotFoundError,
    DuplicateCardError,
    InsufficientFundsError,
    StorageError,
)
from card_ledger.core.money import has_funds, to_money
from card_ledger.schemas.account import Account, AccountLookup, Found, NotFound


class InMemoryAccountStore:
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self):
        self._accounts: Dict[str, Account] = {}
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise StorageError("Store is closed.")

    def _require(self, card_number: str) -> Account:
        account = self._accounts.get(card_number)
        if account is None:
            raise AccountNotFoundError(f"Account {card_number} not found")
        return account

    def insert(self, card_number: str, pin: str, balance: Decimal) -> Account:
        self._check_open()
        if card_number in self._accounts:
            raise DuplicateCardError(f"Account {card_number} already exists")
        account = Account(card_number=card_number, pin=pin, balance=to_money(balance))
        self._accounts[card_number] = account
        return account.model_copy()

    def get(self, card_number: str) -> AccountLookup:
        self._check_open()
        account = self._accounts.get(card_number)
        if account is None:
            return NotFound(card_number=card_number)
        return Found(account=account.model_copy())

    def update_balance(self, card_number: str, new_balance: Decimal) -> Account:
        self._check_open()
        account = self._require(card_number)
        account.balance = to_money(new_balance)
        return account.model_copy()

    def adjust_balance(self, card_number: str, delta: Decimal) -> Account:
        self._check_open()
        delta = to_money(delta)
        account = self._require(card_number)

        if not has_funds(account.balance, -delta):
            raise InsufficientFundsError(
                f"Insufficient funds. Balance: {account.balance}, Required: {-delta}"
            )

        account.balance = account.balance + delta
        return account.model_copy()

    def delete(self, card_number: str) -> None:
        self._check_open()
        self._require(card_number)
        del self._accounts[card_number]

    def last_identifier(self) -> Optional[str]:
        self._check_open()
        if not self._accounts:
            return None
        return next(reversed(self._accounts))

    def transfer(self, from_card: str, to_card: str, amount: Decimal) -> Account:
        self._check_open()
        amount = to_money(amount)
        source = self._require(from_card)
        destination = self._require(to_card)

        if not has_funds(source.balance, amount):
            raise InsufficientFundsError(
                f"Insufficient funds. Balance: {source.balance}, Required: {amount}"
            )

        source.balance -= amount
        destination.balance += amount
        return source.model_copy()

    def close(self) -> None:
        self._closed = True
