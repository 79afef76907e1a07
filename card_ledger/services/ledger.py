"""
Ledger engine.
Creates and closes accounts, authenticates logins, and moves money while
keeping every balance non-negative.
"""

from decimal import Decimal
from typing import Optional

from card_ledger.core.config import Settings
from card_ledger.core.exceptions import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    InvalidCredentialsError,
    NonZeroBalanceError,
    SameAccountError,
    StorageError,
    UnknownCardError,
    WrongPinError,
)
from card_ledger.core.logging import get_logger, mask_card
from card_ledger.core.money import ZERO, MoneyLike, has_funds, is_positive, to_money
from card_ledger.schemas.account import Account, Found
from card_ledger.services.card_generator import CardGenerator
from card_ledger.store.base import AccountStore

logger = get_logger(__name__)


class LedgerEngine:
    """
    Business rules on top of an account store.

    Accounts handed to the engine are transient copies. The engine updates
    a copy only after the store has accepted the change, so a failed write
    never leaves the copy ahead of the database.
    """

    def __init__(
        self,
        store: AccountStore,
        generator: Optional[CardGenerator] = None,
        settings: Optional[Settings] = None,
    ):
        self.store = store
        self.settings = settings or Settings()
        self.generator = generator or CardGenerator(
            bin_prefix=self.settings.CARD_BIN,
            pin_length=self.settings.PIN_LENGTH,
        )

    def _lookup(self, card_number: str, action: str) -> Optional[Account]:
        try:
            result = self.store.get(card_number)
        except StorageError as e:
            raise StorageError(f"Failed to {action}.") from e
        return result.account if isinstance(result, Found) else None

    @staticmethod
    def _positive_amount(amount: MoneyLike, message: str) -> Decimal:
        value = to_money(amount)
        if not is_positive(value):
            raise InvalidAmountError(message)
        return value

    def create_account(self) -> Account:
        """
        Issue a new card with a random PIN and a zero balance.
        """
        card_number = self.generator.next_card_number(self.store)
        pin = self.generator.generate_pin()

        try:
            account = self.store.insert(card_number, pin, ZERO)
        except StorageError as e:
            raise StorageError("Failed to create account.") from e

        logger.info("Created account %s", mask_card(card_number))
        return account

    def authenticate(self, card_number: str, pin: str) -> Account:
        """
        Return the account when the card exists and the PIN matches.

        Missing cards and wrong PINs raise different errors unless
        UNIFY_LOGIN_ERRORS is set, in which case both raise the same
        InvalidCredentialsError.
        """
        account = self._lookup(card_number, "log in")

        if account is not None and account.pin == pin:
            logger.info("Login for %s", mask_card(card_number))
            return account

        logger.info("Rejected login for %s", mask_card(card_number))
        if self.settings.UNIFY_LOGIN_ERRORS:
            raise InvalidCredentialsError("Wrong card number or PIN.")
        if account is None:
            raise UnknownCardError("The account does not exist.")
        raise WrongPinError("Wrong PIN.")

    def balance(self, account: Account) -> Decimal:
        """
        Re-read the stored balance and refresh the copy.
        """
        current = self._lookup(account.card_number, "read balance")
        if current is None:
            raise AccountNotFoundError("The account does not exist.")
        account.balance = current.balance
        return account.balance

    def deposit(self, account: Account, amount: MoneyLike) -> Decimal:
        """
        Add income to the account. Returns the new balance.

        The store applies the amount to its own balance, so a stale copy
        cannot overwrite changes made since it was read.
        """
        value = self._positive_amount(amount, "Income amount must be positive.")

        try:
            stored = self.store.adjust_balance(account.card_number, value)
        except StorageError as e:
            raise StorageError("Failed to add income.") from e

        account.balance = stored.balance
        logger.info("Deposited %s to %s", value, mask_card(account.card_number))
        return account.balance

    def withdraw(self, account: Account, amount: MoneyLike) -> Decimal:
        """
        Take money out of the account. Returns the new balance.

        Funds are checked against the copy first and again against the
        stored balance when the store applies the debit.
        """
        value = self._positive_amount(amount, "Withdrawal amount must be positive.")
        if not has_funds(account.balance, value):
            raise InsufficientFundsError("Insufficient funds.")

        try:
            stored = self.store.adjust_balance(account.card_number, -value)
        except StorageError as e:
            raise StorageError("Failed to subtract income.") from e

        account.balance = stored.balance
        logger.info("Withdrew %s from %s", value, mask_card(account.card_number))
        return account.balance

    def transfer_funds(self, account: Account, to_card: str, amount: MoneyLike) -> Decimal:
        """
        Move money to another card. Returns the source's new balance.

        The store performs the debit and the credit in one transaction and
        checks the funds again against the stored balance.
        """
        value = self._positive_amount(amount, "The amount must be positive.")

        if to_card == account.card_number:
            raise SameAccountError("You can't transfer money to the same account.")

        if self._lookup(to_card, "transfer funds") is None:
            raise AccountNotFoundError(f"The account with card {to_card} does not exist.")

        if not has_funds(account.balance, value):
            raise InsufficientFundsError("Insufficient funds.")

        try:
            stored = self.store.transfer(account.card_number, to_card, value)
        except StorageError as e:
            raise StorageError("Failed to transfer funds.") from e

        account.balance = stored.balance
        logger.info(
            "Transferred %s from %s to %s",
            value,
            mask_card(account.card_number),
            mask_card(to_card),
        )
        return account.balance

    def close_account(self, account: Account) -> None:
        """
        Delete the account.

        With REQUIRE_ZERO_BALANCE_ON_CLOSE set, accounts that still hold
        money are refused.
        """
        current = self._lookup(account.card_number, "close account")
        if current is None:
            raise AccountNotFoundError("The account does not exist.")

        if self.settings.REQUIRE_ZERO_BALANCE_ON_CLOSE and current.balance != 0:
            raise NonZeroBalanceError(
                f"Withdraw the remaining balance of {current.balance} first."
            )

        try:
            self.store.delete(account.card_number)
        except StorageError as e:
            raise StorageError("Failed to close account.") from e

        logger.info("Closed account %s", mask_card(account.card_number))
