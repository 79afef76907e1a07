"""Exception hierarchy for the card ledger.

Domain errors are expected and recoverable: the shell reports them and the
session goes on. Storage and generation errors come from the infrastructure
and propagate to the caller with context attached.
"""


class LedgerError(Exception):
    """Base exception for all card ledger errors."""


class DomainError(LedgerError):
    """Raised when a request breaks a business rule."""


class InvalidAmountError(DomainError):
    """Raised when an amount is zero or negative."""


class InsufficientFundsError(DomainError):
    """Raised when the source balance does not cover the amount."""


class SameAccountError(DomainError):
    """Raised when a transfer targets its own source account."""


class DuplicateCardError(DomainError):
    """Raised when a card number is already present in the store."""


class NonZeroBalanceError(DomainError):
    """Raised when closing an account that still holds money."""


class AccountNotFoundError(DomainError):
    """Raised when a card number is not present in the store."""


class InvalidCredentialsError(DomainError):
    """Raised when a login attempt fails."""


class UnknownCardError(InvalidCredentialsError, AccountNotFoundError):
    """Raised on login with a card number that does not exist."""


class WrongPinError(InvalidCredentialsError):
    """Raised on login with a PIN that does not match."""


class StorageError(LedgerError):
    """Raised when the underlying store fails (I/O, connection, constraints)."""


class GenerationError(LedgerError):
    """Raised when a new card number cannot be derived."""
