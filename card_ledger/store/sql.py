"""
SQLAlchemy account store.
Persists accounts in the `cards` table; each operation runs in its own
database transaction.
"""

from contextlib import contextmanager
from decimal import Decimal
from typing import Iterator, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from card_ledger.core.exceptions import (
    AccountNotFoundError,
    DomainError,
    DuplicateCardError,
    InsufficientFundsError,
    StorageError,
)
from card_ledger.core.logging import get_logger, mask_card
from card_ledger.core.money import has_funds, to_money
from card_ledger.database import init_db, make_engine, make_session_factory
from card_ledger.models.card import Card
from card_ledger.schemas.account import Account, AccountLookup, Found, NotFound

logger = get_logger(__name__)


class SqlAccountStore:
    """
    Account store over a SQLAlchemy engine.

    The engine is the single long-lived connection resource; it is created
    once at startup and disposed by close().
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._session_factory = make_session_factory(engine)

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        """
        Open a session, commit on success and roll back on any error.

        SQLAlchemy errors become StorageError with the action as context;
        domain errors pass through unchanged.
        """
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except DomainError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Storage failure while trying to %s: %s", action, e)
            raise StorageError(f"Failed to {action}.") from e
        finally:
            db.close()

    @staticmethod
    def _find(db: Session, card_number: str, lock: bool = False) -> Optional[Card]:
        query = select(Card).where(Card.card_number == card_number)
        if lock:
            # Row-level lock on databases that support SELECT FOR UPDATE
            query = query.with_for_update()
        return db.execute(query).scalar_one_or_none()

    def _require(self, db: Session, card_number: str, lock: bool = False) -> Card:
        card = self._find(db, card_number, lock=lock)
        if card is None:
            raise AccountNotFoundError(f"Account {card_number} not found")
        return card

    def insert(self, card_number: str, pin: str, balance: Decimal) -> Account:
        with self._transaction("insert account") as db:
            card = Card(card_number=card_number, pin=pin, balance=to_money(balance))
            db.add(card)
            try:
                db.flush()
            except IntegrityError as e:
                raise DuplicateCardError(f"Account {card_number} already exists") from e
            account = Account.model_validate(card)
        logger.debug("Inserted card %s", mask_card(card_number))
        return account

    def get(self, card_number: str) -> AccountLookup:
        with self._transaction("retrieve account") as db:
            card = self._find(db, card_number)
            if card is None:
                return NotFound(card_number=card_number)
            return Found(account=Account.model_validate(card))

    def update_balance(self, card_number: str, new_balance: Decimal) -> Account:
        with self._transaction("update account balance") as db:
            card = self._require(db, card_number, lock=True)
            card.balance = to_money(new_balance)
            db.flush()
            return Account.model_validate(card)

    def adjust_balance(self, card_number: str, delta: Decimal) -> Account:
        """
        Add a signed amount to the stored balance under a row lock.

        Debits larger than the stored balance raise InsufficientFundsError
        and leave the row untouched.
        """
        delta = to_money(delta)
        with self._transaction("adjust account balance") as db:
            card = self._require(db, card_number, lock=True)

            if not has_funds(card.balance, -delta):
                raise InsufficientFundsError(
                    f"Insufficient funds. Balance: {card.balance}, Required: {-delta}"
                )

            card.balance = to_money(card.balance + delta)
            db.flush()
            return Account.model_validate(card)

    def delete(self, card_number: str) -> None:
        with self._transaction("delete account") as db:
            card = self._require(db, card_number, lock=True)
            db.delete(card)

    def last_identifier(self) -> Optional[str]:
        with self._transaction("retrieve last issued card number") as db:
            return db.execute(
                select(Card.card_number).order_by(Card.id.desc()).limit(1)
            ).scalar_one_or_none()

    def transfer(self, from_card: str, to_card: str, amount: Decimal) -> Account:
        """
        Move money between two accounts in a single transaction.

        Returns the source account as stored after the debit. Both balances
        stay untouched when either card is missing or the source cannot
        cover the amount.
        """
        amount = to_money(amount)
        with self._transaction("transfer funds") as db:
            # Lock accounts in consistent order to prevent deadlocks
            locked = {
                card_number: self._require(db, card_number, lock=True)
                for card_number in sorted({from_card, to_card})
            }
            source = locked[from_card]
            destination = locked[to_card]

            if not has_funds(source.balance, amount):
                raise InsufficientFundsError(
                    f"Insufficient funds. Balance: {source.balance}, Required: {amount}"
                )

            source.balance = to_money(source.balance - amount)
            destination.balance = to_money(destination.balance + amount)
            db.flush()
            return Account.model_validate(source)

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Disconnected from the database.")


def open_store(database_url: str, echo: bool = False) -> SqlAccountStore:
    """
    Connect to the database, create the cards table, and return the store.

    Raises StorageError when the database cannot be reached or initialised.
    """
    try:
        engine = make_engine(database_url, echo=echo)
        init_db(engine)
    except SQLAlchemyError as e:
        raise StorageError("Failed to establish database connection.") from e
    logger.info("Connected to %s", engine.url.render_as_string(hide_password=True))
    return SqlAccountStore(engine)
