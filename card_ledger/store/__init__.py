"""
Account stores: the contract and its SQLAlchemy and in-memory implementations.
"""

from card_ledger.store.base import AccountStore
from card_ledger.store.memory import InMemoryAccountStore
from card_ledger.store.sql import SqlAccountStore, open_store

__all__ = ["AccountStore", "InMemoryAccountStore", "SqlAccountStore", "open_store"]
