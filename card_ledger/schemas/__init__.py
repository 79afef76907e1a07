"""
Pydantic schemas package.
"""

from card_ledger.schemas.account import Account, AccountLookup, Found, NotFound

__all__ = [
    "Account",
    "AccountLookup",
    "Found",
    "NotFound",
]
