"""
Database models package.
"""

from card_ledger.models.card import Card

__all__ = ["Card"]
