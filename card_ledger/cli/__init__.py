"""
Interactive console front end.
"""

from card_ledger.cli.client import BankingClient
from card_ledger.cli.input_reader import InputReader

__all__ = ["BankingClient", "InputReader"]
