"""
Card Ledger - card-number based account management with a durable ledger.
"""

__version__ = "1.0.0"
