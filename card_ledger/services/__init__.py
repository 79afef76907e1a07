"""
Ledger services: checksum, card issuing and the ledger engine.
"""
