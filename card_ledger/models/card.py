"""
Card database model.
One row per issued card: the account it opens and its balance.
"""

from sqlalchemy import Column, Integer, Numeric, String

from card_ledger.database import Base


class Card(Base):
    """
    Cards table - stores card number, PIN and balance.
    """
    __tablename__ = "cards"
    __table_args__ = {"sqlite_autoincrement": True}

    # Insertion order; the most recent card has the highest id
    id = Column(Integer, primary_key=True, autoincrement=True)
    card_number = Column(String(16), unique=True, index=True, nullable=False)
    pin = Column(String(12), nullable=False)
    balance = Column(Numeric(precision=15, scale=2), nullable=False, default=0)

    def __repr__(self):
        return f"<Card(card_number={self.card_number}, balance={self.balance})>"
