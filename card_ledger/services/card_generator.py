"""
Card number and PIN generation.
"""

import random
from typing import Optional

from card_ledger.core.exceptions import GenerationError, StorageError
from card_ledger.core.logging import get_logger
from card_ledger.services.luhn import calculate_check_digit
from card_ledger.store.base import AccountStore

logger = get_logger(__name__)

SEQUENCE_LENGTH = 9
CARD_LENGTH = 6 + SEQUENCE_LENGTH + 1


class CardGenerator:
    """
    Issues card numbers as BIN + 9-digit sequence + Luhn check digit,
    continuing from the last card number in the store.
    """

    def __init__(
        self,
        bin_prefix: str = "400000",
        pin_length: int = 4,
        rng: Optional[random.Random] = None,
    ):
        if len(bin_prefix) != 6 or not bin_prefix.isdigit():
            raise ValueError(f"BIN must be 6 digits, got {bin_prefix!r}")
        self.bin_prefix = bin_prefix
        self.pin_length = pin_length
        self._rng = rng or random.Random()

    def next_card_number(self, store: AccountStore) -> str:
        """
        Build the card number that follows the last one issued.

        Raises GenerationError if the store cannot be queried, if the last
        card number is malformed, or if the sequence is exhausted.
        """
        try:
            last = store.last_identifier()
        except StorageError as e:
            raise GenerationError("Failed to read the last issued card number.") from e

        sequence = self.sequence_of(last) + 1 if last is not None else 1
        if sequence >= 10 ** SEQUENCE_LENGTH:
            raise GenerationError("Card number sequence exhausted.")

        payload = f"{self.bin_prefix}{sequence:0{SEQUENCE_LENGTH}d}"
        card_number = f"{payload}{calculate_check_digit(payload)}"
        logger.debug("Derived card sequence %d", sequence)
        return card_number

    @staticmethod
    def sequence_of(card_number: str) -> int:
        """Extract the sequence component of a stored card number."""
        if len(card_number) != CARD_LENGTH or not card_number.isdigit():
            raise GenerationError(f"Malformed card number in store: {card_number!r}")
        return int(card_number[6:6 + SEQUENCE_LENGTH])

    def generate_pin(self) -> str:
        """Random zero-padded PIN; PINs may repeat across accounts."""
        return f"{self._rng.randrange(10 ** self.pin_length):0{self.pin_length}d}"
