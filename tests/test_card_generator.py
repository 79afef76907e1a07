"""
Tests for card number and PIN generation.
"""

from decimal import Decimal

import pytest

from card_ledger.core.exceptions import GenerationError, StorageError
from card_ledger.services.card_generator import CardGenerator
from card_ledger.services.luhn import calculate_check_digit, validate
from tests.conftest import FIRST_CARD, SECOND_CARD, FixedRandom


# ==================== CARD NUMBER TESTS ====================

def test_first_card_on_empty_store(memory_store):
    """An empty store starts the sequence at 1."""
    assert CardGenerator().next_card_number(memory_store) == FIRST_CARD


def test_card_format(memory_store):
    card_number = CardGenerator().next_card_number(memory_store)
    assert len(card_number) == 16
    assert card_number.isdigit()
    assert card_number.startswith("400000")
    assert validate(card_number)


def test_sequence_increases_by_one(store):
    """Consecutive cards differ by exactly one in the sequence and stay valid."""
    generator = CardGenerator()
    previous = None
    for _ in range(5):
        card_number = generator.next_card_number(store)
        assert validate(card_number)
        if previous is not None:
            assert CardGenerator.sequence_of(card_number) == CardGenerator.sequence_of(previous) + 1
        store.insert(card_number, "0000", Decimal("0"))
        previous = card_number


def test_second_card(memory_store):
    generator = CardGenerator()
    memory_store.insert(generator.next_card_number(memory_store), "0000", Decimal("0"))
    assert generator.next_card_number(memory_store) == SECOND_CARD


def test_custom_bin(memory_store):
    card_number = CardGenerator(bin_prefix="123456").next_card_number(memory_store)
    assert card_number.startswith("123456000000001")
    assert validate(card_number)


def test_invalid_bin():
    with pytest.raises(ValueError):
        CardGenerator(bin_prefix="12345")


def test_malformed_last_card(memory_store):
    """A stored number that is not 16 digits cannot be continued."""
    memory_store.insert("12345", "0000", Decimal("0"))
    with pytest.raises(GenerationError):
        CardGenerator().next_card_number(memory_store)


def test_sequence_exhausted(memory_store):
    payload = "400000999999999"
    memory_store.insert(payload + str(calculate_check_digit(payload)), "0000", Decimal("0"))
    with pytest.raises(GenerationError):
        CardGenerator().next_card_number(memory_store)


def test_store_failure_becomes_generation_error(memory_store):
    memory_store.close()
    with pytest.raises(GenerationError) as exc_info:
        CardGenerator().next_card_number(memory_store)
    assert isinstance(exc_info.value.__cause__, StorageError)


# ==================== PIN TESTS ====================

def test_pin_is_zero_padded():
    assert CardGenerator(rng=FixedRandom(7)).generate_pin() == "0007"


def test_pin_format():
    generator = CardGenerator()
    for _ in range(50):
        pin = generator.generate_pin()
        assert len(pin) == 4
        assert pin.isdigit()


def test_pin_length_is_configurable():
    assert CardGenerator(pin_length=6, rng=FixedRandom(42)).generate_pin() == "000042"
