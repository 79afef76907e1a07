"""
Tests for Luhn check digit calculation and validation.
"""

import random

import pytest

from card_ledger.services.luhn import calculate_check_digit, validate


# ==================== CHECK DIGIT TESTS ====================

def test_check_digit_known_values():
    """Check digits of well-known Luhn numbers."""
    assert calculate_check_digit("7992739871") == 3
    assert calculate_check_digit("411111111111111") == 1


def test_check_digit_of_first_cards():
    """The first two issued card numbers end in 0 and 8."""
    assert calculate_check_digit("400000000000001") == 0
    assert calculate_check_digit("400000000000002") == 8


def test_check_digit_rejects_non_digits():
    with pytest.raises(ValueError):
        calculate_check_digit("4000a")


def test_appended_check_digit_always_validates():
    """Any payload plus its own check digit is a valid number."""
    rng = random.Random(7)
    for _ in range(200):
        length = rng.randint(1, 20)
        payload = "".join(rng.choice("0123456789") for _ in range(length))
        assert validate(payload + str(calculate_check_digit(payload)))


# ==================== VALIDATION TESTS ====================

def test_validate_accepts_valid_numbers():
    assert validate("79927398713")
    assert validate("4111111111111111")
    assert validate("4000000000000010")


def test_validate_ignores_whitespace():
    assert validate("4111 1111 1111 1111")
    assert validate(" 7992739871 3\n")


@pytest.mark.parametrize("number", ["", "0", "5", "  7  "])
def test_validate_rejects_short_input(number):
    """Fewer than two digits is never valid."""
    assert validate(number) is False


def test_validate_rejects_wrong_check_digit():
    assert validate("79927398710") is False
    assert validate("4000000000000011") is False


def test_validate_rejects_non_digits():
    assert validate("4111-1111-1111-1111") is False
    assert validate("abcd") is False
