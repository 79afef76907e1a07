"""
Luhn check digit calculation and validation for card numbers.
"""


def _luhn_sum(payload: str, double_rightmost: bool) -> int:
    total = 0
    for position, char in enumerate(reversed(payload)):
        digit = int(char)
        if (position % 2 == 0) == double_rightmost:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total


def calculate_check_digit(payload: str) -> int:
    """
    Return the digit that makes ``payload + digit`` pass the Luhn check.

    Every second digit is doubled starting from the rightmost payload digit,
    doubled values above 9 lose 9, and the check digit tops the sum up to the
    next multiple of 10.
    """
    if not payload.isdigit():
        raise ValueError(f"Payload must contain only digits: {payload!r}")
    return (10 - _luhn_sum(payload, double_rightmost=True) % 10) % 10


def validate(number: str) -> bool:
    """
    Check a full card number, check digit included.

    Whitespace is ignored. Anything shorter than two digits, or containing
    non-digits, is invalid.
    """
    cleaned = "".join(number.split())
    if len(cleaned) < 2 or not cleaned.isdigit():
        return False
    return calculate_check_digit(cleaned[:-1]) == int(cleaned[-1])
