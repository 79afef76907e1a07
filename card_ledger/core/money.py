"""Money helpers.

Balances and amounts are Decimal values with two decimal places.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from card_ledger.core.exceptions import InvalidAmountError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

MoneyLike = Union[Decimal, int, float, str]


def to_money(value: MoneyLike) -> Decimal:
    """Convert a number to a two-place Decimal.

    Floats go through ``str`` so 0.1 becomes 0.10 and not its binary
    expansion. Raises InvalidAmountError for anything that is not a finite
    number.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Not an amount: {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        if not amount.is_finite():
            raise InvalidAmountError(f"Not an amount: {value!r}")
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmountError(f"Not an amount: {value!r}") from e


def is_positive(amount: Decimal) -> bool:
    return amount > 0


def has_funds(balance: Decimal, amount: Decimal) -> bool:
    return balance >= amount
