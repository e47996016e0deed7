"""
Money amounts for the player auction.

Amounts are exact integers counted in "units". One crore (CR) is
1_000_000_000_000 units, so a bidder's default purse of 10 CR is
10_000_000_000_000 units. Floats never enter the core.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

Amount = int

UNITS_PER_CRORE: Amount = 1_000_000_000_000
DEFAULT_BUDGET_CRORES = 10


def as_amount(value) -> Amount:
    """Validate that value is a non-negative integral amount."""
    # bool is an int subclass but never a meaningful amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Amount must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Amount must not be negative, got {value}")
    return value


def crores(value: Union[int, str, Decimal]) -> Amount:
    """
    Convert a number of crores into units.

    Accepts ints, decimal strings ("2.5") and Decimals. Floats are refused
    because they cannot represent most decimal fractions exactly.
    """
    if isinstance(value, float):
        raise TypeError("Use a string or Decimal for fractional crores, not float")
    try:
        units = Decimal(value) * UNITS_PER_CRORE
    except InvalidOperation:
        raise ValueError(f"Not a number of crores: {value!r}")
    if units != units.to_integral_value():
        raise ValueError(f"{value} CR is not a whole number of units")
    return as_amount(int(units))


DEFAULT_INITIAL_BUDGET: Amount = DEFAULT_BUDGET_CRORES * UNITS_PER_CRORE
