"""Exact number handling for holdings, allocations and contributions."""

from decimal import Decimal
from fractions import Fraction
from numbers import Rational

from .errors import InvalidArgumentError

Number = int | float | str | Decimal | Fraction


def to_fraction(value: Number) -> Fraction:
    """Convert a user supplied number to an exact Fraction.

    Floats go through their shortest repr, so ``0.1`` becomes ``1/10``
    rather than its binary approximation. Strings may be decimals
    (``"0.35"``) or ratios (``"7/20"``).
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"Expected a number, got {value!r}")
    if isinstance(value, Rational):
        return Fraction(value)
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str):
        value = value.strip()
    elif not isinstance(value, Decimal):
        raise InvalidArgumentError(f"Expected a number, got {type(value).__name__}")

    try:
        return Fraction(value)
    except (ValueError, ZeroDivisionError, OverflowError) as e:
        raise InvalidArgumentError(f"Invalid number: {value!r}") from e


def to_fraction_map(values: dict[str, Number]) -> dict[str, Fraction]:
    return {name: to_fraction(amount) for name, amount in values.items()}


def to_decimal(value: Fraction) -> Decimal:
    """Decimal approximation of a Fraction, for display only."""
    return Decimal(value.numerator) / Decimal(value.denominator)
