"""Money arithmetic helpers.

Amounts are persisted as floats. All arithmetic goes through ``Decimal``
and is rounded half-up to cents before being handed back.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    # str() keeps 4.99 as 4.99 instead of its binary float expansion
    return Decimal(str(amount))


def quantize(amount) -> Decimal:
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def to_minor_units(amount) -> int:
    """Convert a major-unit amount (dollars) into minor units (cents)."""
    return int((to_decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def as_float(amount) -> float:
    return float(quantize(amount))
