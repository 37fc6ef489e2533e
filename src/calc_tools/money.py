"""Currency rounding helpers."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_cents(amount: Decimal) -> Decimal:
    """
    Quantize a Decimal amount to currency precision.
    Uses ROUND_HALF_UP for consistency.

    Args:
        amount: Amount as Decimal

    Returns:
        Amount rounded to 2 decimal places
    """
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)
