"""Fixed-point rounding that rounds ties away from zero."""

from decimal import ROUND_HALF_UP, Decimal


def _quantize(value: float, places: int) -> Decimal:
    # Decimal(float) keeps the float's exact binary value
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def round_half_up(value: float, places: int = 2) -> float:
    """Round to ``places`` decimals, ties going away from zero."""
    return float(_quantize(value, places))


def format_fixed(value: float, places: int = 2) -> str:
    """Format with exactly ``places`` decimals, ties going away from zero."""
    return str(_quantize(value, places))
