"""Half-up rounding shared by every stage.

Python's round() uses banker's rounding; quotes round .5 up.
"""

from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from zero."""
    # Absorb float noise (e.g. 2362.4999999999995) before rounding
    return int(Decimal(str(round(value, 6))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def round_to_unit(value: float, unit: int) -> int:
    """Round to the nearest multiple of unit (10 for hours, 1000 for money)."""
    return round_half_up(value / unit) * unit
