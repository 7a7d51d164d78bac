import math
from typing import Any, Optional

CENTS = 2


def round_money(value: Any) -> float:
    """Round a currency (or minute) figure to 2 places for display. None -> 0.0"""
    if value is None:
        return 0.0
    return round(float(value), CENTS)


def parse_positive_amount(value: Any) -> Optional[float]:
    """
    Coerce a user-supplied amount (number or numeric string) to float.
    Returns None unless the result is a finite number greater than zero.
    """
    if isinstance(value, bool) or value is None:
        return None

    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount
