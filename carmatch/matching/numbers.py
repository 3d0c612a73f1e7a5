from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any


def as_number(value: Any) -> float | None:
    """Return ``value`` as a finite float, or None if it is not one."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (42.5 -> 43)."""
    # str() first so 64.5 is not seen as 64.4999999...
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
