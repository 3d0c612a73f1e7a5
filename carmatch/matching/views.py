from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable

from .models import MatchResult
from .numbers import as_number
from .ranking import match_order


class SortKey(str, Enum):
    match = "match"
    price_low = "price-low"
    price_high = "price-high"
    efficiency = "efficiency"


class TierFilter(str, Enum):
    all = "all"
    high = "high"
    good = "good"


def _candidate_id(result: MatchResult) -> str:
    return str(getattr(result.candidate, "id", ""))


def _by_price_low(result: MatchResult) -> tuple:
    price = as_number(getattr(result.candidate, "price", None))
    return price is None, price or 0.0, _candidate_id(result)


def _by_price_high(result: MatchResult) -> tuple:
    price = as_number(getattr(result.candidate, "price", None))
    return price is None, -(price or 0.0), _candidate_id(result)


def _by_efficiency(result: MatchResult) -> tuple:
    mileage = as_number(getattr(result.candidate, "mileage", None))
    return mileage is None, -(mileage or 0.0), _candidate_id(result)


_SORT_KEYS: dict[SortKey, Callable[[MatchResult], tuple]] = {
    SortKey.match: match_order,
    SortKey.price_low: _by_price_low,
    SortKey.price_high: _by_price_high,
    SortKey.efficiency: _by_efficiency,
}


def view(
    results: Iterable[MatchResult],
    sort_key: SortKey | str = SortKey.match,
    tier_filter: TierFilter | str = TierFilter.all,
) -> list[MatchResult]:
    """
    Re-project already scored results for display: keep the requested tier,
    then sort. Returns a new list; the results themselves are untouched.

    Raises ValueError for an unknown sort key or tier filter.
    """
    sort_key = SortKey(sort_key)
    tier_filter = TierFilter(tier_filter)

    if tier_filter is TierFilter.all:
        selected = list(results)
    else:
        selected = [r for r in results if r.tier == tier_filter.value]
    return sorted(selected, key=_SORT_KEYS[sort_key])
