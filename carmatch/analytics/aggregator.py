from __future__ import annotations

from collections import Counter
from typing import Iterable

from ..matching.models import Insights, MatchResult
from ..matching.numbers import as_number, round_half_away
from ..matching.ranking import match_order


def summarize(results: Iterable[MatchResult]) -> Insights:
    """
    Summarise a set of match results for the results page.

    Tier counts use the fixed boundaries (high >= 80, good 60-79). The
    average is rounded half away from zero; the top recommendation is the
    highest score, ties going to the lowest candidate id.
    """
    results = list(results)
    total = len(results)
    if not total:
        return Insights()

    tiers: Counter[str | None] = Counter(r.tier for r in results)
    average = round_half_away(sum(r.score for r in results) / total)
    top = min(results, key=match_order)

    # Price range over whatever prices are readable
    prices = [
        price
        for price in (as_number(getattr(r.candidate, "price", None)) for r in results)
        if price is not None
    ]
    price_range = (min(prices), max(prices)) if prices else None

    return Insights(
        total=total,
        high_matches=tiers["high"],
        good_matches=tiers["good"],
        average_score=average,
        top_recommendation=top,
        price_range=price_range,
    )
