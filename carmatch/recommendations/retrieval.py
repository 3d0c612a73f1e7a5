from __future__ import annotations

import logging
import time

from ..analytics.aggregator import summarize
from ..catalog.data_store import get_catalog
from ..matching.models import parse_preference
from ..matching.ranking import rank
from ..matching.views import view
from .cache import cache_get, cache_set
from .models import RecommendationRequest, RecommendationResponse

logger = logging.getLogger(__name__)


def get_recommendations(request: RecommendationRequest) -> RecommendationResponse:
    """
    Rank the catalog for ``request.preference`` and shape it for display.

    Insights describe the full ranking; the tier filter, sort order and
    limit only affect ``results``. Raises InvalidPreferenceError for a
    mis-ordered budget.
    """
    start_time = time.time()
    preference = parse_preference(request.preference)

    # --- Cache check ---
    request_dict = request.model_dump(mode="json")
    cached = cache_get(request_dict)
    if cached is not None:
        return cached

    candidates = get_catalog()

    # --- Scoring ---
    ranked = rank(candidates, preference)
    insights = summarize(ranked)

    # --- View ---
    shown = view(ranked, request.sort_by, request.tier)[: request.limit]

    response = RecommendationResponse(
        results=shown,
        insights=insights,
        total_candidates=len(ranked),
    )
    cache_set(request_dict, response)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    logger.debug("Ranked %d candidates in %.1f ms, returning %d", len(ranked), elapsed_ms, len(shown))
    return response
