from __future__ import annotations

from pydantic import BaseModel, Field

from ..matching.models import Insights, MatchResult, PreferenceProfile
from ..matching.views import SortKey, TierFilter
from .config import DEFAULT_RECOMMENDATION_CONFIG


class RecommendationRequest(BaseModel):
    preference: PreferenceProfile
    sort_by: SortKey = Field(default=SortKey.match, description="match, price-low, price-high or efficiency")
    tier: TierFilter = Field(default=TierFilter.all, description="all, high (>= 80) or good (60-79)")
    limit: int = Field(
        default=DEFAULT_RECOMMENDATION_CONFIG.default_limit,
        ge=1,
        le=DEFAULT_RECOMMENDATION_CONFIG.max_limit,
    )


class RecommendationResponse(BaseModel):
    results: list[MatchResult]
    insights: Insights = Field(description="Computed over every ranked candidate, before tier/limit")
    total_candidates: int


class MetadataResponse(BaseModel):
    fuel_types: list[str]
    car_types: list[str]
    transmissions: list[str]
    sort_keys: list[str]
    tier_filters: list[str]
    brands: list[str]
