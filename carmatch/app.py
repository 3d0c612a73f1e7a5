from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .catalog.data_store import get_catalog
from .matching.errors import InvalidPreferenceError
from .matching.models import CarCategory, Candidate, FuelType, Transmission
from .matching.views import SortKey, TierFilter
from .recommendations.cache import get_cache_stats
from .recommendations.models import (
    MetadataResponse,
    RecommendationRequest,
    RecommendationResponse,
)
from .recommendations.retrieval import get_recommendations

app = FastAPI(title="CarMatch Recommendation API", version="1.0.0")


@app.exception_handler(InvalidPreferenceError)
async def invalid_preference_handler(request: Request, exc: InvalidPreferenceError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata", response_model=MetadataResponse)
def metadata() -> MetadataResponse:
    brands = sorted({c.brand for c in get_catalog()})
    return MetadataResponse(
        fuel_types=[f.value for f in FuelType if f is not FuelType.other],
        car_types=[c.value for c in CarCategory if c is not CarCategory.other],
        transmissions=[t.value for t in Transmission if t is not Transmission.other],
        sort_keys=[s.value for s in SortKey],
        tier_filters=[t.value for t in TierFilter],
        brands=brands,
    )


@app.get("/cars", response_model=list[Candidate])
def cars() -> list[Candidate]:
    return get_catalog()


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    return get_recommendations(body)


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_cache_stats()
