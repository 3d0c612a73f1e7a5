from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from ..matching.models import Candidate
from ..recommendations.cache import clear_cache
from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig

logger = logging.getLogger(__name__)

CANONICAL_COLUMNS: list[str] = [
    "id",
    "brand",
    "model",
    "year",
    "price",
    "fuel_type",
    "car_type",
    "mileage",
    "features",
    "transmission",
    "description",
    "image_url",
]

# Column names used by older catalog exports
_LEGACY_COLUMNS = {"make": "brand", "efficiency": "mileage"}

_catalog: list[Candidate] | None = None


def _read_frame(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path, dtype={"id": str})
    return pd.read_json(path, orient="records", dtype=False)


def _split_features(value: Any) -> Any:
    # CSV catalogs store features as "Bluetooth|Sunroof"
    if isinstance(value, str):
        return [f.strip() for f in value.split("|") if f.strip()]
    return value


def _is_missing(value: Any) -> bool:
    return value is None or (pd.api.types.is_scalar(value) and pd.isna(value))


def normalize_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Fold legacy columns in and make sure every canonical column exists."""
    df = df.copy()
    for legacy, col in _LEGACY_COLUMNS.items():
        if legacy not in df.columns:
            continue
        if col in df.columns:
            df[col] = df[col].where(df[col].notna(), df[legacy])
        else:
            df[col] = df[legacy]
    for col in CANONICAL_COLUMNS:
        if col not in df.columns:
            df[col] = None
    df["features"] = df["features"].apply(_split_features)
    return df[CANONICAL_COLUMNS]


def candidates_from_frame(df: pd.DataFrame) -> list[Candidate]:
    """
    Validate each catalog row into a Candidate.

    Rows that fail validation and rows repeating an earlier id are skipped
    with a warning; the rest of the catalog still loads.
    """
    candidates: list[Candidate] = []
    seen_ids: set[str] = set()
    for record in normalize_frame(df).to_dict(orient="records"):
        cleaned = {k: v for k, v in record.items() if not _is_missing(v)}
        try:
            candidate = Candidate.model_validate(cleaned)
        except ValidationError as exc:
            logger.warning(
                "Skipping catalog row %r: %d validation error(s)",
                cleaned.get("id"),
                exc.error_count(),
                exc_info=True,
            )
            continue
        if candidate.id in seen_ids:
            logger.warning("Skipping catalog row %r: duplicate id", candidate.id)
            continue
        seen_ids.add(candidate.id)
        candidates.append(candidate)
    return candidates


def load_catalog(config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> list[Candidate]:
    df = _read_frame(config.catalog_path)
    candidates = candidates_from_frame(df)
    logger.info("Loaded %d of %d catalog rows from %s", len(candidates), len(df), config.catalog_path)
    return candidates


def get_catalog() -> list[Candidate]:
    """Return the in-memory catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog()
    return _catalog


def clear_catalog() -> None:
    """Drop the loaded catalog and every response ranked from it."""
    global _catalog
    _catalog = None
    clear_cache()
