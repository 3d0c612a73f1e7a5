from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from .models import Candidate, MatchResult, PreferenceProfile, ensure_valid_preference
from .reasons import reasons
from .scoring import score

logger = logging.getLogger(__name__)


def match_order(result: MatchResult) -> tuple[int, str]:
    """Sort key: highest score first, then candidate id ascending."""
    return -result.score, str(getattr(result.candidate, "id", ""))


def _as_candidate(record: Any) -> Candidate | None:
    if isinstance(record, Candidate):
        return record
    try:
        if isinstance(record, Mapping):
            return Candidate.model_validate(record)
        # ORM rows, dataclasses and other attribute-style records
        return Candidate.model_validate(record, from_attributes=True)
    except ValidationError:
        return None


def _record_id(record: Any) -> Any:
    if isinstance(record, Mapping):
        return record.get("id")
    return getattr(record, "id", None)


def _zero_match(record: Any) -> MatchResult:
    if isinstance(record, Candidate):
        candidate = record
    elif isinstance(record, Mapping):
        fields = {k: v for k, v in record.items() if isinstance(k, str)}
        candidate = Candidate.model_construct(**fields)
    else:
        candidate = Candidate.model_construct(id=_record_id(record))
    return MatchResult(candidate=candidate, score=0)


def rank(
    candidates: Iterable[Any],
    preference: PreferenceProfile,
    limit: int | None = None,
) -> list[MatchResult]:
    """
    Score every candidate against ``preference`` and return the results
    best first (ties broken by candidate id).

    Records may be Candidates, mappings or attribute-style objects (ORM
    rows, dataclasses). Raises InvalidPreferenceError before any candidate
    is looked at. A candidate record that does not validate, or whose
    scoring fails, is kept with a score of 0 and no reasons so the rest of
    the batch still ranks.
    """
    ensure_valid_preference(preference)

    results: list[MatchResult] = []
    for record in candidates:
        candidate = _as_candidate(record)
        if candidate is None:
            logger.warning("Candidate %r failed validation, ranking it with score 0", _record_id(record))
            results.append(_zero_match(record))
            continue
        try:
            points = score(candidate, preference)
            explained = reasons(candidate, preference, points)
        except Exception:
            logger.warning(
                "Scoring failed for candidate %r, ranking it with score 0",
                _record_id(candidate),
                exc_info=True,
            )
            results.append(_zero_match(candidate))
            continue
        results.append(MatchResult(candidate=candidate, score=points, reasons=tuple(explained)))

    results.sort(key=match_order)
    if limit is not None:
        return results[:limit]
    return results
