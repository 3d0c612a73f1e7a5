from __future__ import annotations

import logging
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from carmatch.matching import scoring
from carmatch.matching.errors import InvalidPreferenceError
from carmatch.matching.models import Candidate, PreferenceProfile
from carmatch.matching.ranking import rank

PREFERENCE = PreferenceProfile(
    budget_min=20000,
    budget_max=40000,
    fuel_type="hybrid",
    car_type="sedan",
    mileage_min=30,
    brand_preference=["Toyota", "Honda"],
)

CATALOG = [
    Candidate(id="1", brand="Toyota", model="Camry", price=25000, fuel_type="Hybrid", car_type="Sedan", mileage=50),
    Candidate(id="2", brand="Honda", model="CR-V", price=28000, fuel_type="Gasoline", car_type="SUV", mileage=32),
    Candidate(id="3", brand="Tesla", model="Model 3", price=35000, fuel_type="Electric", car_type="Sedan", mileage=120),
    Candidate(id="4", brand="Ford", model="F-150", price=32000, fuel_type="Gasoline", car_type="Truck", mileage=24),
    Candidate(id="5", brand="BMW", model="X3", price=45000, fuel_type="Gasoline", car_type="SUV", mileage=28),
]


def _twin(candidate_id: str) -> Candidate:
    return Candidate(id=candidate_id, brand="Kia", price=30000, fuel_type="petrol", car_type="suv")


def test_results_are_sorted_by_score_descending():
    results = rank(CATALOG, PREFERENCE)
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)
    assert results[0].candidate.id == "1"
    assert results[0].score == 100


def test_every_candidate_is_scored_and_explained_once():
    results = rank(CATALOG, PREFERENCE)
    assert sorted(r.candidate.id for r in results) == ["1", "2", "3", "4", "5"]
    assert results[0].reasons[0].startswith("Fits within your budget")


def test_ties_are_broken_by_id_ascending():
    results = rank([_twin("b"), _twin("c"), _twin("a")], PREFERENCE)
    assert len({r.score for r in results}) == 1
    assert [r.candidate.id for r in results] == ["a", "b", "c"]


def test_ranking_is_reproducible():
    first = rank(list(reversed(CATALOG)), PREFERENCE)
    second = rank(CATALOG, PREFERENCE)
    assert [r.candidate.id for r in first] == [r.candidate.id for r in second]
    assert first == second


def test_limit_truncates_after_sorting():
    results = rank(CATALOG, PREFERENCE, limit=2)
    assert [r.candidate.id for r in results] == [r.candidate.id for r in rank(CATALOG, PREFERENCE)[:2]]


def test_raw_records_are_accepted():
    record = {"id": "9", "make": "Toyota", "price": 25000, "fuel_type": "hybrid", "car_type": "sedan", "efficiency": 45}
    (result,) = rank([record], PREFERENCE)
    assert result.candidate.brand == "Toyota"
    assert result.score == 100


def test_invalid_record_is_kept_with_zero_score(caplog):
    broken = {"id": "broken", "brand": "Nope", "price": "call us"}
    with caplog.at_level(logging.WARNING, logger="carmatch.matching.ranking"):
        results = rank([broken, *CATALOG], PREFERENCE)

    assert len(results) == len(CATALOG) + 1
    assert results[-1].candidate.id == "broken"
    assert results[-1].score == 0
    assert results[-1].reasons == ()
    assert "broken" in caplog.text


def test_record_with_non_string_keys_does_not_abort_the_batch(caplog):
    garbage = {1: "garbage", "id": "junk"}
    with caplog.at_level(logging.WARNING, logger="carmatch.matching.ranking"):
        results = rank([CATALOG[0], garbage], PREFERENCE)

    assert [r.candidate.id for r in results] == ["1", "junk"]
    assert results[0].score == 100
    assert results[1].score == 0


def test_attribute_records_are_validated_from_attributes():
    row = SimpleNamespace(
        id=9, brand="Toyota", model="Prius", year=2023, price=25000, fuel_type="hybrid",
        car_type="sedan", mileage=50, features=[], transmission=None, description="", image_url=None,
    )
    (result,) = rank([row], PREFERENCE)
    assert result.candidate.id == "9"
    assert result.score == 100


def test_invalid_attribute_record_keeps_its_id(caplog):
    row = SimpleNamespace(id="orm-7", brand="Kia")
    with caplog.at_level(logging.WARNING, logger="carmatch.matching.ranking"):
        results = rank([row, CATALOG[0]], PREFERENCE)

    assert results[-1].candidate.id == "orm-7"
    assert results[-1].score == 0
    assert "orm-7" in caplog.text


def test_scoring_failure_for_one_candidate_does_not_abort_the_batch(caplog):
    real_score = scoring.score

    def flaky(candidate, preference):
        if candidate.id == "3":
            raise RuntimeError("boom")
        return real_score(candidate, preference)

    with patch("carmatch.matching.ranking.score", side_effect=flaky):
        with caplog.at_level(logging.WARNING, logger="carmatch.matching.ranking"):
            results = rank(CATALOG, PREFERENCE)

    by_id = {r.candidate.id: r for r in results}
    assert by_id["3"].score == 0
    assert by_id["1"].score == 100
    assert results[-1].candidate.id == "3"
    assert "Scoring failed" in caplog.text


def test_invalid_preference_fails_fast_even_for_empty_input():
    with pytest.raises(InvalidPreferenceError):
        rank([], PreferenceProfile(budget_min=40000, budget_max=20000))


def test_empty_catalog_gives_empty_ranking():
    assert rank([], PREFERENCE) == []
