from __future__ import annotations

from carmatch.analytics.aggregator import summarize
from carmatch.matching.models import Candidate, MatchResult, PreferenceProfile
from carmatch.matching.ranking import rank


def _result(candidate_id: str, score: int, price: float = 30000) -> MatchResult:
    return MatchResult(candidate=Candidate(id=candidate_id, brand="Brand", price=price), score=score)


def test_summary_of_nothing_is_all_zeros():
    insights = summarize([])
    assert insights.total == 0
    assert insights.high_matches == 0
    assert insights.good_matches == 0
    assert insights.average_score == 0
    assert insights.top_recommendation is None
    assert insights.price_range is None


def test_tier_counts_use_fixed_boundaries():
    results = [_result("a", 100), _result("b", 80), _result("c", 79), _result("d", 60), _result("e", 59)]
    insights = summarize(results)
    assert insights.total == 5
    assert insights.high_matches == 2
    assert insights.good_matches == 2


def test_average_rounds_half_away_from_zero():
    # (80 + 61) / 2 = 70.5
    assert summarize([_result("a", 80), _result("b", 61)]).average_score == 71
    # 82.5 -> 83, where round() would give 82
    assert summarize([_result("a", 82), _result("b", 83)]).average_score == 83


def test_top_recommendation_is_highest_score_then_lowest_id():
    results = [_result("b", 90), _result("c", 70), _result("a", 90)]
    assert summarize(results).top_recommendation.candidate.id == "a"


def test_top_recommendation_does_not_depend_on_input_order():
    results = [_result("x", 40), _result("y", 95), _result("z", 60)]
    assert summarize(results).top_recommendation.candidate.id == "y"
    assert summarize(reversed(results)).top_recommendation.candidate.id == "y"


def test_price_range_spans_cheapest_to_dearest():
    results = [_result("a", 90, 45000), _result("b", 70, 9000), _result("c", 50, 28000)]
    assert summarize(results).price_range == (9000, 45000)


def test_summary_of_a_real_ranking():
    catalog = [
        Candidate(id="1", brand="Toyota", price=25000, fuel_type="hybrid", car_type="sedan", mileage=50),
        Candidate(id="2", brand="Ford", price=90000, fuel_type="diesel", car_type="truck", mileage=15),
    ]
    pref = PreferenceProfile(budget_min=20000, budget_max=30000, fuel_type="hybrid", car_type="sedan")
    insights = summarize(rank(catalog, pref))
    assert insights.total == 2
    assert insights.high_matches == 1
    assert insights.top_recommendation.candidate.id == "1"
