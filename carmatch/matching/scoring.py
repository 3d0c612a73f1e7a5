"""
Weighted match scoring.

Five independent criteria share a fixed 100-point total:

* budget (30): full inside [budget_min, budget_max], otherwise proximity
  to the budget midpoint, scaled by the budget width.
* fuel type (25): exact match, or 15 points for a compatible fuel pair.
* category (20): exact match, or half credit for a related body style.
* efficiency (15): full at or above the stated minimum, pro-rata below it.
* brand (10): full when the brand is one of the preferred brands.

A criterion whose preference is not stated earns half of its weight, so
every candidate is scored out of the same 100 points.
"""
from __future__ import annotations

from typing import NamedTuple

from .models import (
    CarCategory,
    Candidate,
    FuelType,
    PreferenceProfile,
    ensure_valid_preference,
)
from .numbers import as_number, round_half_away

WEIGHTS: dict[str, float] = {
    "budget": 30.0,
    "fuel_type": 25.0,
    "car_type": 20.0,
    "efficiency": 15.0,
    "brand": 10.0,
}

UNSTATED_FRACTION = 0.5
COMPATIBLE_FUEL_POINTS = 15.0
RELATED_CATEGORY_FRACTION = 0.5

COMPATIBLE_FUELS: frozenset[frozenset[FuelType]] = frozenset({
    frozenset({FuelType.hybrid, FuelType.electric}),
})

RELATED_CATEGORIES: frozenset[frozenset[CarCategory]] = frozenset({
    frozenset({CarCategory.sedan, CarCategory.coupe}),
    frozenset({CarCategory.suv, CarCategory.wagon}),
    frozenset({CarCategory.hatchback, CarCategory.sedan}),
    frozenset({CarCategory.coupe, CarCategory.convertible}),
    frozenset({CarCategory.wagon, CarCategory.hatchback}),
})


class CriterionScore(NamedTuple):
    criterion: str
    points: float
    weight: float
    stated: bool

    @property
    def full(self) -> bool:
        return self.points >= self.weight


def fuels_compatible(a: FuelType | None, b: FuelType | None) -> bool:
    return frozenset((a, b)) in COMPATIBLE_FUELS


def categories_related(a: CarCategory | None, b: CarCategory | None) -> bool:
    return frozenset((a, b)) in RELATED_CATEGORIES


def _unstated(criterion: str) -> CriterionScore:
    weight = WEIGHTS[criterion]
    return CriterionScore(criterion, weight * UNSTATED_FRACTION, weight, False)


def _budget(candidate: Candidate, preference: PreferenceProfile) -> CriterionScore:
    weight = WEIGHTS["budget"]
    price = as_number(candidate.price)
    if price is None or price < 0:
        return CriterionScore("budget", 0.0, weight, True)
    if preference.budget_min <= price <= preference.budget_max:
        return CriterionScore("budget", weight, weight, True)

    midpoint = (preference.budget_min + preference.budget_max) / 2
    spread = preference.budget_max - preference.budget_min
    proximity = max(0.0, 1 - abs(price - midpoint) / spread)
    return CriterionScore("budget", weight * proximity, weight, True)


def _fuel_type(candidate: Candidate, preference: PreferenceProfile) -> CriterionScore:
    if preference.fuel_type is None:
        return _unstated("fuel_type")
    weight = WEIGHTS["fuel_type"]
    fuel = FuelType.parse(candidate.fuel_type)
    if fuel is preference.fuel_type and fuel is not FuelType.other:
        points = weight
    elif fuels_compatible(fuel, preference.fuel_type):
        points = COMPATIBLE_FUEL_POINTS
    else:
        points = 0.0
    return CriterionScore("fuel_type", points, weight, True)


def _car_type(candidate: Candidate, preference: PreferenceProfile) -> CriterionScore:
    if preference.car_type is None:
        return _unstated("car_type")
    weight = WEIGHTS["car_type"]
    category = CarCategory.parse(candidate.car_type)
    if category is preference.car_type and category is not CarCategory.other:
        points = weight
    elif categories_related(category, preference.car_type):
        points = weight * RELATED_CATEGORY_FRACTION
    else:
        points = 0.0
    return CriterionScore("car_type", points, weight, True)


def _efficiency(candidate: Candidate, preference: PreferenceProfile) -> CriterionScore:
    minimum = as_number(preference.mileage_min)
    if not minimum or minimum < 0:
        return _unstated("efficiency")
    weight = WEIGHTS["efficiency"]
    mileage = as_number(candidate.mileage)
    if mileage is None or mileage < 0:
        points = 0.0
    else:
        points = weight * min(1.0, mileage / minimum)
    return CriterionScore("efficiency", points, weight, True)


def _brand(candidate: Candidate, preference: PreferenceProfile) -> CriterionScore:
    if not preference.brand_preference:
        return _unstated("brand")
    weight = WEIGHTS["brand"]
    brand = str(candidate.brand or "").strip().casefold()
    preferred = {name.casefold() for name in preference.brand_preference}
    points = weight if brand and brand in preferred else 0.0
    return CriterionScore("brand", points, weight, True)


_CRITERIA = (_budget, _fuel_type, _car_type, _efficiency, _brand)


def evaluate(candidate: Candidate, preference: PreferenceProfile) -> list[CriterionScore]:
    """Score each criterion separately, in the fixed criterion order."""
    ensure_valid_preference(preference)
    return [criterion(candidate, preference) for criterion in _CRITERIA]


def score(candidate: Candidate, preference: PreferenceProfile) -> int:
    """Return the 0-100 compatibility score of ``candidate`` for ``preference``.

    Raises InvalidPreferenceError when the budget is mis-ordered. Candidate
    values are never validated: a negative or non-numeric price or mileage
    simply earns no credit.
    """
    total = sum(result.points for result in evaluate(candidate, preference))
    return max(0, min(100, round_half_away(total)))
