from __future__ import annotations

from .models import (
    CarCategory,
    Candidate,
    FuelType,
    PreferenceProfile,
    Transmission,
)
from .numbers import as_number
from .scoring import CriterionScore, evaluate


def _money(value: float) -> str:
    return f"${value:,.0f}"


def _budget_reason(candidate: Candidate, preference: PreferenceProfile, result: CriterionScore) -> str:
    budget = f"{_money(preference.budget_min)}-{_money(preference.budget_max)}"
    if result.full:
        return f"Fits within your budget of {budget}"
    price = as_number(candidate.price) or 0.0
    if price < preference.budget_min:
        return f"Priced at {_money(price)}, below your budget of {budget}, offering great value"
    return f"Priced at {_money(price)}, slightly above your budget of {budget}"


def _fuel_reason(candidate: Candidate, preference: PreferenceProfile, result: CriterionScore) -> str:
    wanted = preference.fuel_type.value
    if result.full:
        return f"Matches your preferred {wanted} fuel type"
    fuel = FuelType.parse(candidate.fuel_type)
    return f"Runs on {fuel.value}, a close alternative to your preferred {wanted} fuel type"


def _car_type_reason(candidate: Candidate, preference: PreferenceProfile, result: CriterionScore) -> str:
    wanted = preference.car_type.value
    if result.full:
        return f"Exactly the {wanted} body style you asked for"
    category = CarCategory.parse(candidate.car_type)
    return f"A {category.value} is closely related to your preferred {wanted} body style"


def _efficiency_reason(candidate: Candidate, preference: PreferenceProfile, result: CriterionScore) -> str:
    mileage = as_number(candidate.mileage) or 0.0
    if result.full:
        return f"Meets your minimum mileage of {preference.mileage_min:g} MPG with {mileage:g} MPG"
    return f"Returns {mileage:g} MPG, close to your minimum of {preference.mileage_min:g} MPG"


def _brand_reason(candidate: Candidate, preference: PreferenceProfile, result: CriterionScore) -> str:
    return f"From your preferred brand {candidate.brand}"


_SENTENCES = {
    "budget": _budget_reason,
    "fuel_type": _fuel_reason,
    "car_type": _car_type_reason,
    "efficiency": _efficiency_reason,
    "brand": _brand_reason,
}


def _transmission_note(candidate: Candidate, preference: PreferenceProfile) -> str | None:
    wanted = preference.transmission
    if wanted in (None, Transmission.both, Transmission.other):
        return None
    if Transmission.parse(candidate.transmission) is not wanted:
        return None
    return f"Comes with your preferred {wanted.value} transmission"


def reasons(
    candidate: Candidate,
    preference: PreferenceProfile,
    score: int | None = None,
) -> list[str]:
    """
    Explain a match in plain sentences.

    One sentence per criterion whose preference was stated and which earned
    any credit, in criterion order, followed by a transmission note when the
    preferred transmission matches. Criteria that only earned the default
    credit for an unstated preference are not mentioned, so a profile with
    nothing matched yields an empty list.
    """
    sentences: list[str] = []
    for result in evaluate(candidate, preference):
        if result.stated and result.points > 0:
            sentences.append(_SENTENCES[result.criterion](candidate, preference, result))

    note = _transmission_note(candidate, preference)
    if note:
        sentences.append(note)
    return sentences
