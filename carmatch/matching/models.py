from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
)

from .errors import InvalidPreferenceError

HIGH_MATCH_THRESHOLD = 80
GOOD_MATCH_THRESHOLD = 60


def _parse_label(enum_cls: type[Enum], synonyms: dict[str, str], value: Any) -> Any:
    """Map a free-form label onto ``enum_cls``; blank -> None, unknown -> other."""
    if value is None or isinstance(value, enum_cls):
        return value
    label = str(value).strip().lower()
    if not label:
        return None
    label = synonyms.get(label, label)
    try:
        return enum_cls(label)
    except ValueError:
        return enum_cls("other")


class FuelType(str, Enum):
    petrol = "petrol"
    diesel = "diesel"
    hybrid = "hybrid"
    electric = "electric"
    cng = "cng"
    other = "other"

    @classmethod
    def parse(cls, value: Any) -> FuelType | None:
        return _parse_label(cls, _FUEL_SYNONYMS, value)


class CarCategory(str, Enum):
    hatchback = "hatchback"
    sedan = "sedan"
    suv = "suv"
    coupe = "coupe"
    convertible = "convertible"
    wagon = "wagon"
    truck = "truck"
    other = "other"

    @classmethod
    def parse(cls, value: Any) -> CarCategory | None:
        return _parse_label(cls, _CATEGORY_SYNONYMS, value)


class Transmission(str, Enum):
    manual = "manual"
    automatic = "automatic"
    both = "both"
    other = "other"

    @classmethod
    def parse(cls, value: Any) -> Transmission | None:
        return _parse_label(cls, _TRANSMISSION_SYNONYMS, value)


_FUEL_SYNONYMS = {
    "gasoline": "petrol",
    "gas": "petrol",
    "regular": "petrol",
    "ev": "electric",
    "bev": "electric",
    "electricity": "electric",
    "hev": "hybrid",
}

_CATEGORY_SYNONYMS = {
    "hatch": "hatchback",
    "saloon": "sedan",
    "sport utility vehicle": "suv",
    "estate": "wagon",
    "pickup": "truck",
    "cabriolet": "convertible",
}

_TRANSMISSION_SYNONYMS = {
    "auto": "automatic",
    "cvt": "automatic",
    "dct": "automatic",
}


def tier_for(score: int) -> str | None:
    if score >= HIGH_MATCH_THRESHOLD:
        return "high"
    if score >= GOOD_MATCH_THRESHOLD:
        return "good"
    return None


class Candidate(BaseModel):
    """A vehicle from the catalog.

    ``price`` and ``mileage`` are not range-checked; the scorer gives no
    credit for negative or non-numeric values.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    brand: str = Field(..., validation_alias=AliasChoices("brand", "make"))
    model: str = ""
    year: int | None = None
    price: float
    fuel_type: FuelType = FuelType.other
    car_type: CarCategory = CarCategory.other
    mileage: float = Field(
        default=0.0,
        validation_alias=AliasChoices("mileage", "efficiency", "mileage_or_efficiency"),
        description="Distance per unit of fuel (MPG, or MPGe for electric cars)",
    )
    features: tuple[str, ...] = ()
    transmission: Transmission | None = None
    description: str = ""
    image_url: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("fuel_type", mode="before")
    @classmethod
    def _parse_fuel(cls, value: Any) -> FuelType:
        return FuelType.parse(value) or FuelType.other

    @field_validator("car_type", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> CarCategory:
        return CarCategory.parse(value) or CarCategory.other

    @field_validator("transmission", mode="before")
    @classmethod
    def _parse_transmission(cls, value: Any) -> Transmission | None:
        return Transmission.parse(value)

    @field_validator("features", mode="before")
    @classmethod
    def _features_or_empty(cls, value: Any) -> Any:
        return () if value is None else value


class PreferenceProfile(BaseModel):
    """A user's stated requirements.

    Only the budget is mandatory. ``budget_min < budget_max`` is checked by
    :func:`ensure_valid_preference` rather than at construction time so that
    scoring, not parsing, is where a mis-ordered budget surfaces.
    """

    model_config = ConfigDict(frozen=True)

    budget_min: float = Field(..., gt=0)
    budget_max: float = Field(..., gt=0)
    fuel_type: FuelType | None = None
    car_type: CarCategory | None = None
    mileage_min: float | None = Field(
        default=None, ge=0, validation_alias=AliasChoices("mileage_min", "min_mileage")
    )
    brand_preference: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("brand_preference", "preferred_brands")
    )
    transmission: Transmission | None = None

    @field_validator("fuel_type", mode="before")
    @classmethod
    def _parse_fuel(cls, value: Any) -> FuelType | None:
        return FuelType.parse(value)

    @field_validator("car_type", mode="before")
    @classmethod
    def _parse_category(cls, value: Any) -> CarCategory | None:
        return CarCategory.parse(value)

    @field_validator("transmission", mode="before")
    @classmethod
    def _parse_transmission(cls, value: Any) -> Transmission | None:
        return Transmission.parse(value)

    @field_validator("brand_preference", mode="before")
    @classmethod
    def _unique_brands(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        seen: set[str] = set()
        brands: list[str] = []
        for brand in value:
            name = str(brand).strip()
            key = name.casefold()
            if name and key not in seen:
                seen.add(key)
                brands.append(name)
        return tuple(brands)


def ensure_valid_preference(preference: PreferenceProfile) -> PreferenceProfile:
    if preference.budget_min >= preference.budget_max:
        raise InvalidPreferenceError(
            f"budget_min ({preference.budget_min:g}) must be below "
            f"budget_max ({preference.budget_max:g})"
        )
    return preference


def parse_preference(record: PreferenceProfile | Mapping[str, Any]) -> PreferenceProfile:
    """Build a validated PreferenceProfile from a raw preference record.

    An already-built profile is only checked for a mis-ordered budget.
    """
    if isinstance(record, PreferenceProfile):
        return ensure_valid_preference(record)
    try:
        preference = PreferenceProfile.model_validate(dict(record))
    except ValidationError as exc:
        raise InvalidPreferenceError(f"Invalid preference record: {exc}") from exc
    return ensure_valid_preference(preference)


class MatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    candidate: Candidate
    score: int = Field(..., ge=0, le=100)
    reasons: tuple[str, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def tier(self) -> str | None:
        return tier_for(self.score)


class Insights(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int = 0
    high_matches: int = 0
    good_matches: int = 0
    average_score: int = 0
    top_recommendation: MatchResult | None = None
    price_range: tuple[float, float] | None = None
