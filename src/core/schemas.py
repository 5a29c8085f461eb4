"""Core data models for the matching engine.

Every model is frozen: results are built fresh per request and never mutated.
Request and response models accept and serialise camelCase aliases
(``model_dump(by_alias=True)``); snake_case names are accepted too.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

AVAILABLE_STATUS = "available"
BUSY_STATUS = "busy"
PREMIUM_TIER = "spotlight"
DEFAULT_CURRENCY = "NZD"


def parse_optional_int(value: Any) -> int | None:
    """Coerce a loosely-typed numeric input to a positive int.

    Absent, unparseable, or non-positive values mean "not supplied".
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None
    if isinstance(value, (int, float)):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        parsed = int(value)
        return parsed if parsed > 0 else None
    return None


def fill_missing_bounds(data: Any) -> Any:
    """Default absent or null range bounds.

    A missing lower bound is 0. A missing upper bound takes the lower bound, so
    a one-sided range collapses to a single price instead of failing.
    """
    if not isinstance(data, dict):
        return data
    data = dict(data)
    if data.get("min") is None:
        data["min"] = 0.0
    if data.get("max") is None:
        data["max"] = data["min"]
    return data


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class _CamelModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Candidates
# ---------------------------------------------------------------------------


class PriceRange(_CamelModel):
    """Price range of a service offering, in currency units."""

    min: float = Field(default=0.0, ge=0.0)
    max: float = Field(default=0.0, ge=0.0)
    currency: str = DEFAULT_CURRENCY

    @model_validator(mode="before")
    @classmethod
    def default_bounds(cls, data: Any) -> Any:
        return fill_missing_bounds(data)

    @model_validator(mode="after")
    def max_not_below_min(self) -> "PriceRange":
        if self.max < self.min:
            msg = f"price range max ({self.max}) is below min ({self.min})"
            raise ValueError(msg)
        return self

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2


class ServiceOffering(_Frozen):
    """A single service row offered by a provider."""

    service_type: str
    price_range: PriceRange | None = None
    availability: str = ""

    @field_validator("availability")
    @classmethod
    def normalise_status(cls, v: str) -> str:
        return v.lower().strip()


class Candidate(_Frozen):
    """A service provider being ranked against a request."""

    id: str
    name: str = ""
    business_name: str = ""
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    description: str = ""
    location: str = ""
    services: list[ServiceOffering] = Field(default_factory=list)
    service_categories: list[str] = Field(default_factory=list)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    is_verified: bool = False
    subscription_tier: str = ""
    last_active: datetime | None = None

    @field_validator("rating", mode="before")
    @classmethod
    def missing_rating_is_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @field_validator("review_count", mode="before")
    @classmethod
    def missing_reviews_is_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    @property
    def primary_service(self) -> ServiceOffering | None:
        return self.services[0] if self.services else None

    @property
    def price_range(self) -> PriceRange | None:
        primary = self.primary_service
        return primary.price_range if primary else None

    @property
    def is_available(self) -> bool:
        primary = self.primary_service
        return primary is not None and primary.availability == AVAILABLE_STATUS

    @property
    def is_premium(self) -> bool:
        return self.subscription_tier.lower().strip() == PREMIUM_TIER

    @property
    def offered_services(self) -> list[str]:
        """Service types followed by business categories, blanks dropped."""
        names = [s.service_type for s in self.services] + list(self.service_categories)
        return [n for n in names if n.strip()]


class RequestContext(_CamelModel):
    """What the requester is looking for."""

    service_id: str
    service_name: str
    event_type: str
    location: str | None = None
    budget: int | None = None
    guest_count: int | None = None
    event_date: date | None = None

    @field_validator("service_id", "service_name", "event_type")
    @classmethod
    def required_not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "required field must not be empty"
            raise ValueError(msg)
        return v.strip()

    @field_validator("location", mode="before")
    @classmethod
    def blank_location_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("budget", "guest_count", mode="before")
    @classmethod
    def tolerant_int(cls, v: Any) -> int | None:
        return parse_optional_int(v)

    @field_validator("event_date", mode="before")
    @classmethod
    def tolerant_date(cls, v: Any) -> Any:
        if v is None or isinstance(v, date):
            return v
        try:
            return date.fromisoformat(str(v).strip()[:10])
        except ValueError:
            return None


# ---------------------------------------------------------------------------
# Recommendation request / response
# ---------------------------------------------------------------------------


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RecommendationFilters(_CamelModel):
    """Post-score filters echoed back in the response."""

    location: str | None = None
    price_range: str | None = None
    min_rating: float | None = Field(default=None, ge=0.0, le=5.0)
    availability: str | None = None
    verified_only: bool = False

    @field_validator("min_rating", mode="before")
    @classmethod
    def tolerant_rating(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        try:
            return float(v)
        except (TypeError, ValueError):
            return None

    @field_validator("location", "price_range", "availability", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class RecommendationRequest(RequestContext):
    """A request context plus the post-score filters to apply."""

    filters: RecommendationFilters = Field(default_factory=RecommendationFilters)

    @property
    def context(self) -> RequestContext:
        return RequestContext.model_validate(self.model_dump(exclude={"filters"}))


class CandidateProjection(_CamelModel):
    """The public view of a candidate returned to callers."""

    id: str
    name: str = ""
    business_name: str = ""
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    location: str = ""
    services: list[str] = Field(default_factory=list)
    specializations: list[str] = Field(default_factory=list)
    rating: float = 0.0
    review_count: int = 0
    price_range: PriceRange = Field(default_factory=PriceRange)
    is_available: bool = False
    is_verified: bool = False
    is_premium: bool = False
    last_active: datetime | None = None

    @classmethod
    def from_candidate(cls, candidate: Candidate) -> "CandidateProjection":
        return cls(
            id=candidate.id,
            name=candidate.name,
            business_name=candidate.business_name,
            email=candidate.email,
            phone=candidate.phone,
            website=candidate.website,
            location=candidate.location,
            services=[s.service_type for s in candidate.services],
            specializations=list(candidate.service_categories),
            rating=candidate.rating,
            review_count=candidate.review_count,
            price_range=candidate.price_range or PriceRange(),
            is_available=candidate.is_available,
            is_verified=candidate.is_verified,
            is_premium=candidate.is_premium,
            last_active=candidate.last_active,
        )


class ScoreResult(_CamelModel):
    """One ranked recommendation."""

    candidate: CandidateProjection
    match_score: int = Field(ge=0, le=100)
    reasoning: list[str] = Field(default_factory=list)
    estimated_cost: int = Field(default=0, ge=0)
    estimated_timeline: str
    availability: bool
    priority: Priority


class RecommendationResponse(_CamelModel):
    recommendations: list[ScoreResult] = Field(default_factory=list)
    total: int = 0
    filters: RecommendationFilters = Field(default_factory=RecommendationFilters)


# ---------------------------------------------------------------------------
# Job similarity
# ---------------------------------------------------------------------------


class BudgetRange(_CamelModel):
    min: float = Field(default=0.0, ge=0.0)
    max: float = Field(default=0.0, ge=0.0)

    @model_validator(mode="before")
    @classmethod
    def default_bounds(cls, data: Any) -> Any:
        return fill_missing_bounds(data)

    @model_validator(mode="after")
    def max_not_below_min(self) -> "BudgetRange":
        if self.max < self.min:
            msg = f"budget range max ({self.max}) is below min ({self.min})"
            raise ValueError(msg)
        return self

    def overlaps(self, other: "BudgetRange") -> bool:
        return self.min <= other.max and other.min <= self.max


class JobRecord(_CamelModel):
    """A job posting considered for similarity."""

    id: str
    title: str = ""
    category: str = ""
    location: str = ""
    budget: BudgetRange | None = None
    job_type: str = ""
    is_remote: bool = False


class SimilarityRequest(_CamelModel):
    reference_job_ids: list[str] = Field(min_length=1)
    limit: int = Field(default=10, ge=1, le=50)

    @field_validator("reference_job_ids")
    @classmethod
    def ids_not_blank(cls, v: list[str]) -> list[str]:
        ids = [i.strip() for i in v if i.strip()]
        if not ids:
            msg = "reference_job_ids must contain at least one id"
            raise ValueError(msg)
        return ids


class SimilarityResult(_CamelModel):
    job: JobRecord
    similarity: int = Field(ge=0, le=100)
    reasons: list[str] = Field(default_factory=list)


class SimilarityResponse(_CamelModel):
    similar_jobs: list[SimilarityResult] = Field(default_factory=list)
