"""Feature extraction: candidate + request context -> discrete signals.

Nothing here raises for missing data. An absent field fails its predicate and
lands in the "no match" or "unspecified" tier.
"""

from dataclasses import dataclass

from src.core.schemas import Candidate, RequestContext
from src.scoring.rules import (
    EXPERIENCE_THRESHOLDS,
    NEAR_BUDGET_LOWER,
    NEAR_BUDGET_UPPER,
    RATING_THRESHOLDS,
    AvailabilityTier,
    BudgetTier,
    ExperienceTier,
    LocationTier,
    RatingTier,
)


@dataclass(frozen=True)
class ContractorFeatures:
    service_match: bool
    rating_tier: RatingTier
    experience_tier: ExperienceTier
    availability: AvailabilityTier
    location: LocationTier
    budget: BudgetTier


def extract_features(candidate: Candidate, context: RequestContext) -> ContractorFeatures:
    return ContractorFeatures(
        service_match=service_matches(candidate.offered_services, context.service_name),
        rating_tier=rating_tier(candidate.rating),
        experience_tier=experience_tier(candidate.review_count),
        availability=(
            AvailabilityTier.AVAILABLE if candidate.is_available else AvailabilityTier.BUSY
        ),
        location=location_tier(candidate.location, context.location),
        budget=budget_tier(candidate, context.budget),
    )


def service_matches(offered: list[str], requested: str) -> bool:
    """True if any offered service contains the request, or vice versa."""
    wanted = requested.lower().strip()
    if not wanted:
        return False
    for name in offered:
        have = name.lower().strip()
        if have and (wanted in have or have in wanted):
            return True
    return False


def rating_tier(rating: float | None) -> RatingTier:
    value = rating or 0.0
    for threshold, tier in RATING_THRESHOLDS:
        if value >= threshold:
            return tier
    return RatingTier.NONE


def experience_tier(review_count: int | None) -> ExperienceTier:
    value = review_count or 0
    for threshold, tier in EXPERIENCE_THRESHOLDS:
        if value >= threshold:
            return tier
    return ExperienceTier.NEW


def locations_overlap(a: str | None, b: str | None) -> bool:
    """Case-insensitive containment in either direction; blanks never overlap."""
    left = (a or "").lower().strip()
    right = (b or "").lower().strip()
    if not left or not right:
        return False
    return left in right or right in left


def location_tier(candidate_location: str, requested: str | None) -> LocationTier:
    if not requested or not candidate_location.strip():
        return LocationTier.UNSPECIFIED
    if locations_overlap(candidate_location, requested):
        return LocationTier.OVERLAP
    return LocationTier.DIFFERENT


def budget_tier(candidate: Candidate, budget: int | None) -> BudgetTier:
    if budget is None or candidate.primary_service is None:
        return BudgetTier.UNSPECIFIED
    price = candidate.price_range
    if price is None:
        return BudgetTier.NONE
    if price.min <= budget <= price.max:
        return BudgetTier.EXACT
    if price.min * NEAR_BUDGET_LOWER <= budget <= price.max * NEAR_BUDGET_UPPER:
        return BudgetTier.NEAR
    return BudgetTier.NONE
