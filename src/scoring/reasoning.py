"""Human-readable justification for a contractor's match score.

Sentences appear in a fixed order: service, rating, experience, availability,
location, verification, premium tier, review-count summary. Only signals that
earned points (plus the verified/premium badges) produce a sentence, and the
review count is stated at most once.
"""

from src.core.schemas import Candidate, RequestContext
from src.scoring.features import ContractorFeatures
from src.scoring.rules import (
    AvailabilityTier,
    ExperienceTier,
    LocationTier,
    RatingTier,
)


def format_rating(rating: float) -> str:
    return f"{rating:g}"


def generate_reasoning(
    candidate: Candidate,
    context: RequestContext,
    features: ContractorFeatures,
) -> list[str]:
    reasons: list[str] = []

    if features.service_match:
        reasons.append(f"Specializes in {context.service_name} services")

    rating = format_rating(candidate.rating)
    if features.rating_tier is RatingTier.EXCELLENT:
        reasons.append(f"Excellent rating of {rating} stars")
    elif features.rating_tier is RatingTier.HIGH:
        reasons.append(f"High rating of {rating} stars")

    if features.experience_tier in (ExperienceTier.VETERAN, ExperienceTier.EXPERIENCED):
        reasons.append(f"Experienced with {candidate.review_count} reviews")

    if features.availability is AvailabilityTier.AVAILABLE:
        reasons.append("Currently available for new projects")

    if features.location is LocationTier.OVERLAP:
        reasons.append(f"Located in {candidate.location.strip()}")

    if candidate.is_verified:
        reasons.append("Verified contractor with background checks")

    if candidate.is_premium:
        reasons.append("Premium contractor with enhanced services")

    if features.experience_tier is ExperienceTier.SOME:
        reasons.append(f"{candidate.review_count} customer reviews")

    return _unique(reasons)


def _unique(items: list[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
