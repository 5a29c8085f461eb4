"""Tests for contractor feature extraction."""

import pytest

from src.core.schemas import Candidate, PriceRange, RequestContext, ServiceOffering
from src.scoring.features import (
    budget_tier,
    experience_tier,
    extract_features,
    location_tier,
    locations_overlap,
    rating_tier,
    service_matches,
)
from src.scoring.rules import (
    AvailabilityTier,
    BudgetTier,
    ExperienceTier,
    LocationTier,
    RatingTier,
)


def _candidate(
    *,
    service_type: str = "Catering",
    price_range: PriceRange | None = PriceRange(min=1000, max=3000),
    availability: str = "available",
    location: str = "Auckland",
    rating: float = 4.8,
    review_count: int = 60,
    services: list[ServiceOffering] | None = None,
) -> Candidate:
    if services is None:
        services = [
            ServiceOffering(
                service_type=service_type,
                price_range=price_range,
                availability=availability,
            ),
        ]
    return Candidate(
        id="c1",
        location=location,
        services=services,
        rating=rating,
        review_count=review_count,
    )


def _context(**overrides: object) -> RequestContext:
    defaults: dict[str, object] = {
        "service_id": "svc-1",
        "service_name": "Catering",
        "event_type": "wedding",
        "location": "Auckland",
        "budget": 2000,
    }
    defaults.update(overrides)
    return RequestContext(**defaults)  # type: ignore[arg-type]


class TestServiceMatch:
    def test_case_insensitive(self) -> None:
        assert service_matches(["CATERING"], "catering")

    def test_offered_contains_requested(self) -> None:
        assert service_matches(["Wedding Catering"], "Catering")

    def test_requested_contains_offered(self) -> None:
        assert service_matches(["Catering"], "Catering & Bar")

    def test_no_match(self) -> None:
        assert not service_matches(["Photography"], "Catering")

    def test_blank_values_never_match(self) -> None:
        assert not service_matches([""], "Catering")
        assert not service_matches(["Catering"], "  ")
        assert not service_matches([], "Catering")


class TestRatingTier:
    @pytest.mark.parametrize(
        ("rating", "tier"),
        [
            (5.0, RatingTier.EXCELLENT),
            (4.5, RatingTier.EXCELLENT),
            (4.49, RatingTier.HIGH),
            (4.0, RatingTier.HIGH),
            (3.5, RatingTier.FAIR),
            (3.0, RatingTier.LOW),
            (2.99, RatingTier.NONE),
            (0.0, RatingTier.NONE),
            (None, RatingTier.NONE),
        ],
    )
    def test_thresholds(self, rating: float | None, tier: RatingTier) -> None:
        assert rating_tier(rating) is tier


class TestExperienceTier:
    @pytest.mark.parametrize(
        ("reviews", "tier"),
        [
            (50, ExperienceTier.VETERAN),
            (49, ExperienceTier.EXPERIENCED),
            (20, ExperienceTier.EXPERIENCED),
            (19, ExperienceTier.SOME),
            (5, ExperienceTier.SOME),
            (4, ExperienceTier.NEW),
            (0, ExperienceTier.NEW),
            (None, ExperienceTier.NEW),
        ],
    )
    def test_thresholds(self, reviews: int | None, tier: ExperienceTier) -> None:
        assert experience_tier(reviews) is tier


class TestLocation:
    def test_mutual_containment(self) -> None:
        assert locations_overlap("Auckland CBD", "auckland")
        assert locations_overlap("Auckland", "Central Auckland")

    def test_blank_never_overlaps(self) -> None:
        assert not locations_overlap("", "Auckland")
        assert not locations_overlap("Auckland", None)

    def test_tiers(self) -> None:
        assert location_tier("Auckland", "Auckland") is LocationTier.OVERLAP
        assert location_tier("Wellington", "Auckland") is LocationTier.DIFFERENT
        assert location_tier("Auckland", None) is LocationTier.UNSPECIFIED
        assert location_tier("  ", "Auckland") is LocationTier.UNSPECIFIED


class TestBudgetTier:
    def test_unspecified(self) -> None:
        assert budget_tier(_candidate(), None) is BudgetTier.UNSPECIFIED

    def test_exact_inclusive_bounds(self) -> None:
        c = _candidate()
        assert budget_tier(c, 1000) is BudgetTier.EXACT
        assert budget_tier(c, 3000) is BudgetTier.EXACT

    def test_near_match(self) -> None:
        c = _candidate()
        assert budget_tier(c, 800) is BudgetTier.NEAR
        assert budget_tier(c, 3600) is BudgetTier.NEAR

    def test_outside_near_band(self) -> None:
        c = _candidate()
        assert budget_tier(c, 799) is BudgetTier.NONE
        assert budget_tier(c, 3601) is BudgetTier.NONE

    def test_service_without_price_range(self) -> None:
        assert budget_tier(_candidate(price_range=None), 2000) is BudgetTier.NONE

    def test_no_services_is_unspecified(self) -> None:
        assert budget_tier(_candidate(services=[]), 2000) is BudgetTier.UNSPECIFIED


class TestExtractFeatures:
    def test_full_match(self) -> None:
        f = extract_features(_candidate(), _context())
        assert f.service_match is True
        assert f.rating_tier is RatingTier.EXCELLENT
        assert f.experience_tier is ExperienceTier.VETERAN
        assert f.availability is AvailabilityTier.AVAILABLE
        assert f.location is LocationTier.OVERLAP
        assert f.budget is BudgetTier.EXACT

    def test_bare_candidate_never_raises(self) -> None:
        bare = Candidate(id="empty")
        f = extract_features(bare, _context())
        assert f.service_match is False
        assert f.rating_tier is RatingTier.NONE
        assert f.experience_tier is ExperienceTier.NEW
        assert f.availability is AvailabilityTier.BUSY
        assert f.location is LocationTier.UNSPECIFIED
        assert f.budget is BudgetTier.UNSPECIFIED

    def test_matches_on_service_category(self) -> None:
        c = Candidate(id="c2", service_categories=["Event Catering"])
        assert extract_features(c, _context()).service_match is True
