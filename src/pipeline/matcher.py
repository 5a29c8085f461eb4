"""Post-score filter chain for ranked recommendations.

Filters run after scoring and sorting. Each one only removes entries, so the
relative order of the survivors is the ranking order.

Filter order:
  1. VerifiedOnlyFilter: drop unverified providers
  2. LocationFilter: case-insensitive substring on provider location
  3. MinRatingFilter: rating at or above a floor
  4. AvailabilityFilter: "available" or "busy"
  5. PriceBucketFilter: estimated cost within a named bucket
"""

import logging
from collections.abc import Callable

from src.core.schemas import AVAILABLE_STATUS, BUSY_STATUS, RecommendationFilters, ScoreResult
from src.scoring.rules import PRICE_BUCKETS

logger = logging.getLogger(__name__)

# A filter is a callable that takes ranked results and returns an ordered subset.
Filter = Callable[[list[ScoreResult]], list[ScoreResult]]


def _log_removed(name: str, before: int, after: int) -> None:
    if before != after:
        logger.debug("%s: removed %d results", name, before - after)


class VerifiedOnlyFilter:
    """Keep only verified providers."""

    def __call__(self, results: list[ScoreResult]) -> list[ScoreResult]:
        kept = [r for r in results if r.candidate.is_verified]
        _log_removed("VerifiedOnlyFilter", len(results), len(kept))
        return kept


class LocationFilter:
    """Keep providers whose location contains the given text (case-insensitive).

    An empty location makes the filter a no-op.
    """

    def __init__(self, location: str | None) -> None:
        self._location = (location or "").lower().strip()

    def __call__(self, results: list[ScoreResult]) -> list[ScoreResult]:
        if not self._location:
            return results
        kept = [r for r in results if self._location in r.candidate.location.lower()]
        _log_removed("LocationFilter", len(results), len(kept))
        return kept


class MinRatingFilter:
    def __init__(self, min_rating: float | None) -> None:
        self._min_rating = min_rating

    def __call__(self, results: list[ScoreResult]) -> list[ScoreResult]:
        if self._min_rating is None:
            return results
        kept = [r for r in results if r.candidate.rating >= self._min_rating]
        _log_removed("MinRatingFilter", len(results), len(kept))
        return kept


class AvailabilityFilter:
    """Keep "available" or "busy" providers. Any other value passes everything."""

    def __init__(self, availability: str | None) -> None:
        self._availability = (availability or "").lower().strip()

    def __call__(self, results: list[ScoreResult]) -> list[ScoreResult]:
        if self._availability == AVAILABLE_STATUS:
            kept = [r for r in results if r.availability]
        elif self._availability == BUSY_STATUS:
            kept = [r for r in results if not r.availability]
        else:
            return results
        _log_removed("AvailabilityFilter", len(results), len(kept))
        return kept


class PriceBucketFilter:
    """Keep results whose estimated cost falls in a named bucket.

    Unknown or empty bucket names pass everything through.
    """

    def __init__(self, bucket: str | None) -> None:
        self._bucket = (bucket or "").lower().strip()
        self._predicate = PRICE_BUCKETS.get(self._bucket)
        if self._bucket and self._predicate is None:
            logger.debug("Unknown price bucket '%s', not filtering on price", bucket)

    def __call__(self, results: list[ScoreResult]) -> list[ScoreResult]:
        if self._predicate is None:
            return results
        kept = [r for r in results if self._predicate(r.estimated_cost)]
        _log_removed("PriceBucketFilter", len(results), len(kept))
        return kept


def build_filters(filters: RecommendationFilters) -> list[Filter]:
    """Build the post-score filter chain for a request's filters."""
    chain: list[Filter] = []
    if filters.verified_only:
        chain.append(VerifiedOnlyFilter())
    chain.extend([
        LocationFilter(filters.location),
        MinRatingFilter(filters.min_rating),
        AvailabilityFilter(filters.availability),
        PriceBucketFilter(filters.price_range),
    ])
    return chain


def run_filter_chain(
    results: list[ScoreResult],
    filters: list[Filter],
) -> list[ScoreResult]:
    """Apply filters in order, returning the surviving results."""
    kept = results
    for f in filters:
        kept = f(kept)
    return kept
