"""Contractor recommendation pipeline.

Data flow:
  1. Validate raw records into Candidates (bad records skipped)
  2. Per candidate: features -> weighted score -> reasoning -> estimates -> priority
  3. Sort: score desc, review count desc, id asc
  4. Post-score filter chain (removes only, never re-orders)
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from src.core.config import Settings
from src.core.schemas import (
    Candidate,
    CandidateProjection,
    RecommendationRequest,
    RecommendationResponse,
    RequestContext,
    ScoreResult,
)
from src.pipeline.matcher import build_filters, run_filter_chain
from src.pipeline.pool import map_bounded
from src.scoring.estimators import estimate_cost, estimate_timeline
from src.scoring.features import extract_features
from src.scoring.priority import classify_priority
from src.scoring.reasoning import generate_reasoning
from src.scoring.rules import CONTRACTOR_RULES
from src.scoring.weighted import WeightedFactorScorer

logger = logging.getLogger(__name__)

_scorer = WeightedFactorScorer(CONTRACTOR_RULES)


def load_candidates(records: Iterable[Mapping[str, Any] | Candidate]) -> list[Candidate]:
    """Validate raw provider records, skipping any that do not parse."""
    candidates: list[Candidate] = []
    for i, record in enumerate(records):
        if isinstance(record, Candidate):
            candidates.append(record)
            continue
        try:
            candidates.append(Candidate.model_validate(record))
        except ValidationError as e:
            record_id = record.get("id", f"#{i}") if isinstance(record, Mapping) else f"#{i}"
            logger.warning(
                "Skipping malformed candidate %s: %d validation errors",
                record_id, e.error_count(),
            )
    return candidates


def score_candidate(candidate: Candidate, context: RequestContext) -> ScoreResult:
    """Score a single candidate against a request context."""
    features = extract_features(candidate, context)
    breakdown = _scorer.score(features)
    return ScoreResult(
        candidate=CandidateProjection.from_candidate(candidate),
        match_score=breakdown.score,
        reasoning=generate_reasoning(candidate, context, features),
        estimated_cost=estimate_cost(candidate, context),
        estimated_timeline=estimate_timeline(candidate, context),
        availability=candidate.is_available,
        priority=classify_priority(breakdown.score),
    )


def rank_key(result: ScoreResult) -> tuple[int, int, str]:
    """Score desc, then review count desc, then candidate id asc."""
    return (-result.match_score, -result.candidate.review_count, result.candidate.id)


def score_candidates(
    candidates: list[Candidate],
    context: RequestContext,
    settings: Settings | None = None,
) -> list[ScoreResult]:
    """Score a batch of candidates, returning results sorted by rank_key."""
    settings = settings or Settings()
    scored = map_bounded(
        lambda c: score_candidate(c, context),
        candidates,
        settings.engine,
        label=lambda c: f"candidate {c.id}",
    )
    scored.sort(key=rank_key)
    return scored


def recommend(
    request: RecommendationRequest,
    records: Iterable[Mapping[str, Any] | Candidate],
    settings: Settings | None = None,
) -> RecommendationResponse:
    """Rank candidates for a request and apply its post-score filters."""
    candidates = load_candidates(records)
    if not candidates:
        logger.info("No candidates for service '%s'", request.service_name)
        return RecommendationResponse(filters=request.filters)

    ranked = score_candidates(candidates, request.context, settings)
    filtered = run_filter_chain(ranked, build_filters(request.filters))

    logger.info(
        "Recommendations for '%s': %d candidates, %d scored, %d after filters",
        request.service_name, len(candidates), len(ranked), len(filtered),
    )
    return RecommendationResponse(
        recommendations=filtered,
        total=len(filtered),
        filters=request.filters,
    )
