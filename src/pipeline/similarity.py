"""Find job postings similar to a set of reference postings.

Same shape as contractor ranking with a different rule table: each factor
fires when ANY reference job shares the attribute with the target. Results
must score strictly above the configured cutoff, are sorted by similarity
desc then job id asc, and are truncated to the requested limit. Reference
jobs never appear in their own results.
"""

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from src.core.config import Settings
from src.core.schemas import JobRecord, SimilarityRequest, SimilarityResponse, SimilarityResult
from src.pipeline.pool import map_bounded
from src.scoring.rules import (
    BUDGET_OVERLAP_FACTOR,
    CATEGORY_FACTOR,
    JOB_LOCATION_FACTOR,
    JOB_TYPE_FACTOR,
    REMOTE_FACTOR,
    SIMILARITY_RULES,
    TITLE_TOKEN_MIN_LENGTH,
    TITLE_TOKENS_FACTOR,
)
from src.scoring.weighted import ScoreBreakdown, WeightedFactorScorer

logger = logging.getLogger(__name__)

_scorer = WeightedFactorScorer(SIMILARITY_RULES)

_WORD_RE = re.compile(r"[a-z0-9]+")


@dataclass(frozen=True)
class SimilarityFeatures:
    category_match: bool
    location_match: bool
    budget_overlap: bool
    job_type_match: bool
    remote_match: bool
    title_token_match: bool


def _norm(value: str) -> str:
    return value.lower().strip()


def _same(a: str, b: str) -> bool:
    """Case-insensitive equality; blank values never match."""
    left, right = _norm(a), _norm(b)
    return bool(left) and left == right


def title_tokens(title: str) -> set[str]:
    """Lower-cased words longer than TITLE_TOKEN_MIN_LENGTH characters."""
    return {w for w in _WORD_RE.findall(title.lower()) if len(w) > TITLE_TOKEN_MIN_LENGTH}


def extract_similarity_features(job: JobRecord, references: list[JobRecord]) -> SimilarityFeatures:
    tokens = title_tokens(job.title)
    return SimilarityFeatures(
        category_match=any(_same(job.category, r.category) for r in references),
        location_match=any(_same(job.location, r.location) for r in references),
        budget_overlap=job.budget is not None and any(
            r.budget is not None and job.budget.overlaps(r.budget) for r in references
        ),
        job_type_match=any(_same(job.job_type, r.job_type) for r in references),
        remote_match=any(job.is_remote == r.is_remote for r in references),
        title_token_match=bool(tokens) and any(tokens & title_tokens(r.title) for r in references),
    )


_REASONS: dict[str, Callable[[JobRecord], str]] = {
    CATEGORY_FACTOR: lambda j: f"Same category: {j.category.strip()}",
    JOB_LOCATION_FACTOR: lambda j: f"Same location: {j.location.strip()}",
    BUDGET_OVERLAP_FACTOR: lambda j: "Overlapping budget range",
    JOB_TYPE_FACTOR: lambda j: f"Same job type: {j.job_type.strip()}",
    REMOTE_FACTOR: lambda j: "Remote work allowed" if j.is_remote else "On-site role",
    TITLE_TOKENS_FACTOR: lambda j: "Similar title keywords",
}


def generate_reasons(job: JobRecord, breakdown: ScoreBreakdown) -> list[str]:
    """One sentence per fired factor, in rule-table order."""
    return [_REASONS[f.name](job) for f in SIMILARITY_RULES if breakdown.fired(f.name)]


def score_job(job: JobRecord, references: list[JobRecord]) -> SimilarityResult:
    breakdown = _scorer.score(extract_similarity_features(job, references))
    return SimilarityResult(
        job=job,
        similarity=breakdown.score,
        reasons=generate_reasons(job, breakdown),
    )


def load_jobs(records: Iterable[Mapping[str, Any] | JobRecord]) -> list[JobRecord]:
    """Validate raw job records, skipping any that do not parse."""
    jobs: list[JobRecord] = []
    for i, record in enumerate(records):
        if isinstance(record, JobRecord):
            jobs.append(record)
            continue
        try:
            jobs.append(JobRecord.model_validate(record))
        except ValidationError as e:
            record_id = record.get("id", f"#{i}") if isinstance(record, Mapping) else f"#{i}"
            logger.warning(
                "Skipping malformed job %s: %d validation errors",
                record_id, e.error_count(),
            )
    return jobs


def find_similar_jobs(
    request: SimilarityRequest,
    records: Iterable[Mapping[str, Any] | JobRecord],
    settings: Settings | None = None,
) -> SimilarityResponse:
    """Score every non-reference job against the reference set.

    Args:
        request: Reference job ids and result limit.
        records: Job pool; must include the reference jobs themselves.
        settings: Cutoff, limit bound, and worker pool settings.

    Returns:
        SimilarityResponse with at most ``limit`` jobs above the cutoff.
    """
    settings = settings or Settings()
    jobs = load_jobs(records)

    reference_ids = set(request.reference_job_ids)
    references = [j for j in jobs if j.id in reference_ids]
    if not references:
        logger.warning("None of the reference jobs %s were found", sorted(reference_ids))
        return SimilarityResponse()

    pool = [j for j in jobs if j.id not in reference_ids]
    scored = map_bounded(
        lambda j: score_job(j, references),
        pool,
        settings.engine,
        label=lambda j: f"job {j.id}",
    )

    cutoff = settings.similarity.cutoff
    kept = [s for s in scored if s.similarity > cutoff]
    kept.sort(key=lambda s: (-s.similarity, s.job.id))

    limit = min(request.limit, settings.similarity.max_limit)
    logger.info(
        "Similar jobs: %d references, %d candidates, %d above cutoff %d, returning %d",
        len(references), len(pool), len(kept), cutoff, min(limit, len(kept)),
    )
    return SimilarityResponse(similar_jobs=kept[:limit])
