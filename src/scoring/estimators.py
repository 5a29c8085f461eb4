"""Cost and timeline estimates derived from a candidate and request context.

Both are independent of the match score. Each multiplier is applied in order
and rounded half up where noted, so results are reproducible to the unit.
"""

from src.core.schemas import Candidate, RequestContext
from src.scoring.features import experience_tier
from src.scoring.rules import (
    DAYS_PER_MONTH,
    DAYS_PER_WEEK,
    DEFAULT_TIMELINE_DAYS,
    EVENT_TYPE_COST_MULTIPLIERS,
    GUEST_COUNT_COST_MULTIPLIERS,
    TIMELINE_BASE_DAYS,
    TIMELINE_EVENT_TYPE_MULTIPLIERS,
    TIMELINE_EXPERIENCE_MULTIPLIERS,
)
from src.scoring.weighted import round_half_up


def estimate_cost(candidate: Candidate, context: RequestContext) -> int:
    """Midpoint of the primary price range, scaled by guest count and event type.

    Returns 0 when the candidate has no price range.
    """
    price = candidate.price_range
    if price is None:
        return 0

    cost = price.midpoint

    if context.guest_count:
        for threshold, multiplier in GUEST_COUNT_COST_MULTIPLIERS:
            if context.guest_count > threshold:
                cost *= multiplier
                break

    cost *= EVENT_TYPE_COST_MULTIPLIERS.get(_event_key(context.event_type), 1.0)

    return max(0, round_half_up(cost))


def estimate_timeline_days(candidate: Candidate, context: RequestContext) -> int:
    service = context.service_name.lower()
    days = DEFAULT_TIMELINE_DAYS
    for keyword, base in TIMELINE_BASE_DAYS:
        if keyword in service:
            days = base
            break

    tier = experience_tier(candidate.review_count)
    if tier in TIMELINE_EXPERIENCE_MULTIPLIERS:
        days = round_half_up(days * TIMELINE_EXPERIENCE_MULTIPLIERS[tier])

    event_multiplier = TIMELINE_EVENT_TYPE_MULTIPLIERS.get(_event_key(context.event_type))
    if event_multiplier is not None:
        days = round_half_up(days * event_multiplier)

    return days


def format_timeline(days: int) -> str:
    """'N days' under a week, 'N week(s)' under a month, else 'N month(s)'."""
    if days < DAYS_PER_WEEK:
        return f"{days} days"
    if days < DAYS_PER_MONTH:
        weeks = round_half_up(days / DAYS_PER_WEEK)
        return f"{weeks} week{'s' if weeks > 1 else ''}"
    months = round_half_up(days / DAYS_PER_MONTH)
    return f"{months} month{'s' if months > 1 else ''}"


def estimate_timeline(candidate: Candidate, context: RequestContext) -> str:
    return format_timeline(estimate_timeline_days(candidate, context))


def _event_key(event_type: str) -> str:
    return event_type.lower().strip()
