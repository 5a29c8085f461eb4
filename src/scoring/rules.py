"""Rule tables and scoring constants.

Every weight, threshold, and multiplier the engine uses lives here so that a
change to the rules is a one-line, reviewable diff.

Contractor table (base total 100):
  service 40 | rating 20/15/10/5/0 | experience 15/12/8/3
  availability 10/5 | location 10/5 | budget 5/3/2.5/0

Similarity table (base total 100, +5 bonus, capped at 100):
  category 40 | location 25 | budget overlap 20 | job type 10 | remote 5
  title tokens +5
"""

from collections.abc import Callable
from enum import Enum

from src.core.schemas import Priority
from src.scoring.weighted import Factor, RuleTable


class RatingTier(str, Enum):
    EXCELLENT = "excellent"
    HIGH = "high"
    FAIR = "fair"
    LOW = "low"
    NONE = "none"


class ExperienceTier(str, Enum):
    VETERAN = "veteran"
    EXPERIENCED = "experienced"
    SOME = "some"
    NEW = "new"


class AvailabilityTier(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"


class LocationTier(str, Enum):
    OVERLAP = "overlap"
    DIFFERENT = "different"
    UNSPECIFIED = "unspecified"


class BudgetTier(str, Enum):
    EXACT = "exact"
    NEAR = "near"
    UNSPECIFIED = "unspecified"
    NONE = "none"


# ---------------------------------------------------------------------------
# Feature thresholds
# ---------------------------------------------------------------------------

# Checked top-down; first threshold the value reaches wins.
RATING_THRESHOLDS: tuple[tuple[float, RatingTier], ...] = (
    (4.5, RatingTier.EXCELLENT),
    (4.0, RatingTier.HIGH),
    (3.5, RatingTier.FAIR),
    (3.0, RatingTier.LOW),
)

# Review count is the experience proxy.
EXPERIENCE_THRESHOLDS: tuple[tuple[int, ExperienceTier], ...] = (
    (50, ExperienceTier.VETERAN),
    (20, ExperienceTier.EXPERIENCED),
    (5, ExperienceTier.SOME),
)

NEAR_BUDGET_LOWER = 0.8
NEAR_BUDGET_UPPER = 1.2

# ---------------------------------------------------------------------------
# Contractor ranking
# ---------------------------------------------------------------------------

SERVICE_FACTOR = "service"
RATING_FACTOR = "rating"
EXPERIENCE_FACTOR = "experience"
AVAILABILITY_FACTOR = "availability"
LOCATION_FACTOR = "location"
BUDGET_FACTOR = "budget"

CONTRACTOR_RULES = RuleTable(
    "contractor",
    [
        Factor(SERVICE_FACTOR, lambda f: f.service_match, {True: 40, False: 0}),
        Factor(
            RATING_FACTOR,
            lambda f: f.rating_tier,
            {
                RatingTier.EXCELLENT: 20,
                RatingTier.HIGH: 15,
                RatingTier.FAIR: 10,
                RatingTier.LOW: 5,
                RatingTier.NONE: 0,
            },
        ),
        Factor(
            EXPERIENCE_FACTOR,
            lambda f: f.experience_tier,
            {
                ExperienceTier.VETERAN: 15,
                ExperienceTier.EXPERIENCED: 12,
                ExperienceTier.SOME: 8,
                ExperienceTier.NEW: 3,
            },
        ),
        Factor(
            AVAILABILITY_FACTOR,
            lambda f: f.availability,
            {AvailabilityTier.AVAILABLE: 10, AvailabilityTier.BUSY: 5},
        ),
        Factor(
            LOCATION_FACTOR,
            lambda f: f.location,
            {
                LocationTier.OVERLAP: 10,
                LocationTier.DIFFERENT: 5,
                LocationTier.UNSPECIFIED: 5,
            },
        ),
        Factor(
            BUDGET_FACTOR,
            lambda f: f.budget,
            {
                BudgetTier.EXACT: 5,
                BudgetTier.NEAR: 3,
                BudgetTier.UNSPECIFIED: 2.5,
                BudgetTier.NONE: 0,
            },
        ),
    ],
)

# ---------------------------------------------------------------------------
# Posting similarity
# ---------------------------------------------------------------------------

CATEGORY_FACTOR = "category"
JOB_LOCATION_FACTOR = "location"
BUDGET_OVERLAP_FACTOR = "budget"
JOB_TYPE_FACTOR = "job_type"
REMOTE_FACTOR = "remote"
TITLE_TOKENS_FACTOR = "title_tokens"

SIMILARITY_RULES = RuleTable(
    "similarity",
    [
        Factor(CATEGORY_FACTOR, lambda f: f.category_match, {True: 40}),
        Factor(JOB_LOCATION_FACTOR, lambda f: f.location_match, {True: 25}),
        Factor(BUDGET_OVERLAP_FACTOR, lambda f: f.budget_overlap, {True: 20}),
        Factor(JOB_TYPE_FACTOR, lambda f: f.job_type_match, {True: 10}),
        Factor(REMOTE_FACTOR, lambda f: f.remote_match, {True: 5}),
        Factor(TITLE_TOKENS_FACTOR, lambda f: f.title_token_match, {True: 5}, bonus=True),
    ],
)

# Jobs must score strictly above the cutoff to be returned.
SIMILARITY_CUTOFF = 30

# Title words must be longer than this to count as shared.
TITLE_TOKEN_MIN_LENGTH = 3

# ---------------------------------------------------------------------------
# Priority
# ---------------------------------------------------------------------------

# Inclusive lower bounds, checked top-down. Anything below is LOW.
PRIORITY_THRESHOLDS: tuple[tuple[int, Priority], ...] = (
    (85, Priority.HIGH),
    (65, Priority.MEDIUM),
)

# ---------------------------------------------------------------------------
# Cost estimation
# ---------------------------------------------------------------------------

# Strict lower bounds on guest count, checked top-down; first hit applies.
GUEST_COUNT_COST_MULTIPLIERS: tuple[tuple[int, float], ...] = (
    (100, 1.2),
    (50, 1.1),
)

EVENT_TYPE_COST_MULTIPLIERS: dict[str, float] = {
    "wedding": 1.3,
    "corporate": 1.1,
}

# ---------------------------------------------------------------------------
# Timeline estimation
# ---------------------------------------------------------------------------

# Keyword in the requested service name -> lead time in days. First hit wins.
TIMELINE_BASE_DAYS: tuple[tuple[str, int], ...] = (
    ("photography", 14),
    ("catering", 21),
    ("venue", 30),
)
DEFAULT_TIMELINE_DAYS = 7

TIMELINE_EXPERIENCE_MULTIPLIERS: dict[ExperienceTier, float] = {
    ExperienceTier.VETERAN: 0.8,
    ExperienceTier.NEW: 1.3,
}

TIMELINE_EVENT_TYPE_MULTIPLIERS: dict[str, float] = {
    "wedding": 1.2,
}

DAYS_PER_WEEK = 7
DAYS_PER_MONTH = 30

# ---------------------------------------------------------------------------
# Price buckets (applied to estimated cost)
# ---------------------------------------------------------------------------

PRICE_BUCKETS: dict[str, Callable[[int], bool]] = {
    "under-1000": lambda cost: cost < 1000,
    "1000-5000": lambda cost: 1000 <= cost <= 5000,
    "5000-10000": lambda cost: 5000 <= cost <= 10000,
    "over-10000": lambda cost: cost > 10000,
}
