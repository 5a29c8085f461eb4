"""Generic weighted-factor scoring.

A RuleTable is data: an ordered list of Factors, each mapping a feature set to
a tier and each tier to points. The same loop scores every variant; only the
table and the feature type change.

Score = sum of tier points, rounded half up, clamped to [0, 100].
"""

import math
from collections.abc import Callable, Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

F = TypeVar("F")

MIN_SCORE = 0
MAX_SCORE = 100


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3, not 2)."""
    return math.floor(value + 0.5)


def clamp_score(value: float) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, round_half_up(value)))


@dataclass(frozen=True)
class Factor(Generic[F]):
    """One row of a rule table.

    ``tier_of`` discretises the features; ``weights`` gives the points per
    tier. Tiers missing from ``weights`` score zero. Bonus factors sit on top
    of the base weights and are excluded from ``RuleTable.base_total``.
    """

    name: str
    tier_of: Callable[[F], Hashable]
    weights: Mapping[Hashable, float]
    bonus: bool = False

    @property
    def max_points(self) -> float:
        return max(self.weights.values(), default=0.0)

    def evaluate(self, features: F) -> "Contribution":
        tier = self.tier_of(features)
        return Contribution(self.name, tier, float(self.weights.get(tier, 0.0)))


@dataclass(frozen=True)
class Contribution:
    factor: str
    tier: Hashable
    points: float

    @property
    def fired(self) -> bool:
        return self.points > 0


@dataclass(frozen=True)
class ScoreBreakdown:
    """Final score plus the per-factor contributions that produced it."""

    score: int
    raw: float
    contributions: tuple[Contribution, ...] = field(default_factory=tuple)

    def contribution(self, factor: str) -> Contribution | None:
        for c in self.contributions:
            if c.factor == factor:
                return c
        return None

    def fired(self, factor: str) -> bool:
        c = self.contribution(factor)
        return c is not None and c.fired


class RuleTable(Generic[F]):
    """Named, ordered collection of factors for one scoring variant."""

    def __init__(self, name: str, factors: Sequence[Factor[F]]) -> None:
        names = [f.name for f in factors]
        if len(set(names)) != len(names):
            msg = f"duplicate factor names in rule table '{name}': {names}"
            raise ValueError(msg)
        self.name = name
        self.factors: tuple[Factor[F], ...] = tuple(factors)

    def __iter__(self):
        return iter(self.factors)

    @property
    def base_total(self) -> float:
        """Score of a record hitting the top tier of every base factor."""
        return sum(f.max_points for f in self.factors if not f.bonus)


class WeightedFactorScorer(Generic[F]):
    """Applies a RuleTable to a feature set."""

    def __init__(self, table: RuleTable[F]) -> None:
        if table.base_total > MAX_SCORE:
            msg = f"rule table '{table.name}' base weights sum to {table.base_total}, above {MAX_SCORE}"
            raise ValueError(msg)
        self.table = table

    def score(self, features: F) -> ScoreBreakdown:
        contributions = tuple(f.evaluate(features) for f in self.table)
        raw = sum(c.points for c in contributions)
        return ScoreBreakdown(score=clamp_score(raw), raw=raw, contributions=contributions)
