"""Bounded fan-out for per-record scoring.

Scoring is pure compute with no shared state, so records can be scored on a
thread pool. Results come back in input order; a record whose scorer raises a
data error is dropped (logged) and the rest of the batch continues.
"""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import TypeVar

from src.core.config import EngineConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Data-shape errors a single bad record can raise while being scored.
SKIPPABLE_ERRORS = (ValueError, TypeError, ArithmeticError, AttributeError, KeyError)


def map_bounded(
    fn: Callable[[T], R],
    items: Sequence[T],
    config: EngineConfig,
    label: Callable[[T], str] = repr,
) -> list[R]:
    """Apply fn to every item, in parallel for large batches.

    Args:
        fn: Pure per-record function.
        items: Records to process.
        config: Worker bound and inline-batch threshold.
        label: Renders an item for the skip warning.

    Returns:
        Results for every item that did not raise, in input order.
    """
    if not items:
        return []

    def guarded(item: T) -> tuple[bool, R | None]:
        try:
            return True, fn(item)
        except SKIPPABLE_ERRORS as e:
            logger.warning("Skipping %s: %s", label(item), e)
            return False, None

    if len(items) < config.parallel_threshold or config.max_workers == 1:
        outcomes = [guarded(item) for item in items]
    else:
        workers = min(config.max_workers, len(items))
        logger.debug("Scoring %d records on %d workers", len(items), workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(guarded, items))

    return [result for ok, result in outcomes if ok]  # type: ignore[misc]
