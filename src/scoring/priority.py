"""Map a final match score to a coarse priority tier."""

from src.core.schemas import Priority
from src.scoring.rules import PRIORITY_THRESHOLDS


def classify_priority(score: int) -> Priority:
    """85+ high, 65-84 medium, anything lower low."""
    for threshold, priority in PRIORITY_THRESHOLDS:
        if score >= threshold:
            return priority
    return Priority.LOW
