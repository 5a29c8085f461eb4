"""Tests for priority classification."""

import pytest

from src.core.schemas import Priority
from src.scoring.priority import classify_priority


@pytest.mark.parametrize(
    ("score", "priority"),
    [
        (100, Priority.HIGH),
        (85, Priority.HIGH),
        (84, Priority.MEDIUM),
        (65, Priority.MEDIUM),
        (64, Priority.LOW),
        (0, Priority.LOW),
    ],
)
def test_boundaries(score: int, priority: Priority) -> None:
    assert classify_priority(score) is priority
