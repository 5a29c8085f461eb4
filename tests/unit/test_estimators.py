"""Tests for cost and timeline estimation."""

import re

import pytest

from src.core.schemas import Candidate, PriceRange, RequestContext, ServiceOffering
from src.scoring.estimators import (
    estimate_cost,
    estimate_timeline,
    estimate_timeline_days,
    format_timeline,
)

_TIMELINE_RE = re.compile(r"^(\d+ days|1 week|\d+ weeks|1 month|\d+ months)$")


def _candidate(
    *,
    price_range: PriceRange | None = PriceRange(min=1000, max=3000),
    review_count: int = 20,
    services: bool = True,
) -> Candidate:
    offered = [ServiceOffering(service_type="Catering", price_range=price_range)] if services else []
    return Candidate(id="c1", services=offered, review_count=review_count)


def _context(
    *,
    service_name: str = "Catering",
    event_type: str = "birthday",
    guest_count: int | None = None,
) -> RequestContext:
    return RequestContext(
        service_id="svc-1",
        service_name=service_name,
        event_type=event_type,
        guest_count=guest_count,
    )


class TestEstimateCost:
    def test_midpoint_baseline(self) -> None:
        assert estimate_cost(_candidate(), _context()) == 2000

    def test_no_price_range_is_zero(self) -> None:
        assert estimate_cost(_candidate(price_range=None), _context()) == 0
        assert estimate_cost(_candidate(services=False), _context(event_type="wedding")) == 0

    @pytest.mark.parametrize(
        ("guests", "expected"),
        [(None, 2000), (50, 2000), (51, 2200), (100, 2200), (101, 2400)],
    )
    def test_guest_count(self, guests: int | None, expected: int) -> None:
        assert estimate_cost(_candidate(), _context(guest_count=guests)) == expected

    def test_wedding(self) -> None:
        assert estimate_cost(_candidate(), _context(event_type="wedding")) == 2600

    def test_corporate(self) -> None:
        assert estimate_cost(_candidate(), _context(event_type="Corporate")) == 2200

    def test_guest_then_event_multipliers(self) -> None:
        cost = estimate_cost(_candidate(), _context(guest_count=80, event_type="wedding"))
        assert cost == 2860

    def test_rounds_half_up(self) -> None:
        c = _candidate(price_range=PriceRange(min=0, max=5))
        assert estimate_cost(c, _context()) == 3

    def test_never_negative(self) -> None:
        c = _candidate(price_range=PriceRange(min=0, max=0))
        assert estimate_cost(c, _context(event_type="wedding", guest_count=500)) == 0


class TestTimelineDays:
    @pytest.mark.parametrize(
        ("service", "days"),
        [("Photography", 14), ("Wedding Catering", 21), ("Venue hire", 30), ("DJ", 7)],
    )
    def test_base_days(self, service: str, days: int) -> None:
        assert estimate_timeline_days(_candidate(review_count=20), _context(service_name=service)) == days

    def test_veteran_faster(self) -> None:
        # 21 * 0.8 = 16.8 -> 17
        assert estimate_timeline_days(_candidate(review_count=50), _context()) == 17

    def test_new_slower(self) -> None:
        # 21 * 1.3 = 27.3 -> 27
        assert estimate_timeline_days(_candidate(review_count=4), _context()) == 27

    def test_wedding_after_experience(self) -> None:
        # 21 * 0.8 -> 17, * 1.2 = 20.4 -> 20
        days = estimate_timeline_days(_candidate(review_count=60), _context(event_type="wedding"))
        assert days == 20


class TestFormatTimeline:
    @pytest.mark.parametrize(
        ("days", "text"),
        [
            (1, "1 days"),
            (6, "6 days"),
            (7, "1 week"),
            (10, "1 week"),
            (11, "2 weeks"),
            (20, "3 weeks"),
            (29, "4 weeks"),
            (30, "1 month"),
            (44, "1 month"),
            (45, "2 months"),
            (47, "2 months"),
        ],
    )
    def test_formats(self, days: int, text: str) -> None:
        assert format_timeline(days) == text

    def test_estimate_always_documented_format(self) -> None:
        for service in ("Photography", "Catering", "Venue", "Florist"):
            for reviews in (0, 10, 25, 80):
                for event in ("wedding", "corporate", "party"):
                    text = estimate_timeline(
                        _candidate(review_count=reviews),
                        _context(service_name=service, event_type=event),
                    )
                    assert _TIMELINE_RE.match(text), text

    def test_veteran_generic_service_in_days(self) -> None:
        # 7 * 0.8 = 5.6 -> 6
        assert estimate_timeline(_candidate(review_count=70), _context(service_name="DJ")) == "6 days"
