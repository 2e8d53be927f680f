"""
Tests for age bracket resolution.

Counting is in calendar days, so the tests pin `now` and use naive
(local) datetimes to stay deterministic.
"""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from infant_vitals.domain.models import AgeBracket
from infant_vitals.services.age_resolver import (
    bracket_for_days,
    describe_age,
    elapsed_days,
    resolve_bracket,
)

NOW = datetime(2025, 3, 15, 9, 30)


class TestElapsedDays:
    def test_same_day_is_zero(self) -> None:
        assert elapsed_days(datetime(2025, 3, 15, 0, 5), NOW) == 0

    def test_partial_days_do_not_count(self) -> None:
        # 23:59 the night before is already one calendar day ago
        assert elapsed_days(datetime(2025, 3, 14, 23, 59), datetime(2025, 3, 15, 0, 1)) == 1
        # but 23 hours within the same day is still zero
        assert elapsed_days(datetime(2025, 3, 15, 0, 30), datetime(2025, 3, 15, 23, 30)) == 0

    def test_future_birth_is_clamped_to_zero(self) -> None:
        assert elapsed_days(NOW + timedelta(days=3), NOW) == 0

    def test_accepts_plain_date(self) -> None:
        assert elapsed_days(date(2025, 3, 1), NOW) == 14

    def test_explicit_timezone_pins_the_calendar(self) -> None:
        birth = datetime(2025, 3, 14, 23, 0, tzinfo=UTC)
        now = datetime(2025, 3, 15, 1, 0, tzinfo=UTC)

        assert elapsed_days(birth, now, tz=UTC) == 1
        assert elapsed_days(birth, now, tz=timezone(timedelta(hours=-5))) == 0

    def test_defaults_to_wall_clock(self) -> None:
        assert elapsed_days(datetime.now() - timedelta(days=10)) == 10


class TestBracketForDays:
    @pytest.mark.parametrize(
        "days,bracket",
        [
            (0, AgeBracket.UNDER_1_WEEK),
            (6, AgeBracket.UNDER_1_WEEK),
            (7, AgeBracket.WEEK_2),
            (13, AgeBracket.WEEK_2),
            (14, AgeBracket.WEEK_3),
            (20, AgeBracket.WEEK_3),
            (21, AgeBracket.WEEK_4),
            (27, AgeBracket.WEEK_4),
            (28, AgeBracket.MONTH_2),
            (60, AgeBracket.MONTH_2),
            (61, AgeBracket.MONTH_3),
            (90, AgeBracket.MONTH_3),
            (91, AgeBracket.MONTH_6),
            (180, AgeBracket.MONTH_6),
            (181, AgeBracket.MONTH_9),
            (270, AgeBracket.MONTH_9),
            (271, AgeBracket.YEAR_1),
            (5000, AgeBracket.YEAR_1),
        ],
    )
    def test_bracket_boundaries(self, days: int, bracket: AgeBracket) -> None:
        assert bracket_for_days(days) is bracket

    @given(days=st.integers(min_value=0, max_value=2000))
    def test_monotonic_in_days(self, days: int) -> None:
        assert bracket_for_days(days).ordinal <= bracket_for_days(days + 1).ordinal

    def test_every_bracket_is_reachable(self) -> None:
        assert {bracket_for_days(d) for d in range(400)} == set(AgeBracket)


def test_resolve_bracket_from_birth() -> None:
    assert resolve_bracket(NOW - timedelta(days=6), NOW) is AgeBracket.UNDER_1_WEEK
    assert resolve_bracket(NOW - timedelta(days=7), NOW) is AgeBracket.WEEK_2
    assert resolve_bracket(NOW + timedelta(days=30), NOW) is AgeBracket.UNDER_1_WEEK


@pytest.mark.parametrize(
    "days,text",
    [(0, "0 days"), (29, "29 days"), (30, "1 months"), (359, "11 months"), (360, "1 years")],
)
def test_describe_age(days: int, text: str) -> None:
    assert describe_age(days) == text
