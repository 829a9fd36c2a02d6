from datetime import date
from datetime import timedelta

from factories import make_weeks

from aurafarm.core.streaks import compute_streak
from aurafarm.schemas import ActivityDay
from aurafarm.schemas import ActivityWeek


TODAY = date(2026, 3, 14)


def test_empty_weeks_produce_zero_streak() -> None:
    streak = compute_streak([], TODAY)

    assert streak.current == 0
    assert streak.longest == 0


def test_zero_today_does_not_break_current_streak() -> None:
    weeks = make_weeks(TODAY - timedelta(days=5), [2, 1, 4, 1, 3, 0])

    streak = compute_streak(weeks, TODAY)

    assert streak.current == 5
    assert streak.longest == 5


def test_activity_today_extends_current_streak() -> None:
    weeks = make_weeks(TODAY - timedelta(days=5), [2, 1, 4, 1, 3, 3])

    streak = compute_streak(weeks, TODAY)

    assert streak.current == 6
    assert streak.longest == 6


def test_broken_run_counts_trailing_run_and_longest() -> None:
    weeks = make_weeks(date(2025, 1, 1), [1, 1, 0, 1, 1, 1])

    streak = compute_streak(weeks, TODAY)

    assert streak.longest == 3
    assert streak.current == 3


def test_zero_on_past_last_day_ends_current_streak() -> None:
    weeks = make_weeks(date(2025, 1, 1), [1, 1, 1, 1, 0])

    streak = compute_streak(weeks, TODAY)

    assert streak.current == 0
    assert streak.longest == 4


def test_longest_streak_spans_week_boundaries() -> None:
    counts = [0, 0, 0, 0, 0, 1, 1] + [1, 1, 1, 0, 1, 0, 0]
    weeks = make_weeks(date(2025, 6, 1), counts)

    streak = compute_streak(weeks, TODAY)

    assert streak.longest == 5
    assert streak.current == 0


def test_streak_ignores_shorter_trailing_week() -> None:
    weeks = [
        ActivityWeek(days=tuple(
            ActivityDay(date=TODAY - timedelta(days=9 - i), count=1) for i in range(7)
        )),
        ActivityWeek(days=(
            ActivityDay(date=TODAY - timedelta(days=2), count=1),
            ActivityDay(date=TODAY - timedelta(days=1), count=1),
            ActivityDay(date=TODAY, count=0),
        )),
    ]

    streak = compute_streak(weeks, TODAY)

    assert streak.current == 9
    assert streak.longest == 9


def test_compute_streak_is_repeatable() -> None:
    weeks = make_weeks(date(2026, 1, 1), [3, 0, 2, 2, 0, 5, 5, 5])

    assert compute_streak(weeks, TODAY) == compute_streak(weeks, TODAY)
