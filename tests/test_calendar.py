from datetime import date

import pytest
from factories import make_weeks

from aurafarm.core.calendar import label_line
from aurafarm.core.calendar import layout_calendar
from aurafarm.core.calendar import level_rows
from aurafarm.core.calendar import month_labels
from aurafarm.core.calendar import week_capacity
from aurafarm.schemas import ActivityWeek
from aurafarm.schemas import MonthLabel


def year_of_weeks(count: int = 53) -> list[ActivityWeek]:
    return make_weeks(date(2025, 3, 9), [index % 12 for index in range(count * 7)])


def test_week_capacity_uses_two_columns_per_week() -> None:
    assert week_capacity(46) == 20
    assert week_capacity(47) == 20
    assert week_capacity(120, fixed_margin=0) == 60


def test_week_capacity_clamps_narrow_terminals() -> None:
    assert week_capacity(10) == 10
    assert week_capacity(0, minimum_weeks=12) == 12


def test_week_capacity_rejects_non_positive_minimum() -> None:
    with pytest.raises(ValueError):
        week_capacity(80, minimum_weeks=0)


def test_layout_keeps_most_recent_weeks() -> None:
    weeks = year_of_weeks()

    layout = layout_calendar(weeks, 46)

    assert len(layout.visible_weeks) == 20
    assert list(layout.visible_weeks) == weeks[33:]


def test_layout_shows_everything_when_terminal_is_wide() -> None:
    weeks = year_of_weeks()

    layout = layout_calendar(weeks, 400)

    assert list(layout.visible_weeks) == weeks


def test_layout_follows_width_changes() -> None:
    weeks = year_of_weeks()

    narrow = layout_calendar(weeks, 30)
    wide = layout_calendar(weeks, 86)

    assert len(narrow.visible_weeks) == 12
    assert len(wide.visible_weeks) == 40
    assert narrow.visible_weeks == wide.visible_weeks[-12:]


def test_month_labels_mark_each_month_change() -> None:
    weeks = make_weeks(date(2026, 1, 4), [1] * 70)

    labels = month_labels(weeks)

    assert labels == [
        MonthLabel(week_index=0, text="Jan"),
        MonthLabel(week_index=4, text="Feb"),
        MonthLabel(week_index=8, text="Mar"),
    ]


def test_month_label_suppresses_following_week() -> None:
    weeks = make_weeks(date(2025, 12, 28), [1] * 42)

    labels = month_labels(weeks)

    assert labels == [
        MonthLabel(week_index=0, text="Dec"),
        MonthLabel(week_index=5, text="Feb"),
    ]


def test_month_labels_of_empty_layout() -> None:
    assert month_labels([]) == []


def test_level_rows_pad_short_trailing_week() -> None:
    weeks = make_weeks(date(2026, 1, 4), [0, 1, 4, 7, 10, 2, 5] + [12, 0, 3])
    layout = layout_calendar(weeks, 200)

    rows = level_rows(layout)

    assert len(rows) == 7
    assert [row[0] for row in rows] == [0, 1, 2, 3, 4, 1, 2]
    assert [row[1] for row in rows] == [4, 0, 1, None, None, None, None]


def test_label_line_aligns_labels_with_week_columns() -> None:
    labels = [MonthLabel(week_index=0, text="Jan"), MonthLabel(week_index=4, text="Feb")]

    assert label_line(labels, 6) == "Jan     Feb"


def test_layout_is_repeatable() -> None:
    weeks = year_of_weeks()

    assert layout_calendar(weeks, 70) == layout_calendar(weeks, 70)
