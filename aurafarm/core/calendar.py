from collections.abc import Sequence

from aurafarm.core.levels import level_of
from aurafarm.schemas import ActivityWeek
from aurafarm.schemas import CalendarLayout
from aurafarm.schemas import MonthLabel


MINIMUM_WEEKS = 10
FIXED_MARGIN = 6
COLUMNS_PER_WEEK = 2
DAYS_PER_WEEK = 7

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def week_capacity(
    available_columns: int,
    minimum_weeks: int = MINIMUM_WEEKS,
    fixed_margin: int = FIXED_MARGIN,
) -> int:
    """Return how many week columns fit in the given terminal width.

    Narrow terminals are clamped to `minimum_weeks`.
    """

    if minimum_weeks < 1:
        raise ValueError("minimum_weeks must be at least 1")
    return max(minimum_weeks, (available_columns - fixed_margin) // COLUMNS_PER_WEEK)


def month_labels(weeks: Sequence[ActivityWeek]) -> list[MonthLabel]:
    """Label each week where the month of its first day changes.

    An abbreviation spans two week columns, so the week right after a label
    is never labelled.
    """

    labels: list[MonthLabel] = []
    previous_month: int | None = None
    skip_next = False

    for index, week in enumerate(weeks):
        if not week.days:
            skip_next = False
            continue

        month = week.days[0].date.month
        changed = month != previous_month
        previous_month = month

        if skip_next:
            skip_next = False
            continue
        if changed:
            labels.append(MonthLabel(week_index=index, text=MONTH_NAMES[month - 1]))
            skip_next = True

    return labels


def layout_calendar(
    weeks: Sequence[ActivityWeek],
    available_columns: int,
    *,
    minimum_weeks: int = MINIMUM_WEEKS,
    fixed_margin: int = FIXED_MARGIN,
) -> CalendarLayout:
    """Keep the most recent weeks that fit and compute their month labels."""

    capacity = week_capacity(available_columns, minimum_weeks, fixed_margin)
    visible = tuple(weeks[-capacity:])
    return CalendarLayout(visible_weeks=visible, month_labels=tuple(month_labels(visible)))


def level_rows(layout: CalendarLayout) -> list[list[int | None]]:
    """Return a weekday-by-week grid of levels, `None` where a day is missing."""

    rows: list[list[int | None]] = []
    for weekday in range(DAYS_PER_WEEK):
        row: list[int | None] = []
        for week in layout.visible_weeks:
            if weekday < len(week.days):
                row.append(level_of(week.days[weekday].count))
            else:
                row.append(None)
        rows.append(row)
    return rows


def label_line(labels: Sequence[MonthLabel], week_count: int) -> str:
    """Render month labels as one text line aligned with the week columns."""

    width = week_count * COLUMNS_PER_WEEK
    line = [" "] * width
    for label in labels:
        start = label.week_index * COLUMNS_PER_WEEK
        for offset, char in enumerate(label.text):
            if start + offset < width:
                line[start + offset] = char
    return "".join(line).rstrip()
