from collections.abc import Iterable
from datetime import date

from aurafarm.schemas import ActivityDay
from aurafarm.schemas import ActivityWeek
from aurafarm.schemas import Streak


def flatten_days(weeks: Iterable[ActivityWeek]) -> list[ActivityDay]:
    """Return all days of the given weeks, oldest first."""

    return [day for week in weeks for day in week.days]


def longest_streak(days: list[ActivityDay], today: date) -> int:
    running = 0
    longest = 0
    for day in days:
        if day.count > 0:
            running += 1
            longest = max(longest, running)
        elif day.date != today:
            running = 0
    return longest


def current_streak(days: list[ActivityDay], today: date) -> int:
    current = 0
    for day in reversed(days):
        # Today may still receive activity, so a zero there is not a break.
        if day.date == today and day.count == 0:
            continue
        if day.count == 0:
            break
        current += 1
    return current


def compute_streak(weeks: Iterable[ActivityWeek], today: date) -> Streak:
    """Compute current and longest runs of days with activity.

    `today` is passed in rather than read from the clock so the result depends
    only on the arguments.
    """

    days = flatten_days(weeks)
    if not days:
        return Streak(current=0, longest=0)

    current = current_streak(days, today)
    longest = max(longest_streak(days, today), current)
    return Streak(current=current, longest=longest)
