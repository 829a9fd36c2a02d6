from datetime import date
from datetime import timedelta

from aurafarm.schemas import ActivityDay
from aurafarm.schemas import ActivityWeek


def make_weeks(start: date, counts: list[int]) -> list[ActivityWeek]:
    """Split consecutive daily counts starting at `start` into 7-day weeks."""

    days = [
        ActivityDay(date=start + timedelta(days=offset), count=count)
        for offset, count in enumerate(counts)
    ]
    return [ActivityWeek(days=tuple(days[i : i + 7])) for i in range(0, len(days), 7)]
