import random
from datetime import date
from datetime import timedelta

from aurafarm.schemas import ActivityDay
from aurafarm.schemas import ActivitySnapshot
from aurafarm.schemas import ActivityWeek
from aurafarm.schemas import DashboardStats
from aurafarm.schemas import RepositoryLanguageUsage
from aurafarm.schemas import UserProfile


MOCK_WEEKS = 53
STREAK_TAIL_DAYS = 3

MOCK_REPOSITORIES: tuple[tuple[tuple[str, int, str], ...], ...] = (
    (("Python", 182_400, "#3572A5"), ("Shell", 4_100, "#89e051")),
    (("TypeScript", 96_300, "#3178c6"), ("CSS", 12_800, "#563d7c")),
    (("Go", 61_000, "#00ADD8"),),
    (("Rust", 40_250, "#dea584"), ("Python", 9_900, "#3572A5")),
    (("HTML", 8_700, "#e34c26"), ("JavaScript", 7_300, "#f1e05a")),
)


def build_mock_stats(today: date, seed: int = 0) -> DashboardStats:
    """Build a deterministic year of fake activity ending on `today`.

    Weeks start on Sunday like GitHub's calendar; the last week stops at
    `today`, and the last few days always have activity.
    """

    rng = random.Random(seed)
    last_sunday = today - timedelta(days=(today.weekday() + 1) % 7)
    first_day = last_sunday - timedelta(weeks=MOCK_WEEKS - 1)
    streak_start = today - timedelta(days=STREAK_TAIL_DAYS - 1)

    weeks: list[ActivityWeek] = []
    for week_number in range(MOCK_WEEKS):
        days: list[ActivityDay] = []
        for weekday in range(7):
            current = first_day + timedelta(weeks=week_number, days=weekday)
            if current > today:
                break
            count = rng.randint(0, 9)
            if current >= streak_start:
                count = max(count, 5)
            days.append(ActivityDay(date=current, count=count))
        weeks.append(ActivityWeek(days=tuple(days)))

    usages = tuple(
        RepositoryLanguageUsage(language_name=name, byte_size=size, display_color=color)
        for repository in MOCK_REPOSITORIES
        for name, size, color in repository
    )

    return DashboardStats(
        profile=UserProfile(
            login="mockuser", name="Mock User", followers=123, repositories=42
        ),
        snapshot=ActivitySnapshot(
            weeks=tuple(weeks),
            total=sum(day.count for week in weeks for day in week.days),
        ),
        usages=usages,
    )
