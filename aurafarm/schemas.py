from datetime import date

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import model_validator


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ActivityDay(FrozenModel):
    """Contribution count recorded for a single calendar day."""

    date: date
    count: int = Field(ge=0)


class ActivityWeek(FrozenModel):
    """Up to seven days, oldest first. Edge weeks may be shorter."""

    days: tuple[ActivityDay, ...] = Field(default=(), max_length=7)


class ActivitySnapshot(FrozenModel):
    """One-year window of daily activity grouped into weeks, oldest first."""

    weeks: tuple[ActivityWeek, ...] = ()
    total: int = Field(default=0, ge=0)


class RepositoryLanguageUsage(FrozenModel):
    """Bytes of one language in one repository."""

    language_name: str
    byte_size: int = Field(ge=0)
    display_color: str


class RankedLanguage(FrozenModel):
    name: str
    color: str
    percent_of_total: float = Field(ge=0.0, le=100.0)


class Streak(FrozenModel):
    current: int = Field(default=0, ge=0)
    longest: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def check_longest_covers_current(self) -> "Streak":
        if self.longest < self.current:
            raise ValueError("longest streak cannot be shorter than current streak")
        return self


class PixelCell(FrozenModel):
    occupied: bool = False
    slice_color: str | None = None


class MonthLabel(FrozenModel):
    week_index: int = Field(ge=0)
    text: str


class CalendarLayout(FrozenModel):
    visible_weeks: tuple[ActivityWeek, ...]
    month_labels: tuple[MonthLabel, ...]


class UserProfile(FrozenModel):
    """Header data shown next to the statistics."""

    login: str
    name: str | None = None
    followers: int = 0
    repositories: int = 0


class DashboardStats(FrozenModel):
    """Materialized input of one dashboard run."""

    profile: UserProfile
    snapshot: ActivitySnapshot
    usages: tuple[RepositoryLanguageUsage, ...] = ()


class DashboardPayload(BaseModel):
    """Dashboard geometry returned to presentation layers."""

    username: str
    name: str | None
    followers: int
    repositories: int
    total_contributions: int
    streak: Streak
    theme: str
    visible_weeks: int
    month_labels: list[MonthLabel]
    level_rows: list[list[int | None]]
    languages: list[RankedLanguage]
    pie_rows: list[list[str | None]]
