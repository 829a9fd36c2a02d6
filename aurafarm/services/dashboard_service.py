import hashlib
import logging
from datetime import date
from datetime import datetime

import httpx
from sqlalchemy.orm import Session

from aurafarm.cache import get_cached_payload
from aurafarm.cache import store_payload
from aurafarm.core.calendar import layout_calendar
from aurafarm.core.calendar import level_rows
from aurafarm.core.languages import rank_languages
from aurafarm.core.pie import pie_rows
from aurafarm.core.pie import rasterize_pie
from aurafarm.core.streaks import compute_streak
from aurafarm.github_api import GH_LOGIN_HINT
from aurafarm.github_api import fetch_authenticated_user
from aurafarm.github_api import fetch_dashboard_stats
from aurafarm.github_api import parse_stats
from aurafarm.github_api import token_from_gh_cli
from aurafarm.schemas import DashboardPayload
from aurafarm.schemas import DashboardStats
from aurafarm.settings import Settings
from aurafarm.themes import theme_at


logger = logging.getLogger(__name__)


class InvalidGitHubTokenError(Exception):
    """Raised when GitHub rejects the provided token."""


class GitHubAPIError(Exception):
    """Raised when GitHub requests fail for non-auth reasons."""


def cache_key_for_token(token: str) -> str:
    digest = hashlib.sha256(token.encode("utf-8")).hexdigest()
    return f"stats:{digest[:32]}"


def fetch_stats(token: str, settings: Settings) -> dict[str, object]:
    """Fetch the raw dashboard payload for the GitHub user linked to token."""

    try:
        github_user = fetch_authenticated_user(token, settings.github_api_base_url)
        username = str(github_user["login"]).lower()
        return fetch_dashboard_stats(
            username=username,
            token=token,
            graphql_url=settings.github_graphql_url,
        )
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code in {401, 403}:
            raise InvalidGitHubTokenError from exc
        raise GitHubAPIError from exc
    except Exception as exc:
        raise GitHubAPIError from exc


def load_stats(
    token: str, settings: Settings, db: Session, now: datetime
) -> DashboardStats:
    """Return dashboard input data, served from cache while it is fresh."""

    cache_key = cache_key_for_token(token)
    raw_user = get_cached_payload(db, cache_key, settings.cache_ttl_seconds, now)
    if raw_user is None:
        logger.info("Fetching dashboard stats from GitHub")
        raw_user = fetch_stats(token, settings)
        store_payload(db, cache_key, raw_user, now)
    else:
        logger.debug("Using cached dashboard stats")

    try:
        return parse_stats(raw_user)
    except ValueError as exc:
        raise GitHubAPIError("GitHub response is invalid") from exc


def gh_cli_token() -> str:
    try:
        return token_from_gh_cli()
    except ValueError as exc:
        raise GitHubAPIError(GH_LOGIN_HINT) from exc


def load_local_stats(
    settings: Settings, db: Session, now: datetime
) -> DashboardStats:
    """Load stats with GITHUB_TOKEN, falling back to the gh CLI login.

    The fallback is used when no token is configured or GitHub rejects it.
    """

    if settings.github_token:
        try:
            return load_stats(settings.github_token, settings, db, now)
        except InvalidGitHubTokenError:
            logger.warning("GITHUB_TOKEN was rejected, falling back to the gh CLI")

    return load_stats(gh_cli_token(), settings, db, now)


def build_dashboard(
    stats: DashboardStats,
    *,
    columns: int,
    theme_index: int,
    today: date,
    settings: Settings,
    radius: int | None = None,
) -> DashboardPayload:
    """Run layout, streak, ranking and pie rasterization for one frame."""

    theme = theme_at(theme_index)
    snapshot = stats.snapshot

    layout = layout_calendar(
        snapshot.weeks,
        columns,
        minimum_weeks=settings.calendar_minimum_weeks,
        fixed_margin=settings.calendar_fixed_margin,
    )
    streak = compute_streak(snapshot.weeks, today)
    ranked = rank_languages(stats.usages, top_k=settings.top_languages)
    grid = rasterize_pie(ranked, settings.pie_radius if radius is None else radius)

    return DashboardPayload(
        username=stats.profile.login,
        name=stats.profile.name,
        followers=stats.profile.followers,
        repositories=stats.profile.repositories,
        total_contributions=snapshot.total,
        streak=streak,
        theme=theme.name,
        visible_weeks=len(layout.visible_weeks),
        month_labels=list(layout.month_labels),
        level_rows=level_rows(layout),
        languages=ranked,
        pie_rows=pie_rows(grid),
    )
