import logging
import subprocess
from collections.abc import Mapping
from datetime import date
from typing import Any

import httpx

from aurafarm.core.languages import usages_from_repositories
from aurafarm.schemas import ActivityDay
from aurafarm.schemas import ActivitySnapshot
from aurafarm.schemas import ActivityWeek
from aurafarm.schemas import DashboardStats
from aurafarm.schemas import UserProfile


logger = logging.getLogger(__name__)

USER_AGENT = "aurafarm"
GH_LOGIN_HINT = "Please install 'gh' CLI and authenticate with 'gh auth login'"
MAX_REPOSITORY_PAGES = 20

REPOSITORIES_FIELD = """
    repositories(
      first: 100
      after: $cursor
      ownerAffiliations: OWNER
      isFork: false
      orderBy: {field: UPDATED_AT, direction: DESC}
    ) {
      totalCount
      pageInfo { hasNextPage endCursor }
      nodes {
        languages(first: 20, orderBy: {field: SIZE, direction: DESC}) {
          edges {
            size
            node { name color }
          }
        }
      }
    }
"""

DASHBOARD_QUERY = (
    """
query($login: String!, $cursor: String) {
  user(login: $login) {
    name
    login
    followers { totalCount }
"""
    + REPOSITORIES_FIELD
    + """
    contributionsCollection {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""
)

REPOSITORIES_QUERY = (
    """
query($login: String!, $cursor: String) {
  user(login: $login) {
"""
    + REPOSITORIES_FIELD
    + """
  }
}
"""
)


def token_from_gh_cli() -> str:
    """Return the token of the account logged in with the GitHub CLI."""

    try:
        completed = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            check=True,
            timeout=10,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise ValueError(GH_LOGIN_HINT) from exc

    token = completed.stdout.strip()
    if not token:
        raise ValueError(GH_LOGIN_HINT)
    return token


def fetch_authenticated_user(token: str, api_base_url: str) -> dict[str, str | int]:
    """Fetch basic profile data for the token owner from GitHub REST API."""

    response = httpx.get(
        f"{api_base_url.rstrip('/')}/user",
        headers={
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        },
        timeout=15.0,
    )
    response.raise_for_status()

    payload: Any = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub user response is invalid")

    raw_id = payload.get("id")
    raw_login = payload.get("login")
    if not isinstance(raw_id, int) or not isinstance(raw_login, str) or not raw_login:
        raise ValueError("GitHub user response is missing required fields")

    return {"id": raw_id, "login": raw_login}


def _query_user(
    graphql_url: str, token: str, query: str, variables: dict[str, Any]
) -> Mapping[str, Any]:
    response = httpx.post(
        graphql_url,
        json={"query": query, "variables": variables},
        headers={
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        },
        timeout=20.0,
    )
    response.raise_for_status()

    payload = response.json()
    if not isinstance(payload, Mapping):
        raise ValueError("GitHub GraphQL response is invalid")

    if payload.get("errors"):
        raise ValueError("GitHub GraphQL returned errors")

    data = payload.get("data")
    if not isinstance(data, Mapping):
        raise ValueError("GitHub GraphQL data is missing")

    user = data.get("user")
    if not isinstance(user, Mapping):
        raise ValueError("GitHub user not found")

    return user


def _next_cursor(repositories: Any) -> str | None:
    if not isinstance(repositories, Mapping):
        return None
    page_info = repositories.get("pageInfo")
    if not isinstance(page_info, Mapping) or not page_info.get("hasNextPage"):
        return None
    cursor = page_info.get("endCursor")
    return cursor if isinstance(cursor, str) and cursor else None


def fetch_dashboard_stats(
    username: str,
    token: str,
    graphql_url: str
) -> dict[str, Any]:
    """Fetch profile, contribution calendar and all owned repositories' languages.

    Repositories come 100 per page; later pages are requested without the
    calendar and their nodes are merged into the first response.
    """

    if not token:
        raise ValueError("GITHUB_TOKEN is required for GraphQL requests")

    user = dict(
        _query_user(graphql_url, token, DASHBOARD_QUERY, {"login": username, "cursor": None})
    )
    repositories = user.get("repositories")
    if not isinstance(repositories, Mapping):
        return user

    nodes = list(repositories.get("nodes") or [])
    cursor = _next_cursor(repositories)
    pages = 1
    while cursor is not None:
        if pages >= MAX_REPOSITORY_PAGES:
            logger.warning(
                "Stopped after %d repository pages; languages are incomplete", pages
            )
            break
        page = _query_user(
            graphql_url, token, REPOSITORIES_QUERY, {"login": username, "cursor": cursor}
        ).get("repositories")
        if not isinstance(page, Mapping):
            break
        nodes.extend(page.get("nodes") or [])
        cursor = _next_cursor(page)
        pages += 1

    user["repositories"] = {**repositories, "nodes": nodes}
    return user


def parse_snapshot(calendar: Mapping[str, Any]) -> ActivitySnapshot:
    """Build an activity snapshot from a GraphQL contributionCalendar object."""

    weeks = calendar.get("weeks")
    if not isinstance(weeks, list):
        raise ValueError("GitHub contribution weeks are missing")

    parsed_weeks: list[ActivityWeek] = []
    for week in weeks:
        if not isinstance(week, Mapping):
            continue
        contribution_days = week.get("contributionDays")
        if not isinstance(contribution_days, list):
            continue

        days: list[ActivityDay] = []
        for item in contribution_days:
            if not isinstance(item, Mapping):
                continue
            raw_date = item.get("date")
            raw_count = item.get("contributionCount")
            if not isinstance(raw_date, str) or not isinstance(raw_count, int):
                continue
            try:
                parsed_day = date.fromisoformat(raw_date)
            except ValueError:
                continue
            days.append(ActivityDay(date=parsed_day, count=max(0, raw_count)))

        parsed_weeks.append(ActivityWeek(days=tuple(days[:7])))

    raw_total = calendar.get("totalContributions")
    if isinstance(raw_total, int) and raw_total >= 0:
        total = raw_total
    else:
        total = sum(day.count for week in parsed_weeks for day in week.days)

    return ActivitySnapshot(weeks=tuple(parsed_weeks), total=total)


def _total_count(value: Any) -> int:
    if isinstance(value, Mapping) and isinstance(value.get("totalCount"), int):
        return value["totalCount"]
    return 0


def parse_stats(user: Mapping[str, Any]) -> DashboardStats:
    """Convert a raw GraphQL user object into dashboard input data."""

    raw_login = user.get("login")
    if not isinstance(raw_login, str) or not raw_login:
        raise ValueError("GitHub user login is missing")

    collection = user.get("contributionsCollection")
    if not isinstance(collection, Mapping):
        raise ValueError("GitHub contributionsCollection is missing")

    calendar = collection.get("contributionCalendar")
    if not isinstance(calendar, Mapping):
        raise ValueError("GitHub contributionCalendar is missing")

    repositories = user.get("repositories")
    nodes = repositories.get("nodes") if isinstance(repositories, Mapping) else None

    raw_name = user.get("name")
    profile = UserProfile(
        login=raw_login,
        name=raw_name if isinstance(raw_name, str) and raw_name else None,
        followers=_total_count(user.get("followers")),
        repositories=_total_count(repositories),
    )
    return DashboardStats(
        profile=profile,
        snapshot=parse_snapshot(calendar),
        usages=tuple(usages_from_repositories(nodes if isinstance(nodes, list) else [])),
    )
