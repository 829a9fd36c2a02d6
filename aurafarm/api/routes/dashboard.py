from datetime import date
from datetime import datetime
from datetime import UTC
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from aurafarm.core.security import bearer_scheme
from aurafarm.core.security import extract_bearer_token
from aurafarm.db import get_db
from aurafarm.schemas import DashboardPayload
from aurafarm.services.dashboard_service import GitHubAPIError
from aurafarm.services.dashboard_service import InvalidGitHubTokenError
from aurafarm.services.dashboard_service import build_dashboard
from aurafarm.services.dashboard_service import load_stats
from aurafarm.services.mock_data import build_mock_stats
from aurafarm.settings import Settings
from aurafarm.themes import THEMES


SERVICE_NAME = "aurafarm"

router = APIRouter()


def service_version() -> str:
    try:
        return version(SERVICE_NAME)
    except PackageNotFoundError:
        return "unknown"


def get_settings() -> Settings:
    return Settings()


def get_today() -> date:
    return date.today()


@router.get("/")
async def root() -> dict[str, object]:
    """Describe the service and where the dashboards live."""

    return {
        "service": SERVICE_NAME,
        "version": service_version(),
        "dashboards": ["/dashboard/me", "/dashboard/mock"],
        "themes": len(THEMES),
    }


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/themes")
def list_themes() -> list[dict[str, object]]:
    """Return the theme table in cycling order."""

    return [{"index": index, **theme.model_dump()} for index, theme in enumerate(THEMES)]


@router.get("/dashboard/mock", response_model=DashboardPayload)
def get_mock_dashboard(
    columns: int = Query(default=120, ge=1),
    theme: int = Query(default=0, ge=0),
    radius: int | None = Query(default=None, ge=0, le=30),
    seed: int = Query(default=0),
    today: date = Depends(get_today),
    settings: Settings = Depends(get_settings),
) -> DashboardPayload:
    """Return dashboard geometry built from generated data."""

    return build_dashboard(
        build_mock_stats(today, seed=seed),
        columns=columns,
        theme_index=theme,
        today=today,
        settings=settings,
        radius=radius,
    )


@router.get("/dashboard/me", response_model=DashboardPayload)
def get_authenticated_user_dashboard(
    columns: int = Query(default=120, ge=1),
    theme: int = Query(default=0, ge=0),
    radius: int | None = Query(default=None, ge=0, le=30),
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    today: date = Depends(get_today),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> DashboardPayload:
    """Return dashboard geometry for the authenticated GitHub user."""

    token = extract_bearer_token(credentials)

    try:
        stats = load_stats(token, settings, db, datetime.now(UTC))
    except InvalidGitHubTokenError as exc:
        raise HTTPException(status_code=401, detail="GitHub token is invalid") from exc
    except GitHubAPIError as exc:
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc

    return build_dashboard(
        stats,
        columns=columns,
        theme_index=theme,
        today=today,
        settings=settings,
        radius=radius,
    )
