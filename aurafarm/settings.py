from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


DEFAULT_CACHE_PATH = Path.home() / ".cache" / "aurafarm" / "stats.db"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    """

    github_token: str | None = None
    github_api_base_url: str = "https://api.github.com"
    github_graphql_url: str = "https://api.github.com/graphql"
    database_url: str = f"sqlite+pysqlite:///{DEFAULT_CACHE_PATH}"
    cache_ttl_seconds: int = 3600

    calendar_minimum_weeks: int = 10
    calendar_fixed_margin: int = 6
    top_languages: int = 5
    pie_radius: int = 6

    log_level: str = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1
    rate_limit_per_minute: int = 30
    rate_limit_window_seconds: int = 60

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
