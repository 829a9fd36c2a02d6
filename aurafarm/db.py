from collections.abc import Generator
from functools import lru_cache
from pathlib import Path

from sqlalchemy import Engine
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm import Session

from aurafarm.settings import Settings


class Base(DeclarativeBase):
    pass


def get_database_url() -> str:
    settings = Settings()
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is not set")
    return settings.database_url


def ensure_sqlite_directory(database_url: str) -> None:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_engine() -> Engine:
    database_url = get_database_url()
    ensure_sqlite_directory(database_url)
    engine = create_engine(database_url)
    # Tables must be registered on Base before create_all.
    import aurafarm.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    return engine


def get_db() -> Generator[Session, None, None]:
    db = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)()
    try:
        yield db
    finally:
        db.close()
