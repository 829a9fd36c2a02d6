import logging
from datetime import datetime
from datetime import timedelta
from datetime import UTC
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from aurafarm.models import CachedResponse


logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on read.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def get_cached_payload(
    db: Session, cache_key: str, ttl_seconds: int, now: datetime
) -> dict[str, Any] | None:
    """Return a cached payload younger than the TTL, or None."""

    try:
        entry = db.scalar(
            select(CachedResponse).where(CachedResponse.cache_key == cache_key)
        )
    except SQLAlchemyError:
        logger.warning("Cache read failed for %s", cache_key, exc_info=True)
        db.rollback()
        return None

    if entry is None:
        return None

    if now - _as_utc(entry.fetched_at) >= timedelta(seconds=ttl_seconds):
        logger.debug("Cache entry %s expired", cache_key)
        return None

    return entry.payload


def store_payload(
    db: Session, cache_key: str, payload: dict[str, Any], now: datetime
) -> None:
    """Insert or refresh the cached payload for a key.

    A failed write only costs a refetch next time, so it is logged and dropped.
    """

    try:
        entry = db.scalar(
            select(CachedResponse).where(CachedResponse.cache_key == cache_key)
        )
        if entry is None:
            db.add(CachedResponse(cache_key=cache_key, payload=payload, fetched_at=now))
        else:
            entry.payload = payload
            entry.fetched_at = now
        db.commit()
    except SQLAlchemyError:
        logger.warning("Cache write failed for %s", cache_key, exc_info=True)
        db.rollback()
