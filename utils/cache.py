from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from config import settings
from database import CacheEntry, utcnow
from logging_conf import get_logger
from models import CachedPlaylist, CacheInfo, Channel

logger = get_logger("cache")

CACHE_KEY = "latest"


def save_channels_to_cache(db: Session, channels: list[Channel], source: str, source_identifier: str) -> None:
    if not channels:
        return

    entry = db.get(CacheEntry, CACHE_KEY)
    if entry is None:
        entry = CacheEntry(id=CACHE_KEY)
        db.add(entry)

    entry.channels = [channel.model_dump(by_alias=True) for channel in channels]
    entry.timestamp = utcnow()
    entry.source = source
    entry.source_identifier = source_identifier
    db.commit()
    logger.info(f"Сохранено в кэш {len(channels)} каналов ({source}: {source_identifier})")


def get_channels_from_cache(db: Session, now: Optional[datetime] = None) -> Optional[CachedPlaylist]:
    """Возвращает кэш, если он есть и не старше CACHE_EXPIRY_DAYS."""
    entry = db.get(CacheEntry, CACHE_KEY)
    if entry is None:
        return None

    now = now or utcnow()
    if now - entry.timestamp > timedelta(days=settings.CACHE_EXPIRY_DAYS):
        logger.info("Кэш каналов устарел")
        return None

    return CachedPlaylist(
        channels=[Channel.model_validate(channel) for channel in entry.channels],
        timestamp=entry.timestamp,
        source=entry.source,
        source_identifier=entry.source_identifier,
    )


def get_cache_info(db: Session) -> Optional[CacheInfo]:
    entry = db.get(CacheEntry, CACHE_KEY)
    if entry is None:
        return None
    return CacheInfo(timestamp=entry.timestamp, source=entry.source, source_identifier=entry.source_identifier)


def clear_channels_cache(db: Session) -> None:
    db.query(CacheEntry).filter(CacheEntry.id == CACHE_KEY).delete()
    db.commit()
    logger.info("Кэш каналов очищен")
