from typing import Union

from sqlalchemy.orm import Session

from database import Favorite, utcnow
from logging_conf import get_logger
from models import Channel, FavoriteRecord
from utils.generate_id import generate_channel_id

logger = get_logger("favorites")


def _resolve_id(channel_or_id: Union[Channel, str]) -> str:
    if isinstance(channel_or_id, Channel):
        return generate_channel_id(channel_or_id)
    return channel_or_id


def add_favorite(db: Session, channel: Channel) -> bool:
    channel_id = generate_channel_id(channel)
    if db.get(Favorite, channel_id) is not None:
        logger.debug(f"Канал уже в избранном: {channel.title}")
        return False

    db.add(Favorite(id=channel_id, channel=channel.model_dump(by_alias=True), timestamp=utcnow()))
    db.commit()
    logger.info(f"Канал добавлен в избранное: {channel.title}")
    return True


def remove_favorite(db: Session, channel_or_id: Union[Channel, str]) -> bool:
    favorite = db.get(Favorite, _resolve_id(channel_or_id))
    if favorite is None:
        return False

    db.delete(favorite)
    db.commit()
    logger.info(f"Канал удалён из избранного: {favorite.id}")
    return True


def toggle_favorite(db: Session, channel: Channel) -> bool:
    """Переключает избранное и возвращает новое состояние."""
    if is_favorite(db, channel):
        remove_favorite(db, channel)
        return False
    add_favorite(db, channel)
    return True


def is_favorite(db: Session, channel_or_id: Union[Channel, str]) -> bool:
    return db.get(Favorite, _resolve_id(channel_or_id)) is not None


def get_favorites(db: Session) -> list[FavoriteRecord]:
    favorites = db.query(Favorite).order_by(Favorite.timestamp, Favorite.id).all()
    return [
        FavoriteRecord(id=fav.id, channel=Channel.model_validate(fav.channel), timestamp=fav.timestamp)
        for fav in favorites
    ]


def get_favorite_channels(db: Session) -> list[Channel]:
    return [record.channel for record in get_favorites(db)]


def clear_favorites(db: Session) -> int:
    removed = db.query(Favorite).delete()
    db.commit()
    logger.info(f"Избранное очищено, удалено записей: {removed}")
    return removed
