import hashlib

from models import Channel


def generate_channel_id(channel: Channel) -> str:
    """Стабильный идентификатор канала для избранного: хэш названия, URL и группы."""
    key = f"{channel.title}{channel.url}{channel.group_title}"
    return hashlib.sha1(key.encode("utf-8")).hexdigest()
