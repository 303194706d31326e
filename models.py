from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # В JSON поля в camelCase, в Python — snake_case; на вход принимаются оба варианта
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Channel(CamelModel):
    title: str
    tvg_id: str = ""
    tvg_name: str = ""
    tvg_logo: str = ""
    group_title: str = "No Group"
    url: str


class ChannelGroup(CamelModel):
    title: str
    count: int


class CacheInfo(CamelModel):
    timestamp: datetime
    source: Literal["file", "url"]
    source_identifier: str


class CachedPlaylist(CacheInfo):
    channels: list[Channel]


class FavoriteRecord(CamelModel):
    id: str
    channel: Channel
    timestamp: datetime


class AppSettings(CamelModel):
    # to_camel даёт "m3UUrl", поэтому алиас задан явно
    m3u_url: str = Field(default="", alias="m3uUrl")
    search_term: str = ""
    selected_group: str = ""
    last_used_urls: list[str] = []


class SettingsUpdate(CamelModel):
    m3u_url: Optional[str] = Field(default=None, alias="m3uUrl")
    search_term: Optional[str] = None
    selected_group: Optional[str] = None
    last_used_urls: Optional[list[str]] = None


class RefreshRequest(CamelModel):
    url: str = ""


class ParseTextRequest(CamelModel):
    content: str = ""


class HistoryRequest(CamelModel):
    url: str
