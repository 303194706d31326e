from typing import Iterable

from models import Channel, ChannelGroup
from utils.parser import DEFAULT_GROUP


def _group_of(channel: Channel) -> str:
    return channel.group_title or DEFAULT_GROUP


def group_channels(channels: Iterable[Channel]) -> list[ChannelGroup]:
    counts = {}
    for channel in channels:
        group = _group_of(channel)
        counts[group] = counts.get(group, 0) + 1

    titles = sorted(counts, key=lambda title: (title.casefold(), title))
    return [ChannelGroup(title=title, count=counts[title]) for title in titles]


def filter_channels(channels: Iterable[Channel], search_term: str = "", selected_group: str = "") -> list[Channel]:
    """Фильтр по подстроке в названии/tvg-name и по точному совпадению группы."""
    filtered = list(channels)

    if search_term:
        term = search_term.lower()
        filtered = [
            channel for channel in filtered
            if term in channel.title.lower() or term in channel.tvg_name.lower()
        ]

    if selected_group:
        filtered = [channel for channel in filtered if _group_of(channel) == selected_group]

    return filtered
