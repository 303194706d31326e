import re
from typing import Callable, Optional

from logging_conf import get_logger
from models import Channel

logger = get_logger("parser")

# Наблюдатель получает (уровень, сообщение), например ("warning", "...")
ParseObserver = Callable[[str, str], None]

EXTINF_PREFIX = "#EXTINF:"
DEFAULT_GROUP = "No Group"
DEFAULT_TITLE = "No title"

TVG_ID_RE = re.compile(r'tvg-id="([^"]*)"')
TVG_NAME_RE = re.compile(r'tvg-name="([^"]*)"')
TVG_LOGO_RE = re.compile(r'tvg-logo="([^"]*)"')
GROUP_TITLE_RE = re.compile(r'group-title="([^"]*)"')


def _notify(observer: Optional[ParseObserver], level: str, message: str) -> None:
    getattr(logger, level)(message)
    if observer is None:
        return
    try:
        observer(level, message)
    except Exception as e:
        # Ошибка наблюдателя не должна влиять на результат разбора
        logger.error(f"Ошибка наблюдателя парсера: {e}")


def _attribute(pattern: re.Pattern, extinf: str) -> str:
    match = pattern.search(extinf)
    return match.group(1) if match else ""


def parse_extinf(extinf: str, url: str) -> Optional[Channel]:
    """Собирает канал из строки #EXTINF и следующей за ней строки URL.

    Возвращает None, если запись собрать не удалось.
    """
    if not isinstance(extinf, str) or not isinstance(url, str):
        return None
    url = url.strip()
    if not extinf or not url:
        return None

    tvg_id = _attribute(TVG_ID_RE, extinf)
    tvg_name = _attribute(TVG_NAME_RE, extinf)
    tvg_logo = _attribute(TVG_LOGO_RE, extinf)
    group_title = _attribute(GROUP_TITLE_RE, extinf)

    # Название канала — всё после последней запятой
    title = ""
    if "," in extinf:
        title = extinf.rsplit(",", 1)[1].strip()

    return Channel(
        title=title or tvg_name or DEFAULT_TITLE,
        tvg_id=tvg_id,
        tvg_name=tvg_name,
        tvg_logo=tvg_logo,
        group_title=group_title or DEFAULT_GROUP,
        url=url,
    )


def parse_m3u(content, observer: Optional[ParseObserver] = None) -> list[Channel]:
    """Разбирает текст плейлиста M3U в список каналов.

    Никогда не бросает исключений: некорректный ввод даёт пустой список,
    некорректные записи пропускаются. Заголовок #EXTM3U не обязателен.
    """
    if content is None:
        _notify(observer, "warning", "M3U content is undefined or null")
        return []
    if not isinstance(content, str):
        _notify(observer, "warning", f"M3U content is not a string: {type(content).__name__}")
        return []
    if not content.strip():
        _notify(observer, "warning", "M3U content is empty string")
        return []

    try:
        lines = [line.strip() for line in content.split("\n")]
        lines = [line for line in lines if line]

        channels = []
        skipped = 0
        i = 0
        while i < len(lines):
            line = lines[i]
            if line.startswith(EXTINF_PREFIX):
                url = lines[i + 1] if i + 1 < len(lines) else None
                if url is not None and not url.startswith("#"):
                    try:
                        channel = parse_extinf(line, url)
                    except Exception as e:
                        _notify(observer, "error", f"Error parsing EXTINF line {line!r}: {e}")
                        channel = None
                    if channel is not None:
                        channels.append(channel)
                    else:
                        skipped += 1
                    # Пропускаем строку URL
                    i += 2
                    continue
                skipped += 1
                _notify(observer, "debug", f"EXTINF line without URL skipped: {line!r}")
            i += 1
    except Exception as e:
        _notify(observer, "error", f"Error parsing M3U content: {e}")
        return []

    _notify(observer, "info", f"Successfully parsed {len(channels)} channels ({skipped} skipped)")
    return channels
