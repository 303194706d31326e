import httpx

from config import settings
from logging_conf import get_logger

logger = get_logger("fetcher")

DEFAULT_LOGO_TYPE = "image/png"


class PlaylistFetchError(Exception):
    pass


class LogoFetchError(Exception):
    pass


def build_timeout() -> httpx.Timeout:
    return httpx.Timeout(settings.FETCH_TIMEOUT, connect=settings.FETCH_CONNECT_TIMEOUT)


def is_valid_source_url(url: str) -> bool:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


def decode_playlist(raw: bytes) -> str:
    # utf-8-sig убирает BOM, битые байты отбрасываем
    return raw.decode("utf-8-sig", errors="ignore")


async def fetch_playlist(client: httpx.AsyncClient, url: str) -> str:
    """Скачивает текст плейлиста. Ошибки сети и HTTP превращаются в PlaylistFetchError."""
    logger.info(f"Загрузка плейлиста: {url}")
    try:
        response = await client.get(
            url,
            headers={"User-Agent": settings.USER_AGENT},
            follow_redirects=True,
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error(f"Ошибка загрузки плейлиста {url}: {e}")
        raise PlaylistFetchError(f"Failed to fetch M3U data: {e}") from e

    if not response.is_success:
        logger.warning(f"Плейлист {url} вернул статус {response.status_code}")
        raise PlaylistFetchError(f"Failed to fetch M3U data: {response.status_code}")

    content = decode_playlist(response.content)
    logger.info(f"Получено {len(content)} символов с {url}")
    return content


async def fetch_logo(client: httpx.AsyncClient, url: str) -> tuple[bytes, str]:
    response = await client.get(url, follow_redirects=True)
    if not response.is_success:
        raise LogoFetchError(f"Failed to fetch image: {response.status_code}")
    return response.content, response.headers.get("content-type") or DEFAULT_LOGO_TYPE
