import uvicorn
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, File, UploadFile, HTTPException, Request, Depends, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from logging_conf import get_logger
from models import Channel, ParseTextRequest, RefreshRequest, SettingsUpdate, HistoryRequest
from utils.parser import parse_m3u
from utils.channels import group_channels, filter_channels
from utils.cache import save_channels_to_cache, get_channels_from_cache, get_cache_info, clear_channels_cache
from utils.favorites import (
    add_favorite, remove_favorite, toggle_favorite, is_favorite,
    get_favorites, get_favorite_channels, clear_favorites,
)
from utils.generate_id import generate_channel_id
from utils.settings_store import get_settings, save_settings, add_url_to_history, clear_settings
from utils.fetcher import (
    fetch_playlist, fetch_logo, decode_playlist, is_valid_source_url, build_timeout,
    PlaylistFetchError, LogoFetchError,
)

logger = get_logger("main")

NO_CHANNELS_IN_FILE = "No channels found in the file. Please check the file format."
NO_CHANNELS_IN_RESPONSE = "No channels found in the response. Please check the URL."
NO_CHANNELS_IN_TEXT = "No channels found in the content. Please check the format."


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Общий HTTP-клиент для загрузки плейлистов и логотипов
    app.state.http_client = httpx.AsyncClient(timeout=build_timeout())
    yield
    await app.state.http_client.aclose()


app = FastAPI(title="IPTV M3U Manager", lifespan=lifespan)


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def _cached_channels(db: Session) -> list[Channel]:
    cached = get_channels_from_cache(db)
    return cached.channels if cached else []


# === Импорт плейлиста ===
@app.post("/upload")
async def upload_playlist(file: UploadFile = File(...), db: Session = Depends(get_db)):
    filename = file.filename or ""
    if not filename.lower().endswith((".m3u", ".m3u8")):
        raise HTTPException(status_code=400, detail="Please select a valid M3U file")

    content = decode_playlist(await file.read())
    if not content.strip():
        raise HTTPException(status_code=400, detail="File is empty")

    channels = parse_m3u(content)
    if not channels:
        logger.warning(f"В файле {filename} не найдено каналов")
        raise HTTPException(status_code=422, detail=NO_CHANNELS_IN_FILE)

    save_channels_to_cache(db, channels, "file", filename)
    return {
        "message": f'File "{filename}" loaded successfully with {len(channels)} channels',
        "count": len(channels),
        "channels": channels,
    }

@app.post("/parse-text")
async def parse_text(data: ParseTextRequest):
    if not data.content.strip():
        raise HTTPException(status_code=400, detail="Empty content")

    channels = parse_m3u(data.content)
    if not channels:
        raise HTTPException(status_code=422, detail=NO_CHANNELS_IN_TEXT)
    return {"count": len(channels), "channels": channels}

@app.post("/api/refresh-m3u")
async def refresh_m3u(
        data: RefreshRequest,
        db: Session = Depends(get_db),
        client: httpx.AsyncClient = Depends(get_http_client)
):
    url = data.url.strip()
    if not url:
        raise HTTPException(status_code=400, detail="Please enter a valid M3U URL")
    if not is_valid_source_url(url):
        raise HTTPException(status_code=400, detail="Please enter a valid URL starting with http:// or https://")

    save_settings(db, m3u_url=url)
    add_url_to_history(db, url)

    try:
        content = await fetch_playlist(client, url)
    except PlaylistFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))

    if not content.strip():
        raise HTTPException(status_code=502, detail="Received empty content from the server")

    channels = parse_m3u(content)
    if not channels:
        logger.warning(f"По адресу {url} не найдено каналов")
        raise HTTPException(status_code=422, detail=NO_CHANNELS_IN_RESPONSE)

    save_channels_to_cache(db, channels, "url", url)
    return {
        "message": f"Data updated successfully with {len(channels)} channels",
        "count": len(channels),
        "channels": channels,
    }

# === Прокси для обхода CORS ===
@app.get("/api/proxy-m3u", response_class=PlainTextResponse)
async def proxy_m3u(url: Optional[str] = None, client: httpx.AsyncClient = Depends(get_http_client)):
    if not url:
        raise HTTPException(status_code=400, detail="No url provided")
    try:
        content = await fetch_playlist(client, url)
    except PlaylistFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return PlainTextResponse(content)

@app.get("/api/proxy-logo")
async def proxy_logo(url: Optional[str] = None, client: httpx.AsyncClient = Depends(get_http_client)):
    if not url:
        raise HTTPException(status_code=400, detail="No url provided")
    try:
        body, content_type = await fetch_logo(client, url)
    except LogoFetchError as e:
        logger.warning(f"Логотип {url}: {e}")
        raise HTTPException(status_code=502, detail="Failed to fetch image")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error(f"Ошибка загрузки логотипа {url}: {e}")
        raise HTTPException(status_code=500, detail="Error fetching image")

    return Response(
        content=body,
        media_type=content_type,
        headers={"Cache-Control": "public, max-age=86400"},
    )

# === Каналы ===
@app.get("/channels")
async def list_channels(
        search: Optional[str] = None,
        group: Optional[str] = None,
        db: Session = Depends(get_db)
):
    cached = get_channels_from_cache(db)
    if not cached:
        return {"cached": False, "total": 0, "channels": []}

    # Если фильтры не переданы, берём сохранённые в настройках
    stored = get_settings(db)
    search = stored.search_term if search is None else search
    group = stored.selected_group if group is None else group

    channels = filter_channels(cached.channels, search_term=search, selected_group=group)
    return {"cached": True, "total": len(cached.channels), "channels": channels}

@app.get("/groups")
async def list_groups(db: Session = Depends(get_db)):
    return group_channels(_cached_channels(db))

@app.get("/stats")
async def stats(db: Session = Depends(get_db)):
    channels = _cached_channels(db)
    return {
        "totalChannels": len(channels),
        "totalGroups": len(group_channels(channels)),
        "totalFavorites": len(get_favorites(db)),
    }

# === Кэш ===
@app.get("/cache")
async def cache_info(db: Session = Depends(get_db)):
    info = get_cache_info(db)
    if not info:
        raise HTTPException(status_code=404, detail="Cache is empty")
    return info

@app.delete("/cache")
async def delete_cache(db: Session = Depends(get_db)):
    clear_channels_cache(db)
    return {"message": "Cache cleared"}

# === Избранное ===
@app.get("/favorites")
async def list_favorites(db: Session = Depends(get_db)):
    return get_favorite_channels(db)

@app.post("/favorites")
async def create_favorite(channel: Channel, db: Session = Depends(get_db)):
    added = add_favorite(db, channel)
    return {"id": generate_channel_id(channel), "isFavorite": True, "added": added}

@app.post("/favorites/toggle")
async def toggle_favorite_route(channel: Channel, db: Session = Depends(get_db)):
    state = toggle_favorite(db, channel)
    return {"id": generate_channel_id(channel), "isFavorite": state}

@app.delete("/favorites")
async def delete_all_favorites(db: Session = Depends(get_db)):
    removed = clear_favorites(db)
    return {"message": "Favorites cleared", "removed": removed}

@app.get("/favorites/{channel_id}")
async def favorite_status(channel_id: str, db: Session = Depends(get_db)):
    return {"id": channel_id, "isFavorite": is_favorite(db, channel_id)}

@app.delete("/favorites/{channel_id}")
async def delete_favorite(channel_id: str, db: Session = Depends(get_db)):
    if not remove_favorite(db, channel_id):
        raise HTTPException(status_code=404, detail="Favorite not found")
    return {"message": "Favorite removed"}

# === Настройки ===
@app.get("/settings")
async def read_settings(db: Session = Depends(get_db)):
    return get_settings(db)

@app.patch("/settings")
async def update_settings(data: SettingsUpdate, db: Session = Depends(get_db)):
    return save_settings(db, **data.model_dump(exclude_none=True))

@app.post("/settings/history")
async def add_history(data: HistoryRequest, db: Session = Depends(get_db)):
    url = data.url.strip()
    if not url:
        raise HTTPException(status_code=400, detail="URL cannot be empty")
    return add_url_to_history(db, url)

@app.delete("/settings")
async def reset_settings(db: Session = Depends(get_db)):
    clear_settings(db)
    return {"message": "Settings cleared"}


if __name__ == "__main__":
    logger.info(
        f"Запуск: DEBUG={settings.DEBUG}, APP_HOST={settings.APP_HOST}, APP_PORT={settings.APP_PORT}, "
        f"DATABASE_URL={settings.DATABASE_URL}, CACHE_EXPIRY_DAYS={settings.CACHE_EXPIRY_DAYS}"
    )

    uvicorn.run(
        "main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.DEBUG,
        log_level="info"
    )
