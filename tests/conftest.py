"""Shared fixtures: isolated database, mocked upstream HTTP, API client."""

import os
import tempfile

# Настройки должны быть заданы до импорта модулей приложения
_workdir = tempfile.mkdtemp(prefix="iptv-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_workdir, 'test.db')}")
os.environ.setdefault("LOG_DIR", os.path.join(_workdir, "logs"))

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app, get_http_client


SAMPLE_PLAYLIST = """#EXTM3U
#EXTINF:-1 tvg-id="bbc1" tvg-name="BBC One" tvg-logo="http://x/logo.png" group-title="UK",BBC One HD
http://example.com/bbc1.m3u8
#EXTINF:-1 tvg-id="cnn" tvg-name="CNN" group-title="News",CNN International
http://example.com/cnn.m3u8
#EXTINF:-1 tvg-name="Sky News" group-title="News",Sky News
http://example.com/sky.m3u8
#EXTINF:-1,Mystery Channel
http://example.com/mystery.m3u8
"""


@pytest.fixture
def sample_playlist():
    return SAMPLE_PLAYLIST


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def upstream():
    """URL -> httpx.Response (or exception) served by the mocked transport."""
    return {}


@pytest.fixture
def http_client(upstream):
    def handler(request: httpx.Request) -> httpx.Response:
        result = upstream.get(str(request.url))
        if result is None:
            return httpx.Response(404, text="not found")
        if isinstance(result, Exception):
            raise result
        return result

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def client(db, http_client):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_http_client] = lambda: http_client
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
