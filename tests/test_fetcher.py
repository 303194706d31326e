"""Tests for playlist and logo fetching helpers."""

import asyncio

import httpx
import pytest

from utils.fetcher import (
    fetch_playlist, fetch_logo, decode_playlist, is_valid_source_url,
    PlaylistFetchError, LogoFetchError,
)


def make_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestSourceUrl:

    @pytest.mark.parametrize("url", ["http://example.com/list.m3u", "https://example.com:8080/a.m3u8"])
    def test_valid(self, url):
        assert is_valid_source_url(url)

    @pytest.mark.parametrize("url", ["ftp://example.com/a.m3u", "example.com/a.m3u", "http://", "http://[::1"])
    def test_invalid(self, url):
        assert not is_valid_source_url(url)


class TestFetchPlaylist:

    def test_decodes_body(self):
        client = make_client(lambda request: httpx.Response(200, content="\ufeff#EXTM3U\n".encode("utf-8")))
        assert asyncio.run(fetch_playlist(client, "http://example.com/list.m3u")) == "#EXTM3U\n"

    def test_malformed_url_is_wrapped(self):
        client = make_client(lambda request: httpx.Response(200))
        with pytest.raises(PlaylistFetchError):
            asyncio.run(fetch_playlist(client, "http://[::1"))

    def test_error_status(self):
        client = make_client(lambda request: httpx.Response(404))
        with pytest.raises(PlaylistFetchError, match="Failed to fetch M3U data: 404"):
            asyncio.run(fetch_playlist(client, "http://example.com/list.m3u"))


class TestFetchLogo:

    def test_error_status(self):
        client = make_client(lambda request: httpx.Response(500))
        with pytest.raises(LogoFetchError):
            asyncio.run(fetch_logo(client, "http://example.com/logo.png"))


def test_decode_playlist_ignores_bad_bytes():
    assert decode_playlist(b"#EXTM3U\xff\n") == "#EXTM3U\n"
