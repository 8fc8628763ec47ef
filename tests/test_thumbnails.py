"""Tests for thumbnail downloads and decoding."""

from __future__ import annotations

from io import BytesIO

import httpx
import pytest
from PIL import Image

from meli_search.config import ThumbnailSettings
from meli_search.services.exceptions import ErrorKind, ThumbnailError
from meli_search.services.thumbnails import ThumbnailService


@pytest.mark.asyncio
@pytest.mark.parametrize("url", [None, "", "   ", "not a url", "ftp://files.example/a.jpg", "http://"])
async def test_fetch_skips_missing_or_malformed_urls(url):
    calls = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await ThumbnailService(client).fetch(url) is None

    assert calls == []


@pytest.mark.asyncio
async def test_fetch_decodes_and_normalizes_image(png_bytes):
    async def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "http://http2.mlstatic.com/D_123-I.jpg"
        return httpx.Response(200, content=png_bytes, headers={"Content-Type": "image/png"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        thumbnail = await ThumbnailService(client).fetch("http://http2.mlstatic.com/D_123-I.jpg")

    assert thumbnail is not None
    assert (thumbnail.width, thumbnail.height) == (40, 20)
    with Image.open(BytesIO(thumbnail.data)) as decoded:
        assert decoded.format == "JPEG"
        assert decoded.mode == "RGB"


@pytest.mark.asyncio
async def test_fetch_downscales_large_images():
    buffer = BytesIO()
    Image.new("RGB", (800, 400), (0, 128, 0)).save(buffer, format="JPEG")

    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=buffer.getvalue())

    settings = ThumbnailSettings(max_side_length=100)
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        thumbnail = await ThumbnailService(client, settings).fetch("https://img.example/big.jpg")

    assert thumbnail is not None
    assert (thumbnail.width, thumbnail.height) == (100, 50)


@pytest.mark.asyncio
async def test_fetch_404_raises_thumbnail_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ThumbnailError) as exc_info:
            await ThumbnailService(client).fetch("https://img.example/missing.jpg")

    assert exc_info.value.kind is ErrorKind.TRANSPORT_FAILURE


@pytest.mark.asyncio
async def test_fetch_network_error_raises_thumbnail_error():
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(ThumbnailError):
            await ThumbnailService(client).fetch("https://img.example/slow.jpg")


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [b"", b"<html>not an image</html>"])
async def test_fetch_undecodable_bytes_leave_slot_empty(content):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=content)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        assert await ThumbnailService(client).fetch("https://img.example/x.jpg") is None
