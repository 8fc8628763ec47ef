"""Per-row thumbnail downloads."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO

import httpx
from PIL import Image, ImageOps, UnidentifiedImageError

from meli_search.config import ThumbnailSettings
from meli_search.logging import logger
from meli_search.services.exceptions import ThumbnailError

ALLOWED_SCHEMES = frozenset({"http", "https"})


@dataclass(slots=True, frozen=True)
class Thumbnail:
    data: bytes
    width: int
    height: int
    source_url: str


class ThumbnailService:
    """Download and decode a single product thumbnail.

    An absent or malformed URL is not an error: ``fetch`` returns ``None`` and
    the row keeps an empty image slot. Only transport-level failures raise.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: ThumbnailSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or ThumbnailSettings()

    @staticmethod
    def parse_url(raw: str | None) -> httpx.URL | None:
        value = (raw or "").strip()
        if not value:
            return None
        try:
            url = httpx.URL(value)
        except (httpx.InvalidURL, TypeError, ValueError):
            return None
        if url.scheme not in ALLOWED_SCHEMES or not url.host:
            return None
        return url

    async def fetch(self, raw_url: str | None) -> Thumbnail | None:
        url = self.parse_url(raw_url)
        if url is None:
            logger.debug("thumbnail_skipped", url=raw_url)
            return None

        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            logger.warning("thumbnail_fetch_failed", url=str(url), status_code=status_code)
            raise ThumbnailError(f"Thumbnail request failed ({status_code})") from exc
        except httpx.RequestError as exc:
            logger.warning("thumbnail_fetch_failed", url=str(url), error=str(exc))
            raise ThumbnailError(f"Thumbnail request failed: {exc}") from exc

        return self._decode(response.content, source=str(url))

    def _decode(self, raw: bytes, *, source: str) -> Thumbnail | None:
        if not raw:
            logger.info("thumbnail_empty", source=source)
            return None
        limit = self._settings.max_side_length
        try:
            with Image.open(BytesIO(raw)) as image:
                image = ImageOps.exif_transpose(image)
                if max(image.size) > limit:
                    image.thumbnail((limit, limit))
                if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
                    image = image.convert("RGBA")
                    background = Image.new("RGBA", image.size, (255, 255, 255, 255))
                    background.paste(image, mask=image.split()[3])
                    image = background.convert("RGB")
                elif image.mode != "RGB":
                    image = image.convert("RGB")
                buffer = BytesIO()
                image.save(buffer, format="JPEG", quality=self._settings.jpeg_quality)
                width, height = image.size
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            logger.info("thumbnail_undecodable", source=source, error=str(exc))
            return None
        return Thumbnail(data=buffer.getvalue(), width=width, height=height, source_url=source)


__all__ = ["Thumbnail", "ThumbnailService"]
