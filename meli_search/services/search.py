"""Marketplace search client."""

from __future__ import annotations

from urllib.parse import quote

import httpx
from pydantic import ValidationError

from meli_search.config import SearchSettings
from meli_search.domain.models import Item, SearchResponse
from meli_search.logging import logger
from meli_search.services.exceptions import (
    DecodeFailure,
    EmptyBody,
    InvalidQuery,
    TransportFailure,
)


class SearchService:
    """Forward a free-text term to the public search endpoint and decode the results.

    The service performs exactly one request per call: no retries and no
    caching of identical terms. Timeouts are whatever the shared client was
    built with.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: SearchSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or SearchSettings()

    def build_url(self, term: str) -> httpx.URL:
        if not term or not term.strip():
            raise InvalidQuery("Search term must not be empty.")
        try:
            encoded = quote(term, safe="")
        except UnicodeEncodeError as exc:
            raise InvalidQuery("Search term cannot be percent-encoded.") from exc

        base = str(self._settings.base_url).rstrip("/")
        try:
            return httpx.URL(f"{base}/sites/{self._settings.site_id}/search?q={encoded}")
        except httpx.InvalidURL as exc:
            raise InvalidQuery(f"Search URL is malformed: {exc}") from exc

    async def search(self, term: str) -> list[Item]:
        try:
            url = self.build_url(term)
        except InvalidQuery as exc:
            logger.warning("search_failed", kind=exc.kind.value, error=str(exc))
            raise

        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code if exc.response is not None else "unknown"
            logger.warning(
                "search_failed",
                kind=TransportFailure.kind.value,
                term=term,
                status_code=status_code,
            )
            raise TransportFailure(f"Search request failed ({status_code})") from exc
        except httpx.RequestError as exc:
            logger.warning(
                "search_failed",
                kind=TransportFailure.kind.value,
                term=term,
                error=str(exc),
            )
            raise TransportFailure(f"Search request failed: {exc}") from exc

        if not response.content:
            logger.warning("search_failed", kind=EmptyBody.kind.value, term=term)
            raise EmptyBody("Search response has no payload.")

        try:
            payload = SearchResponse.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning(
                "search_failed",
                kind=DecodeFailure.kind.value,
                term=term,
                errors=exc.error_count(),
            )
            raise DecodeFailure("Search response format is invalid.") from exc

        logger.info("search_completed", term=term, results=len(payload.results))
        return payload.results


__all__ = ["SearchService"]
