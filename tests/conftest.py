"""Shared fixtures for controller and service tests."""

from __future__ import annotations

import asyncio
from io import BytesIO

import pytest
from PIL import Image

from meli_search.domain.models import Item
from meli_search.services.exceptions import SearchError, ThumbnailError
from meli_search.services.thumbnails import Thumbnail


class RecordingView:
    """In-memory ResultListView capturing every render call."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.states: list = []
        self.rows: dict[int, object] = {}
        self.images: dict[int, Thumbnail] = {}
        self.errors: set[int] = set()

    async def render_state(self, state) -> None:
        self.calls.append(("state", state))
        self.states.append(state)

    async def render_row(self, index, content) -> None:
        self.calls.append(("row", index, content))
        self.rows[index] = content
        self.images.pop(index, None)
        self.errors.discard(index)

    async def render_row_image(self, index, thumbnail) -> None:
        self.calls.append(("image", index, thumbnail))
        self.images[index] = thumbnail

    async def render_row_error(self, index) -> None:
        self.calls.append(("row_error", index))
        self.errors.add(index)

    async def clear_row(self, index) -> None:
        self.calls.append(("clear", index))
        self.rows.pop(index, None)
        self.images.pop(index, None)
        self.errors.discard(index)


class ScriptedSearchService:
    """Search double whose calls complete only when the test releases them."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._pending: dict[str, list[asyncio.Future]] = {}

    async def search(self, term: str) -> list[Item]:
        self.calls.append(term)
        future = asyncio.get_running_loop().create_future()
        self._pending.setdefault(term, []).append(future)
        outcome = await future
        if isinstance(outcome, SearchError):
            raise outcome
        return outcome

    def resolve(self, term: str, outcome) -> None:
        self._pending[term].pop(0).set_result(outcome)


class ScriptedThumbnailService:
    """Thumbnail double with per-URL gates; un-gated URLs complete immediately."""

    def __init__(self, outcomes: dict[str, object] | None = None) -> None:
        self.outcomes = outcomes or {}
        self.calls: list[str | None] = []
        self.gates: dict[str, asyncio.Event] = {}

    def gate(self, url: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[url] = event
        return event

    async def fetch(self, url: str | None):
        self.calls.append(url)
        gate = self.gates.get(url or "")
        if gate is not None:
            await gate.wait()
        outcome = self.outcomes.get(url or "")
        if isinstance(outcome, ThumbnailError):
            raise outcome
        return outcome


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGBA", (40, 20), (255, 0, 0, 128)).save(buffer, format="PNG")
    return buffer.getvalue()


def make_thumbnail(url: str) -> Thumbnail:
    return Thumbnail(data=b"jpeg", width=1, height=1, source_url=url)
