"""Rendering contract between the controller and a concrete front-end."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from meli_search.services.thumbnails import Thumbnail
from meli_search.ui.state import ResultListState


@dataclass(slots=True, frozen=True)
class RowContent:
    position: int
    title: str
    price: str
    has_thumbnail: bool


class ResultListView(Protocol):
    async def render_state(self, state: ResultListState) -> None: ...

    async def render_row(self, index: int, content: RowContent) -> None: ...

    async def render_row_image(self, index: int, thumbnail: Thumbnail) -> None: ...

    async def render_row_error(self, index: int) -> None: ...

    async def clear_row(self, index: int) -> None: ...


__all__ = ["ResultListView", "RowContent"]
