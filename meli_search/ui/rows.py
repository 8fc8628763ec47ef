"""Reusable row slots with stale-completion protection."""

from __future__ import annotations

from typing import Any, Callable, Coroutine

from meli_search.domain.models import Item
from meli_search.logging import logger
from meli_search.services.exceptions import ThumbnailError
from meli_search.services.thumbnails import ThumbnailService
from meli_search.ui.view import ResultListView, RowContent
from meli_search.utils.money import format_price

Spawn = Callable[[Coroutine[Any, Any, None], str], Any]


def row_content(item: Item, position: int) -> RowContent:
    return RowContent(
        position=position,
        title=item.title,
        price=format_price(item.price),
        has_thumbnail=bool(item.thumbnail_url),
    )


class ProductRow:
    """A list slot that is re-bound to different items over its lifetime.

    Every ``configure``/``clear`` call bumps ``generation``. A thumbnail
    completion is applied only when the generation captured at launch still
    matches, so a slow download never lands on the item that replaced it.
    """

    __slots__ = ("index", "generation", "item", "_view", "_thumbnails", "_spawn")

    def __init__(
        self,
        index: int,
        view: ResultListView,
        thumbnails: ThumbnailService,
        spawn: Spawn,
    ) -> None:
        self.index = index
        self.generation = 0
        self.item: Item | None = None
        self._view = view
        self._thumbnails = thumbnails
        self._spawn = spawn

    async def configure(self, item: Item, position: int) -> None:
        self.generation += 1
        self.item = item
        await self._view.render_row(self.index, row_content(item, position))
        if item.thumbnail_url:
            self._spawn(
                self._load_thumbnail(self.generation, item.thumbnail_url),
                f"thumbnail-row-{self.index}",
            )

    async def clear(self) -> None:
        self.generation += 1
        if self.item is None:
            return
        self.item = None
        await self._view.clear_row(self.index)

    def is_stale(self, generation: int) -> bool:
        if generation == self.generation:
            return False
        logger.debug(
            "thumbnail_discarded",
            row=self.index,
            generation=generation,
            current=self.generation,
        )
        return True

    async def _load_thumbnail(self, generation: int, url: str) -> None:
        try:
            thumbnail = await self._thumbnails.fetch(url)
        except ThumbnailError:
            if not self.is_stale(generation):
                await self._view.render_row_error(self.index)
            return
        if thumbnail is None or self.is_stale(generation):
            return
        await self._view.render_row_image(self.index, thumbnail)


__all__ = ["ProductRow", "row_content"]
