"""Result list controller: input events in, rendered list out."""

from __future__ import annotations

import asyncio
from typing import Any, Coroutine

from meli_search.logging import logger
from meli_search.services.exceptions import SearchError
from meli_search.services.search import SearchService
from meli_search.services.thumbnails import ThumbnailService
from meli_search.ui.rows import ProductRow
from meli_search.ui.state import (
    Event,
    InputChanged,
    Populated,
    ResultListState,
    ResultListStore,
    SearchFailed,
    SearchSucceeded,
    StartSearch,
    reduce,
)
from meli_search.ui.view import ResultListView


class ResultListController:
    """Owns the query term, the current results and a fixed pool of row slots.

    Searches and thumbnail downloads run as background tasks on the running
    event loop. Their completions re-enter through :func:`reduce`, which drops
    results belonging to anything but the latest search.
    """

    def __init__(
        self,
        search_service: SearchService,
        thumbnail_service: ThumbnailService,
        view: ResultListView,
        *,
        visible_rows: int = 5,
        store: ResultListStore | None = None,
    ) -> None:
        if visible_rows < 1:
            raise ValueError("visible_rows must be positive")
        self.store = store or ResultListStore()
        self._search = search_service
        self._view = view
        self._rows = [
            ProductRow(index, view, thumbnail_service, self._spawn)
            for index in range(visible_rows)
        ]
        self._first_row = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._render_lock = asyncio.Lock()
        self._rendered: ResultListState | None = None

    @property
    def state(self) -> ResultListState:
        return self.store.state

    @property
    def rows(self) -> tuple[ProductRow, ...]:
        return tuple(self._rows)

    @property
    def first_row(self) -> int:
        return self._first_row

    @property
    def visible_rows(self) -> int:
        return len(self._rows)

    async def on_input_changed(self, term: str) -> None:
        await self._dispatch(InputChanged(term=term))

    async def scroll_to(self, first_row: int) -> bool:
        """Re-bind the row pool to a window starting at ``first_row``.

        Returns ``False`` when there is no list to scroll or the window does
        not move.
        """

        async with self._render_lock:
            state = self.store.state
            if not isinstance(state, Populated) or state is not self._rendered:
                return False
            target = max(0, min(first_row, len(state.items) - 1))
            if target == self._first_row:
                return False
            self._first_row = target
            await self._bind_rows(state)
            return True

    async def scroll_by(self, delta: int) -> bool:
        return await self.scroll_to(self._first_row + delta)

    async def drain(self) -> None:
        """Wait until every background search and thumbnail task has finished."""

        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _dispatch(self, event: Event) -> None:
        previous = self.store.state
        effect = reduce(self.store, event)
        if effect is not None:
            logger.info("search_started", term=effect.term, sequence=effect.sequence)
            self._spawn(self._run_search(effect), f"search-{effect.sequence}")
        if self.store.state is not previous:
            await self._render()

    async def _run_search(self, effect: StartSearch) -> None:
        try:
            items = await self._search.search(effect.term)
        except SearchError as exc:
            event: Event = SearchFailed(sequence=effect.sequence, kind=exc.kind)
        else:
            event = SearchSucceeded(sequence=effect.sequence, items=items)
        if effect.sequence != self.store.sequence:
            logger.info(
                "search_result_discarded",
                term=effect.term,
                sequence=effect.sequence,
                latest=self.store.sequence,
            )
        await self._dispatch(event)

    async def _render(self) -> None:
        # Renders run one at a time; a render that finds a newer state on
        # resume stops and leaves the rows to the render queued behind it.
        async with self._render_lock:
            state = self.store.state
            if state is self._rendered:
                return
            self._rendered = state
            await self._view.render_state(state)
            self._first_row = 0
            if isinstance(state, Populated):
                await self._bind_rows(state)
            else:
                for row in self._rows:
                    await row.clear()

    async def _bind_rows(self, state: Populated) -> None:
        for slot, row in enumerate(self._rows):
            if self.store.state is not state:
                logger.debug("row_binding_superseded", slot=slot)
                return
            position = self._first_row + slot
            if position < len(state.items):
                await row.configure(state.items[position], position + 1)
            else:
                await row.clear()

    def _spawn(self, coro: Coroutine[Any, Any, None], name: str) -> asyncio.Task[None]:
        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "background_task_failed",
                task=task.get_name(),
                exception_type=exc.__class__.__name__,
                error=str(exc),
            )


__all__ = ["ResultListController"]
