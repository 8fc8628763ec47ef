"""Middleware that injects the per-chat result list controller."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from aiogram import BaseMiddleware, Bot
from aiogram.types import Message, TelegramObject

from meli_search.bot.views import TelegramResultView
from meli_search.i18n import I18nService
from meli_search.logging import logger
from meli_search.services.search import SearchService
from meli_search.services.thumbnails import ThumbnailService
from meli_search.ui.controller import ResultListController


class ControllerRegistry:
    """Lazily creates one controller per chat, sharing the HTTP services."""

    def __init__(
        self,
        *,
        search_service: SearchService,
        thumbnail_service: ThumbnailService,
        i18n: I18nService,
        visible_rows: int = 5,
    ) -> None:
        self.search_service = search_service
        self.thumbnail_service = thumbnail_service
        self.i18n = i18n
        self.visible_rows = visible_rows
        self._controllers: dict[int, ResultListController] = {}

    def get(self, bot: Bot, chat_id: int, locale: str | None = None) -> ResultListController:
        controller = self._controllers.get(chat_id)
        if controller is None:
            view = TelegramResultView(bot, chat_id, self.i18n, locale=locale)
            controller = ResultListController(
                self.search_service,
                self.thumbnail_service,
                view,
                visible_rows=self.visible_rows,
            )
            self._controllers[chat_id] = controller
            logger.info("controller_created", chat_id=chat_id, locale=locale)
        return controller

    def __len__(self) -> int:
        return len(self._controllers)

    async def drain(self) -> None:
        for controller in list(self._controllers.values()):
            await controller.drain()


class SearchContextMiddleware(BaseMiddleware):
    def __init__(self, registry: ControllerRegistry, default_language: str = "es") -> None:
        super().__init__()
        self.registry = registry
        self.default_language = default_language

    async def __call__(
        self,
        handler: Callable[[TelegramObject, Dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: Dict[str, Any],
    ) -> Any:
        if not isinstance(event, Message) or data.get("bot") is None:
            return await handler(event, data)

        from_user = event.from_user
        locale = (from_user.language_code if from_user else None) or self.default_language
        data["locale"] = locale
        data["i18n"] = self.registry.i18n
        data["controller"] = self.registry.get(data["bot"], event.chat.id, locale=locale)
        return await handler(event, data)


__all__ = ["ControllerRegistry", "SearchContextMiddleware"]
