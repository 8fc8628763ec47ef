"""Application entrypoint."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from aiogram import Bot, Dispatcher
from aiogram.client.session.aiohttp import AiohttpSession

from meli_search.bot.middlewares import ControllerRegistry, SearchContextMiddleware
from meli_search.bot.routers import setup_routers
from meli_search.config import BotSettings, get_settings
from meli_search.i18n import I18nService
from meli_search.logging import configure_logging, logger
from meli_search.services.search import SearchService
from meli_search.services.thumbnails import ThumbnailService


def build_http_client(settings: BotSettings) -> httpx.AsyncClient:
    kwargs: dict[str, Any] = {"follow_redirects": True}
    if settings.search.request_timeout_seconds is not None:
        kwargs["timeout"] = settings.search.request_timeout_seconds
    return httpx.AsyncClient(**kwargs)


async def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)

    session = (
        AiohttpSession(proxy=settings.telegram_proxy) if settings.telegram_proxy else None
    )
    bot = Bot(token=settings.telegram_token.get_secret_value(), session=session)
    dp = Dispatcher()
    dp.include_router(setup_routers())

    async with build_http_client(settings) as http_client:
        registry = ControllerRegistry(
            search_service=SearchService(http_client, settings.search),
            thumbnail_service=ThumbnailService(http_client, settings.thumbnails),
            i18n=I18nService(default_locale=settings.default_language),
            visible_rows=settings.visible_rows,
        )
        search_context = SearchContextMiddleware(registry, settings.default_language)
        dp.message.middleware(search_context)
        dp.edited_message.middleware(search_context)

        logger.info(
            "bot_starting",
            site_id=settings.search.site_id,
            visible_rows=settings.visible_rows,
        )
        try:
            await dp.start_polling(bot, i18n=registry.i18n)
        finally:
            await registry.drain()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
