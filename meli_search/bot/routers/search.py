"""Telegram handlers feeding the result list controller."""

from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from meli_search.bot.utils.telegram import answer_with_retry
from meli_search.i18n import I18nService
from meli_search.logging import logger
from meli_search.ui.controller import ResultListController

router = Router()


@router.message(CommandStart())
async def handle_start(
    message: Message,
    controller: ResultListController,
    i18n: I18nService,
    locale: str | None = None,
) -> None:
    name = message.from_user.full_name if message.from_user else ""
    await answer_with_retry(message, i18n.gettext("start.greeting", locale=locale, name=name))
    await controller.on_input_changed("")


@router.message(Command("clear"))
async def handle_clear(message: Message, controller: ResultListController) -> None:
    await controller.on_input_changed("")


@router.message(Command("next"))
async def handle_next(
    message: Message,
    controller: ResultListController,
    i18n: I18nService,
    locale: str | None = None,
) -> None:
    if not await controller.scroll_by(controller.visible_rows):
        await answer_with_retry(message, i18n.gettext("list.end", locale=locale))


@router.message(Command("prev"))
async def handle_prev(
    message: Message,
    controller: ResultListController,
    i18n: I18nService,
    locale: str | None = None,
) -> None:
    if not await controller.scroll_by(-controller.visible_rows):
        await answer_with_retry(message, i18n.gettext("list.start", locale=locale))


@router.message(F.text & ~F.text.startswith("/"))
async def handle_query(message: Message, controller: ResultListController) -> None:
    logger.debug("input_changed", chat_id=message.chat.id, term=message.text)
    await controller.on_input_changed(message.text or "")


@router.edited_message(F.text & ~F.text.startswith("/"))
async def handle_query_edit(message: Message, controller: ResultListController) -> None:
    logger.debug("input_edited", chat_id=message.chat.id, term=message.text)
    await controller.on_input_changed(message.text or "")
