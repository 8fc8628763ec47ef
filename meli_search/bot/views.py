"""Telegram rendering of the result list."""

from __future__ import annotations

from aiogram import Bot
from aiogram.enums import ChatAction
from aiogram.exceptions import TelegramBadRequest

from meli_search.bot.utils.telegram import (
    bot_delete_quietly,
    bot_edit_with_retry,
    bot_send_photo_with_retry,
    bot_send_with_retry,
)
from meli_search.i18n import I18nService
from meli_search.logging import logger
from meli_search.services.thumbnails import Thumbnail
from meli_search.ui.state import Empty, Error, Initial, Loading, Populated, ResultListState
from meli_search.ui.view import RowContent

TELEGRAM_CAPTION_LIMIT = 1024


class TelegramResultView:
    """Renders one chat's result list.

    The chat holds a single status message, edited on every state change,
    and one message per row slot. Row messages are edited when the slot is
    re-bound and deleted when the list is hidden. Thumbnails and row errors
    are sent as replies to their row and removed together with it.
    """

    def __init__(self, bot: Bot, chat_id: int, i18n: I18nService, locale: str | None = None) -> None:
        self.bot = bot
        self.chat_id = chat_id
        self.i18n = i18n
        self.locale = locale
        self.status_message_id: int | None = None
        self.row_message_ids: dict[int, int] = {}
        self.row_texts: dict[int, str] = {}
        self.row_attachments: dict[int, list[int]] = {}

    def describe(self, state: ResultListState) -> str:
        if isinstance(state, Initial):
            return self._t("list.initial")
        if isinstance(state, Loading):
            return self._t("list.loading", term=state.term)
        if isinstance(state, Empty):
            return self._t("list.empty")
        if isinstance(state, Error):
            return self._t("list.error")
        if isinstance(state, Populated):
            return self._t("list.populated", count=len(state.items), term=state.term)
        raise TypeError(f"Unknown state {state!r}")

    async def render_state(self, state: ResultListState) -> None:
        if isinstance(state, Loading):
            await self.bot.send_chat_action(chat_id=self.chat_id, action=ChatAction.TYPING)
        self.status_message_id = await self._upsert(self.status_message_id, self.describe(state))

    async def render_row(self, index: int, content: RowContent) -> None:
        await self._drop_attachments(index)
        text = self._t(
            "row.text",
            position=content.position,
            title=content.title,
            price=content.price,
        )
        self.row_texts[index] = text
        self.row_message_ids[index] = await self._upsert(self.row_message_ids.get(index), text)

    async def render_row_image(self, index: int, thumbnail: Thumbnail) -> None:
        await self._drop_attachments(index)
        caption = self.row_texts.get(index, "")[:TELEGRAM_CAPTION_LIMIT] or None
        sent = await bot_send_photo_with_retry(
            self.bot,
            chat_id=self.chat_id,
            data=thumbnail.data,
            caption=caption,
            **self._reply_to(index),
        )
        self._remember_attachment(index, sent)

    async def render_row_error(self, index: int) -> None:
        await self._drop_attachments(index)
        sent = await bot_send_with_retry(
            self.bot,
            chat_id=self.chat_id,
            text=self._t("row.image_error"),
            **self._reply_to(index),
        )
        self._remember_attachment(index, sent)

    async def clear_row(self, index: int) -> None:
        await self._drop_attachments(index)
        self.row_texts.pop(index, None)
        message_id = self.row_message_ids.pop(index, None)
        if message_id is not None:
            await bot_delete_quietly(self.bot, chat_id=self.chat_id, message_id=message_id)

    async def _upsert(self, message_id: int | None, text: str) -> int:
        if message_id is not None:
            try:
                await bot_edit_with_retry(
                    self.bot, chat_id=self.chat_id, message_id=message_id, text=text
                )
                return message_id
            except TelegramBadRequest as exc:
                if "not modified" in str(exc).lower():
                    return message_id
                logger.info("telegram_edit_fallback", chat_id=self.chat_id, error=str(exc))
        sent = await bot_send_with_retry(self.bot, chat_id=self.chat_id, text=text)
        return sent.message_id

    async def _drop_attachments(self, index: int) -> None:
        for message_id in self.row_attachments.pop(index, []):
            await bot_delete_quietly(self.bot, chat_id=self.chat_id, message_id=message_id)

    def _remember_attachment(self, index: int, sent) -> None:
        message_id = getattr(sent, "message_id", None)
        if message_id is not None:
            self.row_attachments.setdefault(index, []).append(message_id)

    def _reply_to(self, index: int) -> dict[str, int]:
        message_id = self.row_message_ids.get(index)
        return {"reply_to_message_id": message_id} if message_id is not None else {}

    def _t(self, key: str, **kwargs) -> str:
        return self.i18n.gettext(key, locale=self.locale, **kwargs)


__all__ = ["TelegramResultView"]
