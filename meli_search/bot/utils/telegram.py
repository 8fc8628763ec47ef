"""Telegram sending helpers with retry support."""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from aiogram import Bot
from aiogram.exceptions import TelegramBadRequest, TelegramNetworkError
from aiogram.types import BufferedInputFile, Message

from meli_search.logging import logger
from meli_search.utils.retry import retry_async

TELEGRAM_SEND_MAX_ATTEMPTS = 3
TELEGRAM_SEND_BASE_DELAY = 0.3


async def _with_retry(name: str, operation: Callable[[], Awaitable[Any]]) -> Any:
    return await retry_async(
        operation,
        retry_on=(TelegramNetworkError,),
        max_attempts=TELEGRAM_SEND_MAX_ATTEMPTS,
        base_delay=TELEGRAM_SEND_BASE_DELAY,
        logger=logger,
        operation_name=name,
    )


async def answer_with_retry(message: Message, text: str, **kwargs: Any) -> Any:
    """Send a reply with retry/backoff."""

    async def _send():
        return await message.answer(text, **kwargs)

    return await _with_retry("telegram_answer", _send)


async def bot_send_with_retry(bot: Bot, *, chat_id: int, text: str, **kwargs: Any) -> Any:
    async def _send():
        return await bot.send_message(chat_id=chat_id, text=text, **kwargs)

    return await _with_retry("telegram_send_message", _send)


async def bot_edit_with_retry(bot: Bot, *, chat_id: int, message_id: int, text: str) -> Any:
    async def _edit():
        return await bot.edit_message_text(text=text, chat_id=chat_id, message_id=message_id)

    return await _with_retry("telegram_edit_message", _edit)


async def bot_send_photo_with_retry(
    bot: Bot,
    *,
    chat_id: int,
    data: bytes,
    caption: str | None = None,
    **kwargs: Any,
) -> Any:
    async def _send():
        photo = BufferedInputFile(data, filename="thumbnail.jpg")
        return await bot.send_photo(chat_id=chat_id, photo=photo, caption=caption, **kwargs)

    return await _with_retry("telegram_send_photo", _send)


async def bot_delete_quietly(bot: Bot, *, chat_id: int, message_id: int) -> bool:
    """Delete a message, treating an already-missing message as deleted."""

    try:
        return bool(await bot.delete_message(chat_id=chat_id, message_id=message_id))
    except TelegramBadRequest as exc:
        logger.info("telegram_delete_skipped", chat_id=chat_id, message_id=message_id, error=str(exc))
        return False


__all__ = [
    "answer_with_retry",
    "bot_delete_quietly",
    "bot_edit_with_retry",
    "bot_send_photo_with_retry",
    "bot_send_with_retry",
]
