"""Last-resort handler for exceptions escaping other handlers."""

from __future__ import annotations

from aiogram import Router
from aiogram.types import ErrorEvent

from meli_search.bot.utils.telegram import answer_with_retry
from meli_search.i18n import I18nService
from meli_search.logging import logger

router = Router()


@router.errors()
async def handle_error(event: ErrorEvent, i18n: I18nService) -> bool:
    update = event.update
    message = (update.message or update.edited_message) if update is not None else None
    logger.error(
        "bot_error_captured",
        exception_type=event.exception.__class__.__name__,
        exception=str(event.exception),
        update_id=getattr(update, "update_id", None),
    )
    if message is None:
        return True

    locale = message.from_user.language_code if message.from_user else None
    try:
        await answer_with_retry(message, i18n.gettext("list.error", locale=locale))
    except Exception:
        logger.exception("error_notification_failed", update_id=getattr(update, "update_id", None))
    return True
