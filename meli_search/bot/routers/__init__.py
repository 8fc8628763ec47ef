from aiogram import Router

from meli_search.bot.routers import errors, search


def setup_routers() -> Router:
    router = Router()
    router.include_router(search.router)
    router.include_router(errors.router)
    return router


__all__ = ["setup_routers"]
