from meli_search.bot.middlewares.search_context import ControllerRegistry, SearchContextMiddleware

__all__ = [
    "ControllerRegistry",
    "SearchContextMiddleware",
]
