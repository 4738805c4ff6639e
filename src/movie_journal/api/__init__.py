"""API routers."""

from movie_journal.api.router import api_router

__all__ = ["api_router"]
