"""Main API router aggregation."""

from fastapi import APIRouter

from movie_journal.api.catalogue import router as catalogue_router
from movie_journal.api.diagnostics import router as diagnostics_router
from movie_journal.api.movies import router as movies_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(movies_router)
api_router.include_router(catalogue_router)
api_router.include_router(diagnostics_router)
