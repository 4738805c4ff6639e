"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from movie_journal import __version__
from movie_journal.api import api_router
from movie_journal.config import get_settings
from movie_journal.database import create_engine, create_session_factory
from movie_journal.exceptions import CatalogueFetchError, JournalError
from movie_journal.services.tmdb import TMDBClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan - opens shared resources on startup, releases them on shutdown."""
    # Startup
    logger.info("Starting %s v%s", settings.app_name, __version__)
    logger.info("Debug mode: %s", settings.debug)
    logger.info("Database: %s", settings.database_url.split("///")[-1])  # Hide path details
    logger.info("TMDB API: %s", "configured" if settings.tmdb_api_key else "NOT CONFIGURED")

    # Validate and log warnings
    warnings = settings.validate_runtime_config()
    if warnings:
        logger.warning("Configuration warnings:")
        for warning in warnings:
            logger.warning("  - %s", warning)
    else:
        logger.info("Configuration validation passed - no warnings")

    engine = create_engine(settings)
    app.state.session_factory = create_session_factory(engine)
    app.state.tmdb_client = TMDBClient() if settings.tmdb_api_key else None

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Application shutting down")
    if app.state.tmdb_client is not None:
        await app.state.tmdb_client.close()
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)


@app.exception_handler(JournalError)
async def journal_error_handler(_request: Request, exc: JournalError) -> JSONResponse:
    """Handle journal exceptions globally."""
    content: dict[str, object] = {"detail": str(exc)}
    if isinstance(exc, CatalogueFetchError):
        content["upstream_status"] = exc.upstream_status
        logger.error("Catalogue error: %s", exc)
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed requests as 400 Bad Request."""
    return JSONResponse(
        status_code=400,
        content={"detail": jsonable_encoder(exc.errors())},
    )


# Include API router
app.include_router(api_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the API is running."""
    return {"status": "healthy", "app": settings.app_name, "version": __version__}
