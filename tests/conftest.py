"""Pytest fixtures and configuration."""

import os
from collections.abc import AsyncGenerator, Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing the app
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("TMDB_API_KEY", "test-api-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from movie_journal import models  # noqa: E402, F401
from movie_journal.database import Base, create_session_factory  # noqa: E402
from movie_journal.main import app  # noqa: E402
from movie_journal.schemas.external import TMDBMovieDetails, TMDBSearchResponse  # noqa: E402
from movie_journal.services.tmdb import TMDBClient, get_tmdb_client  # noqa: E402
from tmdb_samples import SEARCH_RESPONSE, make_details  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine with the schema created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return create_session_factory(engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """A database session for service tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def details_factory() -> Callable[..., TMDBMovieDetails]:
    """Factory for TMDB movie details."""
    return make_details


@pytest.fixture
def mock_tmdb_client() -> MagicMock:
    """Create a mock TMDB client answering with Fight Club-shaped details for any id."""
    async def get_movie(movie_id: int, **_: Any) -> TMDBMovieDetails:
        if movie_id == 550:
            return make_details()
        return make_details(movie_id, title=f"Movie {movie_id}")

    mock_client = MagicMock(spec=TMDBClient)
    mock_client.get_movie = AsyncMock(side_effect=get_movie)
    mock_client.search_movies = AsyncMock(
        return_value=TMDBSearchResponse.model_validate(SEARCH_RESPONSE)
    )
    mock_client.close = AsyncMock()
    return mock_client


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing FastAPI endpoints against the test database."""
    app.state.session_factory = session_factory
    app.state.tmdb_client = None
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def use_tmdb(mock_tmdb_client: MagicMock) -> MagicMock:
    """Route the TMDB dependency of the app to the mock client."""
    app.dependency_overrides[get_tmdb_client] = lambda: mock_tmdb_client
    return mock_tmdb_client
