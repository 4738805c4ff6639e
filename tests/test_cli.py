"""Tests for the batch import command."""

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_journal.cli import DEFAULT_DELAY_SECONDS, _parse_args, import_titles, main, read_titles
from movie_journal.exceptions import CatalogueFetchError
from movie_journal.models import Movie
from movie_journal.schemas.external import TMDBSearchResponse
from tmdb_samples import SEARCH_RESPONSE

EMPTY_SEARCH: dict[str, Any] = {"page": 1, "total_pages": 0, "total_results": 0, "results": []}


@pytest.fixture
def batch_tmdb_client(mock_tmdb_client: MagicMock) -> MagicMock:
    """Mock client whose search answers depend on the title."""

    async def search_movies(query: str, **_: Any) -> TMDBSearchResponse:
        if query == "Broken":
            raise CatalogueFetchError("API error: 503", upstream_status=503)
        if query == "Nothing":
            return TMDBSearchResponse.model_validate(EMPTY_SEARCH)
        return TMDBSearchResponse.model_validate(SEARCH_RESPONSE)

    mock_tmdb_client.search_movies = AsyncMock(side_effect=search_movies)
    return mock_tmdb_client


async def count_movies(session_factory: async_sessionmaker[AsyncSession]) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(Movie))
        return result.scalar_one()


class TestReadTitles:
    """Tests for reading the input file."""

    def test_skips_blank_lines(self, tmp_path: Path) -> None:
        """Test that lines are trimmed and blank lines dropped."""
        path = tmp_path / "movies.txt"
        path.write_text("Fight Club\n\n  Heat  \n   \nAlien\n", encoding="utf-8")

        assert read_titles(path) == ["Fight Club", "Heat", "Alien"]


class TestImportTitles:
    """Tests for the batch import loop."""

    async def test_summary_buckets(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        batch_tmdb_client: MagicMock,
    ) -> None:
        """Test that each title lands in the right bucket and the run continues."""
        summary = await import_titles(
            ["Fight Club", "Broken", "Nothing", "Fight Club"],
            session_factory,
            batch_tmdb_client,
        )

        assert summary.created == ["Fight Club"]
        assert summary.existing == ["Fight Club"]
        assert summary.not_found == ["Nothing"]
        assert summary.failed == ["Broken"]
        assert await count_movies(session_factory) == 1

    async def test_import_failure_is_counted(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        batch_tmdb_client: MagicMock,
    ) -> None:
        """Test that a details fetch failure is reported as failed."""
        batch_tmdb_client.get_movie = AsyncMock(
            side_effect=CatalogueFetchError("API error: 500", upstream_status=500)
        )

        summary = await import_titles(["Fight Club"], session_factory, batch_tmdb_client)

        assert summary.failed == ["Fight Club"]
        assert summary.created == []
        assert await count_movies(session_factory) == 0

    async def test_dry_run_writes_nothing(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        batch_tmdb_client: MagicMock,
    ) -> None:
        """Test that a dry run only searches."""
        summary = await import_titles(
            ["Fight Club", "Nothing"], session_factory, batch_tmdb_client, dry_run=True
        )

        assert summary.created == ["Fight Club"]
        assert summary.not_found == ["Nothing"]
        batch_tmdb_client.get_movie.assert_not_awaited()
        assert await count_movies(session_factory) == 0


class TestMain:
    """Tests for the command entry point."""

    def test_parse_args_defaults(self, tmp_path: Path) -> None:
        """Test default delay and dry-run flag."""
        args = _parse_args([str(tmp_path / "movies.txt")])

        assert args.path == tmp_path / "movies.txt"
        assert args.delay == DEFAULT_DELAY_SECONDS
        assert args.dry_run is False

    def test_parse_args_options(self, tmp_path: Path) -> None:
        """Test explicit delay and dry-run flag."""
        args = _parse_args([str(tmp_path / "movies.txt"), "--delay", "1.5", "--dry-run"])

        assert args.delay == 1.5
        assert args.dry_run is True

    def test_unreadable_file(self, tmp_path: Path) -> None:
        """Test that a missing input file exits with status 1."""
        assert main([str(tmp_path / "missing.txt")]) == 1

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test that a file without titles exits cleanly."""
        path = tmp_path / "movies.txt"
        path.write_text("\n\n", encoding="utf-8")

        assert main([str(path)]) == 0

    def test_missing_api_key(self, tmp_path: Path) -> None:
        """Test that a missing TMDB key exits with status 1 before any work."""
        path = tmp_path / "movies.txt"
        path.write_text("Fight Club\n", encoding="utf-8")

        with (
            patch("movie_journal.cli.get_settings") as mock_settings,
            patch("movie_journal.cli._run") as mock_run,
        ):
            mock_settings.return_value.tmdb_api_key = ""
            assert main([str(path)]) == 1

        mock_run.assert_not_called()

    def test_run_errors_propagate(self, tmp_path: Path) -> None:
        """Test that errors raised during the run are not reported as a missing key."""
        path = tmp_path / "movies.txt"
        path.write_text("Fight Club\n", encoding="utf-8")

        with (
            patch("movie_journal.cli._run", AsyncMock(side_effect=ValueError("boom"))),
            pytest.raises(ValueError, match="boom"),
        ):
            main([str(path)])
