"""Command line batch import of movie titles from a text or CSV file.

Each non-empty line is a title. The top TMDB search hit for each title is
imported through the same path as the API, so titles already in the journal
are left alone.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from movie_journal.config import get_settings
from movie_journal.database import create_engine, create_session_factory
from movie_journal.exceptions import JournalError
from movie_journal.services.journal import import_movie
from movie_journal.services.tmdb import TMDBClient

logger = logging.getLogger("movie_journal.cli")

DEFAULT_DELAY_SECONDS = 0.25


@dataclass
class BatchImportSummary:
    created: list[str] = field(default_factory=list)
    existing: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def read_titles(path: Path) -> list[str]:
    """Return the trimmed, non-empty lines of ``path``."""
    content = path.read_text(encoding="utf-8")
    return [line.strip() for line in content.splitlines() if line.strip()]


async def import_titles(
    titles: Sequence[str],
    session_factory: async_sessionmaker[AsyncSession],
    tmdb_client: TMDBClient,
    *,
    dry_run: bool = False,
) -> BatchImportSummary:
    """Search TMDB for each title and import the top result.

    Each title is committed in its own session; a failure on one title is
    logged and counted without stopping the run.
    """
    summary = BatchImportSummary()

    for title in titles:
        logger.info("Searching for movie: %r", title)
        try:
            search = await tmdb_client.search_movies(title)
            if not search.results:
                logger.warning("No results found on TMDB for %r", title)
                summary.not_found.append(title)
                continue

            top = search.results[0]
            logger.info("Found %r (TMDB ID %s)", top.title, top.id)
            if dry_run:
                summary.created.append(top.title)
                continue

            async with session_factory() as session:
                result = await import_movie(session, tmdb_client, top.id)
                await session.commit()
        except (JournalError, SQLAlchemyError) as e:
            logger.error("Error importing %r: %s", title, e)
            summary.failed.append(title)
            continue

        if result.created:
            summary.created.append(result.movie.title)
        else:
            summary.existing.append(result.movie.title)

    return summary


def _print_summary(summary: BatchImportSummary, dry_run: bool) -> None:
    verb = "Would import" if dry_run else "Imported"
    print("-" * 40)
    print(f"{verb}: {len(summary.created)}")
    print(f"Already in journal: {len(summary.existing)}")
    print(f"Not found on TMDB: {len(summary.not_found)}")
    for title in summary.not_found:
        print(f"  - {title}")
    print(f"Failed: {len(summary.failed)}")
    for title in summary.failed:
        print(f"  - {title}")
    print("-" * 40)


async def _run(args: argparse.Namespace) -> int:
    try:
        titles = read_titles(args.path)
    except OSError as e:
        logger.error("Could not read %s: %s", args.path, e)
        return 1

    if not titles:
        logger.info("No movie titles found in %s", args.path)
        return 0
    logger.info("Found %d movie title(s) in %s", len(titles), args.path)

    settings = get_settings()
    engine = create_engine(settings)
    try:
        async with TMDBClient(rate_limit_delay=args.delay) as tmdb_client:
            summary = await import_titles(
                titles,
                create_session_factory(engine),
                tmdb_client,
                dry_run=args.dry_run,
            )
    finally:
        await engine.dispose()

    _print_summary(summary, args.dry_run)
    return 0


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="movie-journal-import",
        description="Import movies into the journal from a file of titles (one per line).",
    )
    parser.add_argument("path", type=Path, help="Text or CSV file with one movie title per line.")
    parser.add_argument(
        "--delay",
        type=float,
        default=DEFAULT_DELAY_SECONDS,
        help=f"Minimum seconds between TMDB requests (default: {DEFAULT_DELAY_SECONDS}).",
    )
    parser.add_argument("--dry-run", action="store_true", help="Search only, no DB writes.")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = _parse_args(argv)
    if not get_settings().tmdb_api_key:
        logger.error("TMDB_API_KEY is not set")
        return 1
    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
