"""Journal operations: importing, featuring, commenting, rating and deleting movies.

All functions take the request's ``AsyncSession``. They flush their writes so
storage errors surface here; the session dependency commits once the request
is done, which keeps the multi-statement featured update in one transaction.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, inspect, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from movie_journal.config import get_settings
from movie_journal.exceptions import NotFoundError, StorageError, ValidationError
from movie_journal.models.comment import Comment
from movie_journal.models.movie import Movie
from movie_journal.services.tmdb import TMDBClient
from movie_journal.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

MIN_RATING = 0
MAX_RATING = 5


@dataclass(frozen=True)
class ImportResult:
    """Outcome of an import: the stored movie and whether it was just created."""

    movie: Movie
    created: bool


@dataclass(frozen=True)
class PatchResult:
    """Outcome of a patch: either a new comment or a new rating."""

    comment: Comment | None = None
    rating: int | None = None


def _movie_query():
    return select(Movie).options(selectinload(Movie.comments))


async def _load_movie(db: AsyncSession, movie_id: int) -> Movie:
    try:
        result = await db.execute(_movie_query().where(Movie.id == movie_id))
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to load movie {movie_id}: {e}") from e
    movie = result.scalar_one_or_none()
    if movie is None:
        raise NotFoundError("Movie not found")
    return movie


async def _flush(db: AsyncSession, action: str) -> None:
    try:
        await db.flush()
    except SQLAlchemyError as e:
        logger.error("Failed to %s: %s", action, e)
        raise StorageError(f"Failed to {action}: {e}") from e


async def list_movies(db: AsyncSession) -> Sequence[Movie]:
    """Return every movie in the journal, most recently added first."""
    try:
        result = await db.execute(_movie_query().order_by(Movie.added_at.desc(), Movie.id.desc()))
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to list movies: {e}") from e
    return result.scalars().all()


async def get_movie(db: AsyncSession, movie_id: int) -> Movie:
    """Return a movie by primary key.

    Raises:
        NotFoundError: If no movie has that id.
    """
    return await _load_movie(db, movie_id)


async def find_by_tmdb_id(db: AsyncSession, tmdb_id: int) -> Movie | None:
    """Return the movie imported from the given TMDB id, if any."""
    try:
        result = await db.execute(_movie_query().where(Movie.tmdb_id == tmdb_id))
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to look up TMDB id {tmdb_id}: {e}") from e
    return result.scalar_one_or_none()


async def import_movie(db: AsyncSession, tmdb_client: TMDBClient, tmdb_id: int) -> ImportResult:
    """Import a movie from TMDB unless it is already in the journal.

    The lookup by TMDB id happens before any TMDB call, so importing the same
    id twice returns the stored movie with ``created=False`` and inserts
    nothing.

    Args:
        db: Database session.
        tmdb_client: Client used to fetch details and credits.
        tmdb_id: TMDB movie ID, must be positive.

    Returns:
        The stored movie and whether this call created it.

    Raises:
        ValidationError: If ``tmdb_id`` is not a positive integer.
        CatalogueFetchError: If TMDB answers with a non-2xx status or an
            unexpected payload.
        StorageError: If the lookup or insert fails.
    """
    if isinstance(tmdb_id, bool) or not isinstance(tmdb_id, int) or tmdb_id <= 0:
        raise ValidationError("TMDB id must be a positive integer")

    existing = await find_by_tmdb_id(db, tmdb_id)
    if existing is not None:
        logger.info("Movie with TMDB ID %s already exists (id=%s)", tmdb_id, existing.id)
        return ImportResult(movie=existing, created=False)

    details = await tmdb_client.get_movie(tmdb_id)

    movie = Movie(
        tmdb_id=details.id,
        title=details.title,
        overview=details.overview or "",
        release_date=details.release_date,
        poster_path=details.poster_path,
        backdrop_path=details.backdrop_path,
        genres=details.genre_names,
        director=details.director,
        cast=details.top_cast(get_settings().cast_limit),
        runtime=details.runtime,
        vote_average=details.vote_average,
        featured=False,
        added_at=utc_now(),
        comments=[],
    )
    db.add(movie)
    await _flush(db, f"insert movie with TMDB ID {tmdb_id}")

    logger.info("Imported %r from TMDB ID %s (id=%s)", movie.title, tmdb_id, movie.id)
    return ImportResult(movie=movie, created=True)


async def get_featured(db: AsyncSession) -> Movie | None:
    """Return the featured movie, or None when no movie is featured."""
    try:
        result = await db.execute(_movie_query().where(Movie.featured.is_(True)))
    except SQLAlchemyError as e:
        raise StorageError(f"Failed to load featured movie: {e}") from e
    return result.scalars().first()


async def set_featured(db: AsyncSession, movie_id: int) -> Movie:
    """Make ``movie_id`` the only featured movie.

    The target is checked first, then every featured flag is cleared and the
    target's flag is set, all within the caller's transaction. An unknown id
    therefore leaves the current featured movie untouched.

    Raises:
        NotFoundError: If no movie has that id.
        StorageError: If an update fails.
    """
    movie = await _load_movie(db, movie_id)

    try:
        await db.execute(
            update(Movie)
            .where(Movie.featured.is_(True), Movie.id != movie_id)
            .values(featured=False)
            .execution_options(synchronize_session="fetch")
        )
        await db.execute(
            update(Movie)
            .where(Movie.id == movie_id)
            .values(featured=True)
            .execution_options(synchronize_session="fetch")
        )
    except SQLAlchemyError as e:
        logger.error("Failed to set featured movie %s: %s", movie_id, e)
        raise StorageError(f"Failed to set featured movie: {e}") from e

    # synchronize_session keeps the loaded instance in step with the updates
    logger.info("Featured movie is now %r (id=%s)", movie.title, movie.id)
    return movie


def _validate_rating(rating: Any) -> int:
    # bool is an int subclass; floats are accepted only when whole
    if isinstance(rating, bool) or not isinstance(rating, int | float):
        raise ValidationError("Rating must be a number between 0 and 5")
    if isinstance(rating, float):
        if not rating.is_integer():
            raise ValidationError("Rating must be a whole number between 0 and 5")
        rating = int(rating)
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError("Rating must be a number between 0 and 5")
    return rating


async def patch_movie(
    db: AsyncSession,
    movie_id: int,
    author: str | None = None,
    content: str | None = None,
    rating: Any = None,
) -> PatchResult:
    """Append a comment to a movie or overwrite its rating.

    A call is a comment when both ``author`` and ``content`` are non-empty,
    otherwise a rating when ``rating`` is given. A supplied rating is always
    validated, even when the comment wins.

    Raises:
        ValidationError: If neither a full comment nor a valid rating is given.
        NotFoundError: If no movie has that id.
        StorageError: If the update fails.
    """
    author = (author or "").strip()
    content = (content or "").strip()
    has_comment = bool(author and content)

    if rating is not None:
        rating = _validate_rating(rating)
    if not has_comment and rating is None:
        raise ValidationError("Author name and comment content are required")

    movie = await _load_movie(db, movie_id)

    if has_comment:
        comment = Comment(author=author, content=content, created_at=utc_now())
        movie.comments.append(comment)
        await _flush(db, f"add comment to movie {movie_id}")
        logger.info("Comment by %r added to movie %s", author, movie_id)
        return PatchResult(comment=comment)

    movie.rating = rating
    await _flush(db, f"rate movie {movie_id}")
    logger.info("Movie %s rated %s", movie_id, rating)
    return PatchResult(rating=rating)


async def delete_movie(db: AsyncSession, movie_id: int) -> None:
    """Delete a movie and its comments.

    Raises:
        NotFoundError: If no movie has that id.
        StorageError: If the delete fails.
    """
    movie = await _load_movie(db, movie_id)
    await db.delete(movie)
    await _flush(db, f"delete movie {movie_id}")
    logger.info("Deleted movie %r (id=%s)", movie.title, movie_id)


async def storage_diagnostics(db: AsyncSession) -> dict[str, Any]:
    """Report database reachability, table names and the number of stored movies."""
    try:
        tables = await db.run_sync(
            lambda session: inspect(session.connection()).get_table_names()
        )
        movies_table_exists = Movie.__tablename__ in tables
        movie_count = 0
        if movies_table_exists:
            result = await db.execute(select(func.count()).select_from(Movie))
            movie_count = result.scalar_one()
    except SQLAlchemyError as e:
        logger.error("Database diagnostics failed: %s", e)
        raise StorageError(f"Database connection test failed: {e}") from e

    return {
        "status": "connected",
        "tables": sorted(tables),
        "movies_table_exists": movies_table_exists,
        "movie_count": movie_count,
    }
