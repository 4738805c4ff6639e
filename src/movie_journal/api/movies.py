"""Movie journal API endpoints."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from movie_journal.database import get_db
from movie_journal.exceptions import NotFoundError
from movie_journal.schemas.movie import (
    CommentResponse,
    ImportMovieRequest,
    ImportMovieResponse,
    MessageResponse,
    MoviePatch,
    MoviePatchResponse,
    MovieResponse,
    SetFeaturedRequest,
)
from movie_journal.services import journal
from movie_journal.services.tmdb import TMDBClient, get_tmdb_client

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("", response_model=list[MovieResponse])
async def list_movies(db: AsyncSession = Depends(get_db)) -> list[MovieResponse]:
    """List every movie in the journal, most recently added first."""
    movies = await journal.list_movies(db)
    return [MovieResponse.from_movie(movie) for movie in movies]


@router.post("", response_model=ImportMovieResponse, status_code=201)
async def import_movie(
    payload: ImportMovieRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
    tmdb_client: TMDBClient = Depends(get_tmdb_client),
) -> ImportMovieResponse:
    """Import a movie from TMDB by its TMDB ID.

    Answers 201 when the movie is inserted and 200 when a movie with the
    same TMDB ID is already in the journal.
    """
    result = await journal.import_movie(db, tmdb_client, payload.tmdb_id)

    if not result.created:
        response.status_code = 200
        message = "Movie already exists in journal"
    else:
        message = "Movie added successfully"

    return ImportMovieResponse(
        success=result.created,
        message=message,
        movie_id=result.movie.id,
        movie=MovieResponse.from_movie(result.movie),
    )


@router.get("/featured", response_model=MovieResponse)
async def get_featured_movie(db: AsyncSession = Depends(get_db)) -> MovieResponse:
    """Get the featured movie."""
    movie = await journal.get_featured(db)
    if movie is None:
        raise NotFoundError("No featured movie found")
    return MovieResponse.from_movie(movie)


@router.put("/featured", response_model=MovieResponse)
async def set_featured_movie(
    payload: SetFeaturedRequest,
    db: AsyncSession = Depends(get_db),
) -> MovieResponse:
    """Make a movie the featured movie, unfeaturing any other."""
    movie = await journal.set_featured(db, payload.movie_id)
    return MovieResponse.from_movie(movie)


@router.get("/{movie_id}", response_model=MovieResponse)
async def get_movie(movie_id: int, db: AsyncSession = Depends(get_db)) -> MovieResponse:
    """Get a movie with its comments."""
    movie = await journal.get_movie(db, movie_id)
    return MovieResponse.from_movie(movie)


@router.patch("/{movie_id}", response_model=MoviePatchResponse)
async def patch_movie(
    movie_id: int,
    payload: MoviePatch,
    db: AsyncSession = Depends(get_db),
) -> MoviePatchResponse:
    """Add a comment to a movie, or set its rating."""
    result = await journal.patch_movie(
        db,
        movie_id,
        author=payload.author,
        content=payload.content,
        rating=payload.rating,
    )

    if result.comment is not None:
        return MoviePatchResponse(
            message="Comment added successfully",
            comment=CommentResponse.model_validate(result.comment),
        )
    return MoviePatchResponse(message="Rating added successfully", rating=result.rating)


@router.delete("/{movie_id}", response_model=MessageResponse)
async def delete_movie(movie_id: int, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    """Delete a movie and its comments."""
    await journal.delete_movie(db, movie_id)
    return MessageResponse(message="Movie deleted successfully")
