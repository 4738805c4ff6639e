"""External catalogue (TMDB) search endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_journal.database import get_db
from movie_journal.models.movie import Movie
from movie_journal.schemas.movie import CatalogueSearchResponse, CatalogueSearchResult
from movie_journal.services.tmdb import TMDBClient, get_tmdb_client
from movie_journal.utils.images import get_poster_url

router = APIRouter(prefix="/catalogue", tags=["catalogue"])


@router.get("/search", response_model=CatalogueSearchResponse)
async def search_catalogue(
    query: str = Query(..., min_length=1, description="Search query for movies"),
    page: int = Query(1, ge=1, description="Page number"),
    year: int | None = Query(None, ge=1800, le=2100, description="Filter by release year"),
    db: AsyncSession = Depends(get_db),
    tmdb_client: TMDBClient = Depends(get_tmdb_client),
) -> CatalogueSearchResponse:
    """Search TMDB for movies to import.

    Each result is flagged when the movie is already in the journal.
    """
    response = await tmdb_client.search_movies(query=query, page=page, year=year)

    tmdb_ids = [movie.id for movie in response.results]
    imported: set[int] = set()
    if tmdb_ids:
        result = await db.execute(select(Movie.tmdb_id).where(Movie.tmdb_id.in_(tmdb_ids)))
        imported = set(result.scalars().all())

    results = [
        CatalogueSearchResult(
            tmdb_id=movie.id,
            title=movie.title,
            release_date=movie.release_date,
            poster_url=get_poster_url(movie.poster_path),
            overview=movie.overview,
            genre_ids=movie.genre_ids,
            in_journal=movie.id in imported,
        )
        for movie in response.results
    ]

    return CatalogueSearchResponse(
        page=response.page,
        total_pages=response.total_pages,
        total_results=response.total_results,
        results=results,
    )
