"""Pydantic schemas for request/response validation."""

from movie_journal.schemas.external import (
    TMDBCastMember,
    TMDBCredits,
    TMDBCrewMember,
    TMDBGenre,
    TMDBMovieDetails,
    TMDBMovieResult,
    TMDBSearchResponse,
)
from movie_journal.schemas.movie import (
    CatalogueSearchResponse,
    CatalogueSearchResult,
    CommentResponse,
    ImportMovieRequest,
    ImportMovieResponse,
    MessageResponse,
    MoviePatch,
    MoviePatchResponse,
    MovieResponse,
    SetFeaturedRequest,
    StorageDiagnostics,
)

__all__ = [
    # External API schemas
    "TMDBCastMember",
    "TMDBCredits",
    "TMDBCrewMember",
    "TMDBGenre",
    "TMDBMovieDetails",
    "TMDBMovieResult",
    "TMDBSearchResponse",
    # Movie schemas
    "CatalogueSearchResponse",
    "CatalogueSearchResult",
    "CommentResponse",
    "ImportMovieRequest",
    "ImportMovieResponse",
    "MessageResponse",
    "MoviePatch",
    "MoviePatchResponse",
    "MovieResponse",
    "SetFeaturedRequest",
    "StorageDiagnostics",
]
