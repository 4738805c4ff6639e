"""Pydantic schemas for movie API endpoints."""

from datetime import date, datetime

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictFloat,
    StrictInt,
    field_validator,
    model_validator,
)

from movie_journal.models.movie import Movie
from movie_journal.utils.images import get_backdrop_url, get_poster_url
from movie_journal.utils.timestamps import as_utc


class CommentResponse(BaseModel):
    """A comment attached to a movie."""

    model_config = ConfigDict(from_attributes=True)

    author: str = Field(description="Comment author")
    content: str = Field(description="Comment text")
    created_at: datetime = Field(description="When the comment was added")

    @field_validator("created_at")
    @classmethod
    def created_at_as_utc(cls, v: datetime) -> datetime:
        """Tag stored timestamps as UTC."""
        return as_utc(v)


class MovieResponse(BaseModel):
    """A movie stored in the journal."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Local database ID")
    tmdb_id: int = Field(description="TMDB movie ID")
    title: str = Field(description="Movie title")
    overview: str = Field(default="", description="Movie overview/synopsis")
    release_date: date | None = Field(default=None, description="Release date")
    poster_path: str | None = Field(default=None, description="Poster image path")
    backdrop_path: str | None = Field(default=None, description="Backdrop image path")
    poster_url: str | None = Field(default=None, description="Full poster image URL")
    backdrop_url: str | None = Field(default=None, description="Full backdrop image URL")
    genres: list[str] = Field(default_factory=list, description="Genre names")
    director: str = Field(default="", description="Director name")
    cast: list[str] = Field(default_factory=list, description="Top billed cast")
    runtime: int | None = Field(default=None, description="Runtime in minutes")
    vote_average: float | None = Field(default=None, description="TMDB average vote score")
    rating: int | None = Field(default=None, description="Journal rating (0-5)")
    featured: bool = Field(default=False, description="Whether this is the featured movie")
    added_at: datetime = Field(description="When the movie was imported")
    comments: list[CommentResponse] = Field(default_factory=list, description="Comments")

    @field_validator("added_at")
    @classmethod
    def added_at_as_utc(cls, v: datetime) -> datetime:
        """Tag stored timestamps as UTC."""
        return as_utc(v)

    @classmethod
    def from_movie(cls, movie: Movie) -> "MovieResponse":
        """Build the response from an ORM movie, adding full image URLs."""
        response = cls.model_validate(movie)
        response.poster_url = get_poster_url(movie.poster_path)
        response.backdrop_url = get_backdrop_url(movie.backdrop_path)
        return response


class ImportMovieRequest(BaseModel):
    """Request body for importing a movie from TMDB."""

    tmdb_id: int = Field(gt=0, description="TMDB movie ID")


class ImportMovieResponse(BaseModel):
    """Response for the import endpoint."""

    success: bool = Field(description="Whether a new movie was inserted")
    message: str = Field(description="Human readable outcome")
    movie_id: int = Field(description="Local database ID of the stored movie")
    movie: MovieResponse = Field(description="The stored movie")


class SetFeaturedRequest(BaseModel):
    """Request body for choosing the featured movie."""

    movie_id: int = Field(description="Local database ID of the movie to feature")


class MoviePatch(BaseModel):
    """Request body for commenting on or rating a movie.

    Either ``author`` and ``content`` together, or ``rating``.
    """

    author: str | None = Field(default=None, max_length=100, description="Comment author")
    content: str | None = Field(default=None, description="Comment text")
    # Whole numbers from 0 to 5; range and wholeness are checked by the journal service
    rating: StrictInt | StrictFloat | None = Field(default=None, description="Rating from 0 to 5")

    @model_validator(mode="after")
    def require_comment_or_rating(self) -> "MoviePatch":
        """Require a full comment or a rating."""
        if not (self.author and self.content) and self.rating is None:
            msg = "Author name and comment content are required"
            raise ValueError(msg)
        return self


class MoviePatchResponse(BaseModel):
    """Response for the patch endpoint."""

    message: str = Field(description="Human readable outcome")
    comment: CommentResponse | None = Field(default=None, description="The added comment")
    rating: int | None = Field(default=None, description="The new rating")


class MessageResponse(BaseModel):
    """Generic response carrying a message."""

    message: str = Field(description="Human readable outcome")


class CatalogueSearchResult(BaseModel):
    """A single TMDB search result for the import flow."""

    tmdb_id: int = Field(description="TMDB movie ID")
    title: str = Field(description="Movie title")
    release_date: date | None = Field(default=None, description="Release date")
    poster_url: str | None = Field(default=None, description="Full poster image URL")
    overview: str | None = Field(default=None, description="Movie overview/synopsis")
    genre_ids: list[int] = Field(default_factory=list, description="TMDB genre IDs")
    in_journal: bool = Field(default=False, description="Whether the movie is already imported")


class CatalogueSearchResponse(BaseModel):
    """Response for the catalogue search endpoint."""

    page: int = Field(description="Current page number")
    total_pages: int = Field(description="Total number of pages")
    total_results: int = Field(description="Total number of results")
    results: list[CatalogueSearchResult] = Field(
        default_factory=list, description="Movie results"
    )


class StorageDiagnostics(BaseModel):
    """Database reachability report."""

    status: str = Field(description="Connection status")
    tables: list[str] = Field(default_factory=list, description="Tables in the database")
    movies_table_exists: bool = Field(description="Whether the movies table exists")
    movie_count: int = Field(description="Number of stored movies")
