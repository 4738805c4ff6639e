"""Pydantic schemas for TMDB API responses."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TMDBMovieResult(BaseModel):
    """A single movie result from TMDB search."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB movie ID")
    title: str = Field(description="Movie title")
    original_title: str | None = Field(default=None, description="Original title")
    release_date: date | None = Field(default=None, description="Release date")
    poster_path: str | None = Field(default=None, description="Poster image path")
    overview: str | None = Field(default=None, description="Movie overview/synopsis")
    genre_ids: list[int] = Field(default_factory=list, description="TMDB genre IDs")
    vote_average: float = Field(default=0.0, description="Average vote score")

    @field_validator("release_date", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | date | None) -> str | date | None:
        """Convert empty strings to None for date fields."""
        if v == "":
            return None
        return v


class TMDBSearchResponse(BaseModel):
    """Response from TMDB movie search endpoint."""

    model_config = ConfigDict(extra="ignore")

    page: int = Field(description="Current page number")
    total_pages: int = Field(description="Total number of pages")
    total_results: int = Field(description="Total number of results")
    results: list[TMDBMovieResult] = Field(default_factory=list, description="Movie results")


class TMDBGenre(BaseModel):
    """A genre attached to a TMDB movie."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB genre ID")
    name: str = Field(description="Genre name")


class TMDBCastMember(BaseModel):
    """A single cast member from TMDB credits."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB person ID")
    name: str = Field(description="Person's name")
    character: str | None = Field(default=None, description="Character name")
    order: int = Field(default=0, description="Billing order")
    profile_path: str | None = Field(default=None, description="Profile image path")


class TMDBCrewMember(BaseModel):
    """A single crew member from TMDB credits."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB person ID")
    name: str = Field(description="Person's name")
    department: str | None = Field(default=None, description="Department")
    job: str | None = Field(default=None, description="Job title")


class TMDBCredits(BaseModel):
    """Cast and crew appended to a TMDB movie details response."""

    model_config = ConfigDict(extra="ignore")

    cast: list[TMDBCastMember] = Field(default_factory=list, description="Cast members")
    crew: list[TMDBCrewMember] = Field(default_factory=list, description="Crew members")


class TMDBMovieDetails(BaseModel):
    """Detailed movie information from TMDB, including credits."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(description="TMDB movie ID")
    title: str = Field(description="Movie title")
    original_title: str | None = Field(default=None, description="Original title")
    release_date: date | None = Field(default=None, description="Release date")
    poster_path: str | None = Field(default=None, description="Poster image path")
    backdrop_path: str | None = Field(default=None, description="Backdrop image path")
    overview: str | None = Field(default=None, description="Movie overview/synopsis")
    runtime: int | None = Field(default=None, description="Runtime in minutes")
    vote_average: float | None = Field(default=None, description="Average vote score")
    genres: list[TMDBGenre] = Field(default_factory=list, description="Genres")
    credits: TMDBCredits = Field(default_factory=TMDBCredits, description="Cast and crew")

    @field_validator("release_date", mode="before")
    @classmethod
    def empty_str_to_none(cls, v: str | date | None) -> str | date | None:
        """Convert empty strings to None for date fields."""
        if v == "":
            return None
        return v

    @property
    def director(self) -> str:
        """Name of the first crew member credited as Director, or empty string."""
        for member in self.credits.crew:
            if member.job == "Director":
                return member.name
        return ""

    def top_cast(self, limit: int = 5) -> list[str]:
        """Names of the first ``limit`` cast members in TMDB order."""
        return [member.name for member in self.credits.cast[:limit]]

    @property
    def genre_names(self) -> list[str]:
        """Genre names in TMDB order."""
        return [genre.name for genre in self.genres]
