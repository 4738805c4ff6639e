"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App settings
    app_name: str = "Movie Journal API"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./movie_journal.db"

    # TMDB API
    tmdb_api_key: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_timeout: float = 30.0
    tmdb_rate_limit_delay: float = 0.0

    # Import
    cast_limit: int = 5

    @field_validator("cast_limit")
    @classmethod
    def validate_cast_limit(cls, v: int) -> int:
        """Validate that at least one cast member is kept on import."""
        if v < 1:
            raise ValueError("CAST_LIMIT must be at least 1")
        return v

    def validate_runtime_config(self) -> list[str]:
        """Validate runtime configuration and return warnings."""
        warnings = []

        # Check TMDB API key
        if not self.tmdb_api_key:
            warnings.append("TMDB_API_KEY is not set - catalogue search and import will not work")

        if self.database_url.startswith("sqlite") and ":memory:" in self.database_url:
            warnings.append("DATABASE_URL points to an in-memory database - data will not persist")

        # Warn about debug mode in production
        if self.debug:
            warnings.append("DEBUG mode is enabled - should be disabled in production")

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
