"""Business logic and external API clients."""

from movie_journal.services.tmdb import TMDBClient, get_tmdb_client

__all__ = [
    "TMDBClient",
    "get_tmdb_client",
]
