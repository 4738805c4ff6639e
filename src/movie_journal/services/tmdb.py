"""TMDB (The Movie Database) API client service."""

import asyncio
import logging
from typing import Any, TypeVar

import httpx
from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from movie_journal.config import get_settings
from movie_journal.exceptions import CatalogueFetchError
from movie_journal.schemas.external import TMDBMovieDetails, TMDBSearchResponse

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class TMDBClient:
    """Client for The Movie Database (TMDB) API.

    Searches the catalogue and fetches movie details with credits. Uses
    Bearer token authentication and one shared ``httpx.AsyncClient``.
    Every failure surfaces as ``CatalogueFetchError``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        rate_limit_delay: float | None = None,
    ) -> None:
        """Initialize the TMDB client.

        Args:
            api_key: TMDB API key. If not provided, uses settings.
            base_url: TMDB base URL. If not provided, uses settings.
            timeout: Request timeout in seconds. If not provided, uses settings.
            rate_limit_delay: Minimum delay between requests in seconds.
                If not provided, uses settings.
        """
        settings = get_settings()
        self._api_key = api_key or settings.tmdb_api_key
        if not self._api_key:
            raise ValueError("TMDB API key is required")

        self.base_url = (base_url or settings.tmdb_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.tmdb_timeout
        self.rate_limit_delay = (
            rate_limit_delay if rate_limit_delay is not None else settings.tmdb_rate_limit_delay
        )
        self._last_request_at = 0.0
        self._client: httpx.AsyncClient | None = None

    @property
    def default_headers(self) -> dict[str, str]:
        """Return default headers including Bearer token authentication."""
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }

    async def search_movies(
        self,
        query: str,
        page: int = 1,
        include_adult: bool = False,
        year: int | None = None,
        language: str = "en-US",
    ) -> TMDBSearchResponse:
        """Search for movies by title.

        Args:
            query: Search query string.
            page: Page number (1-based).
            include_adult: Whether to include adult content.
            year: Filter by release year.
            language: Response language code.

        Returns:
            Search response containing movie results.
        """
        params: dict[str, Any] = {
            "query": query,
            "page": page,
            "include_adult": str(include_adult).lower(),
            "language": language,
        }
        if year is not None:
            params["year"] = year

        data = await self._fetch("/search/movie", params)
        return _decode(TMDBSearchResponse, data)

    async def get_movie(
        self,
        movie_id: int,
        language: str = "en-US",
    ) -> TMDBMovieDetails:
        """Get detailed information about a movie, with its cast and crew.

        Args:
            movie_id: TMDB movie ID.
            language: Response language code.

        Returns:
            Detailed movie information including credits.

        Raises:
            CatalogueFetchError: If TMDB answers with a non-2xx status
                (404 for unknown ids) or an unexpected payload.
        """
        params = {"language": language, "append_to_response": "credits"}
        data = await self._fetch(f"/movie/{movie_id}", params)
        return _decode(TMDBMovieDetails, data)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.default_headers,
            )
        return self._client

    async def _throttle(self) -> None:
        """Keep at least ``rate_limit_delay`` seconds between requests."""
        if self.rate_limit_delay <= 0:
            return
        loop = asyncio.get_running_loop()
        wait = self._last_request_at + self.rate_limit_delay - loop.time()
        if wait > 0:
            await asyncio.sleep(wait)
        self._last_request_at = loop.time()

    async def _fetch(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET ``path`` and return the decoded JSON object.

        Raises:
            CatalogueFetchError: On transport errors, non-2xx statuses, or a
                body that is not a JSON object.
        """
        await self._throttle()
        client = await self._get_client()

        try:
            response = await client.request(method="GET", url=path.lstrip("/"), params=params)
        except httpx.TimeoutException as e:
            raise CatalogueFetchError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            raise CatalogueFetchError(f"Request failed: {e}") from e

        if not response.is_success:
            logger.warning("TMDB %s answered %s", path, response.status_code)
            raise CatalogueFetchError(
                f"API error: {response.status_code} {response.reason_phrase} - {response.text}",
                upstream_status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogueFetchError(f"Invalid JSON response: {e}") from e
        if not isinstance(data, dict):
            raise CatalogueFetchError("Unexpected response shape: expected a JSON object")
        return data

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "TMDBClient":
        await self._get_client()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def _decode(schema: type[SchemaT], data: dict[str, Any]) -> SchemaT:
    """Validate a TMDB payload, failing closed on unexpected shapes."""
    try:
        return schema.model_validate(data)
    except SchemaValidationError as e:
        raise CatalogueFetchError(f"Unexpected {schema.__name__} payload: {e}") from e


async def get_tmdb_client(request: Request) -> TMDBClient:
    """Return the TMDB client created by the application lifespan.

    Used as a FastAPI dependency.
    """
    client: TMDBClient | None = getattr(request.app.state, "tmdb_client", None)
    if client is None:
        raise CatalogueFetchError("TMDB API key is not configured")
    return client
