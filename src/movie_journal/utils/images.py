"""TMDB image URL helpers."""

IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
POSTER_SIZES = ("w92", "w154", "w185", "w342", "w500", "w780", "original")
BACKDROP_SIZES = ("w300", "w780", "w1280", "original")


def get_poster_url(poster_path: str | None, size: str = "w342") -> str | None:
    """Generate full poster image URL.

    Args:
        poster_path: Poster path from TMDB (e.g., "/abc123.jpg").
        size: Image size. Valid sizes: w92, w154, w185, w342, w500, w780, original.

    Returns:
        Full poster URL or None if no poster path provided.
    """
    if not poster_path:
        return None

    if size not in POSTER_SIZES:
        size = "w342"  # Default fallback

    return f"{IMAGE_BASE_URL}/{size}{poster_path}"


def get_backdrop_url(backdrop_path: str | None, size: str = "w780") -> str | None:
    """Generate full backdrop image URL.

    Args:
        backdrop_path: Backdrop path from TMDB (e.g., "/abc123.jpg").
        size: Image size. Valid sizes: w300, w780, w1280, original.

    Returns:
        Full backdrop URL or None if no backdrop path provided.
    """
    if not backdrop_path:
        return None

    if size not in BACKDROP_SIZES:
        size = "w780"  # Default fallback

    return f"{IMAGE_BASE_URL}/{size}{backdrop_path}"
