"""Movie journal: a TMDB-backed review catalogue API."""

__version__ = "0.1.0"
