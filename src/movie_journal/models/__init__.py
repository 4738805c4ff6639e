"""SQLAlchemy ORM models."""

from movie_journal.models.comment import Comment
from movie_journal.models.movie import Movie

__all__ = [
    "Comment",
    "Movie",
]
