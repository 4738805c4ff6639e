"""Movie ORM model."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, CheckConstraint, Date, DateTime, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movie_journal.database import Base
from movie_journal.utils.timestamps import utc_now

if TYPE_CHECKING:
    from movie_journal.models.comment import Comment


class Movie(Base):
    """A movie imported from TMDB into the journal."""

    __tablename__ = "movies"
    __table_args__ = (
        CheckConstraint("rating IS NULL OR (rating >= 0 AND rating <= 5)", name="ck_rating_range"),
        # At most one featured movie
        Index(
            "uq_movies_single_featured",
            "featured",
            unique=True,
            sqlite_where=text("featured = 1"),
            postgresql_where=text("featured"),
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    tmdb_id: Mapped[int] = mapped_column(unique=True, index=True)
    title: Mapped[str] = mapped_column(String(255))
    overview: Mapped[str] = mapped_column(Text, default="")
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    poster_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    backdrop_path: Mapped[str | None] = mapped_column(String(255), nullable=True)
    genres: Mapped[list[str]] = mapped_column(JSON, default=list)
    director: Mapped[str] = mapped_column(String(255), default="")
    cast: Mapped[list[str]] = mapped_column(JSON, default=list)
    runtime: Mapped[int | None] = mapped_column(nullable=True)
    vote_average: Mapped[float | None] = mapped_column(nullable=True)  # TMDB score
    rating: Mapped[int | None] = mapped_column(nullable=True)  # Journal score, 0-5
    featured: Mapped[bool] = mapped_column(default=False)
    added_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    # Relationships
    comments: Mapped[list[Comment]] = relationship(
        back_populates="movie",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )
