"""Comment ORM model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from movie_journal.database import Base
from movie_journal.utils.timestamps import utc_now

if TYPE_CHECKING:
    from movie_journal.models.movie import Movie


class Comment(Base):
    """A visitor comment attached to a movie."""

    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(primary_key=True)
    movie_id: Mapped[int] = mapped_column(ForeignKey("movies.id", ondelete="CASCADE"), index=True)
    author: Mapped[str] = mapped_column(String(100))
    content: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utc_now)

    # Relationships
    movie: Mapped[Movie] = relationship(back_populates="comments")
