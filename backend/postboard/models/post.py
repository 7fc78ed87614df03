"""
Postboard Backend — Post SQLAlchemy Model
===========================================

What:  ORM model representing the `posts` table.

Table Design:
    - author_id: FK to users.id, set once at creation and never reassigned.
      Ownership checks compare it with the authenticated user's id.
    - updated_at: bumped by SQLAlchemy on every UPDATE
    - Index on (created_at, id): listing pages through posts in insertion
      order, and the index keeps OFFSET/LIMIT from sorting the whole table
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """A blog post owned by its author."""

    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_posts_created_at_id", "created_at", "id"),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, author_id={self.author_id}, title='{self.title}')>"
