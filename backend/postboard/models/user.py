"""
Postboard Backend — User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table.
Why:   The credential store: login looks users up by username, and posts and
       comments reference users as their author.

Table Design:
    - UUID primary key: non-sequential, so ids cannot be enumerated
    - username / email: unbounded TEXT, each UNIQUE; duplicate registrations
      are rejected by the database and surface as an IntegrityError
    - password_hash: bcrypt output (60 chars); never leaves the service layer
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text, UniqueConstraint, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base


class User(Base):
    """
    A registered account.

    Lifecycle:
        Created at registration; never mutated or deleted by this service.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    email: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    # Registration relies on these to reject duplicates
    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        UniqueConstraint("email", name="uq_users_email"),
    )

    def __repr__(self) -> str:
        # password_hash deliberately omitted
        return f"<User(id={self.id}, username='{self.username}')>"
