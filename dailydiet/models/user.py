"""
Daily Diet Backend — User SQLAlchemy Model
============================================

What:  ORM model representing the `users` table.
Who:   Used by UserService (registration) and SessionService (token lookup).

Table Design Rationale:
    - email is UNIQUE: registration is rejected on an exact-match duplicate
    - session_id is UNIQUE and nullable: one token maps to at most one user,
      and the column is filled when the token is issued
    - Rows are never updated after registration
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from dailydiet.database import Base


class User(Base):
    """A registered diet tracker owner."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    username: Mapped[str] = mapped_column(Text, nullable=False)

    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    # Indexed through the unique constraint; every authenticated request
    # looks a user up by this column.
    session_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid,
        nullable=True,
        unique=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        # session_id deliberately left out of logs and reprs
        return f"<User(id={self.id}, email='{self.email}')>"
