"""
Daily Diet Backend — Meal SQLAlchemy Model
============================================

What:  ORM model representing the `meals` table.
Who:   Used by MealService for owner-scoped CRUD and the summary.

Lifecycle:
    1. Created by POST /meals (created_at assigned by the server)
    2. Name, description and is_on_diet replaced by PUT /meals/{id}
    3. Removed by DELETE /meals/{id}
    id and user_id never change after insert.

Query Patterns:
    - List / summarize: WHERE user_id = :owner ORDER BY created_at
      → idx_meals_user_id_created_at
    - Single meal: WHERE id = :id AND user_id = :owner → primary key
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from dailydiet.database import Base


class Meal(Base):
    """A single meal logged by its owner."""

    __tablename__ = "meals"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    name: Mapped[str] = mapped_column(Text, nullable=False)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    is_on_diet: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_meals_user_id_created_at", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Meal(id={self.id}, name='{self.name}', "
            f"is_on_diet={self.is_on_diet})>"
        )
