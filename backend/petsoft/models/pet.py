"""
PetSoft Backend — Pet SQLAlchemy Model
========================================

What:  ORM model representing the `pets` table (one row per boarding guest).
Who:   Created by add_pet, updated by edit_pet, deleted by checkout_pet,
       listed on the dashboard.

Ownership:
    `user_id` references the owning account. Edit and checkout compare it
    with the acting user before touching the row; the database does not
    enforce that rule.

Query Patterns:
    - Dashboard listing: SELECT ... WHERE user_id = :uid ORDER BY created_at
      → Uses idx_pets_user_id
    - Ownership check: SELECT ... WHERE id = :uuid → primary key lookup
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from petsoft.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Pet(Base):
    """A pet currently boarding, owned by one user."""

    __tablename__ = "pets"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="Owning account",
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    owner_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Display name of the pet's human, shown on the dashboard",
    )

    # Always a URL: empty submissions are replaced by the placeholder image
    image_url: Mapped[str] = mapped_column(Text, nullable=False)

    age: Mapped[int] = mapped_column(Integer, nullable=False)

    notes: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

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
        Index("idx_pets_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<Pet(id={self.id}, name='{self.name}', user_id={self.user_id})>"
