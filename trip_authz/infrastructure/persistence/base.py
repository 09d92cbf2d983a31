"""Base model for all database entities.

Following hexagonal architecture:
- This is an infrastructure concern (database implementation detail)
- Domain entities do NOT inherit from this
- Repositories map models to/from domain entities

Ids are opaque strings (36-char UUIDs generated in Python) so every table
can be referenced the same way from facts and request paths.

Usage:
    class TripModel(BaseModel):
        __tablename__ = "trips"
        name: Mapped[str]
        # Has: id, created_at
"""

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def generate_id() -> str:
    return str(uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Provides:
    - id: string primary key (auto-generated)
    - created_at: creation timestamp (UTC, set in Python so the value is
      available without a refresh after flush)
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_id,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary (for debugging/logging)."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
