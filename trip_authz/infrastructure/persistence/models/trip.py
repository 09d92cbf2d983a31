"""Trip and expense database models."""

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from trip_authz.core.constants import DEFAULT_ORGANIZATION_ID
from trip_authz.infrastructure.persistence.base import BaseModel


class Trip(BaseModel):
    """Trip owned by an organization.

    Fields:
        id: String primary key (from BaseModel)
        created_at: Creation timestamp (from BaseModel)
        name: Trip name
        organization_id: Owning tenant (single-tenant deployments use "default")
    """

    __tablename__ = "trips"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    organization_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        default=DEFAULT_ORGANIZATION_ID,
        comment="Owning organization; mirrored as has_relation(Trip, organization, Organization)",
    )


class Expense(BaseModel):
    """Expense recorded against a trip.

    Indexes:
        - idx_expenses_trip: (trip_id) - trip scope lookups during evaluation
    """

    __tablename__ = "expenses"

    trip_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("trips.id", ondelete="CASCADE"),
        nullable=False,
    )

    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    __table_args__ = (Index("idx_expenses_trip", "trip_id"),)
