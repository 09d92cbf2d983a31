"""Role and trip role-assignment database models."""

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from trip_authz.infrastructure.persistence.base import BaseModel


class Role(BaseModel):
    """Seeded role ("organizer", "participant", "viewer").

    Rows are written by ``seed_roles`` and never mutated at runtime.
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        unique=True,
        comment="Lowercase role name; used verbatim in has_role facts",
    )


class TripRole(BaseModel):
    """A user's role on a trip.

    Fields:
        id: String primary key (from BaseModel)
        created_at: When the assignment was written (from BaseModel)
        trip_id: Trip (cascade on trip delete)
        user_id: User (cascade on user delete)
        role_id: Role (cascade on role delete)

    Constraints:
        - uq_trip_roles_trip_user: (trip_id, user_id) UNIQUE - one role per user per trip
    """

    __tablename__ = "trip_roles"

    trip_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("trips.id", ondelete="CASCADE"),
        nullable=False,
    )

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    role_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("roles.id", ondelete="CASCADE"),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("trip_id", "user_id", name="uq_trip_roles_trip_user"),
        Index("idx_trip_roles_user", "user_id"),
    )
