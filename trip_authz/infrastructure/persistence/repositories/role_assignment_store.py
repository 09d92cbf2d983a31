"""Role assignment store implementation.

SQLAlchemy implementation of the RoleAssignmentStore protocol over the
``trip_roles`` table. All methods run inside the caller's session; the
caller owns the transaction boundary (see StoreTransaction).

Implementation Notes:
- ``upsert`` issues the DELETE as an immediate statement before adding the
  new row; relying on the unit-of-work flush would order the INSERT first
  and trip the (trip_id, user_id) unique constraint.
- ``get_for_user(for_update=True)`` renders SELECT ... FOR UPDATE on
  PostgreSQL (SQLite ignores row locks and serializes writers instead).
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from trip_authz.core.enums import ErrorCode
from trip_authz.core.errors import NotFoundError
from trip_authz.core.result import Failure, Result, Success
from trip_authz.domain.entities import Participant, RoleAssignment
from trip_authz.infrastructure.persistence.models import Role, TripRole, User


class RoleAssignmentStore:
    """SQLAlchemy implementation of RoleAssignmentStore protocol."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize store with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    async def get(self, trip_id: str) -> list[RoleAssignment]:
        """Return every assignment on a trip, oldest first.

        Args:
            trip_id: Trip identifier.

        Returns:
            List of RoleAssignment entities (empty if none).
        """
        stmt = (
            select(TripRole)
            .where(TripRole.trip_id == trip_id)
            .order_by(TripRole.created_at, TripRole.user_id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def get_for_user(
        self, trip_id: str, user_id: str, *, for_update: bool = False
    ) -> RoleAssignment | None:
        """Return one user's assignment on a trip.

        Args:
            trip_id: Trip identifier.
            user_id: User identifier.
            for_update: Lock the row until the transaction ends.

        Returns:
            RoleAssignment if found, None otherwise.
        """
        model = await self._find(trip_id, user_id, for_update=for_update)
        if model is None:
            return None
        return self._to_entity(model)

    async def upsert(self, trip_id: str, user_id: str, role_id: str) -> RoleAssignment:
        """Create or replace a user's assignment.

        Args:
            trip_id: Trip identifier.
            user_id: User identifier.
            role_id: Role to assign.

        Returns:
            The newly written assignment.

        Raises:
            sqlalchemy.exc.IntegrityError: If the trip, user or role does not exist.
        """
        await self._session.execute(
            delete(TripRole).where(
                TripRole.trip_id == trip_id,
                TripRole.user_id == user_id,
            )
        )

        model = TripRole(trip_id=trip_id, user_id=user_id, role_id=role_id)
        self._session.add(model)
        await self._session.flush()

        return self._to_entity(model)

    async def remove(
        self, trip_id: str, user_id: str
    ) -> Result[RoleAssignment, NotFoundError]:
        """Remove a user's assignment.

        Args:
            trip_id: Trip identifier.
            user_id: User identifier.

        Returns:
            Success with the removed assignment, Failure(NotFoundError) if absent.
        """
        model = await self._find(trip_id, user_id, for_update=True)
        if model is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.ROLE_ASSIGNMENT_NOT_FOUND,
                    message="User has no role on this trip",
                    resource_type="RoleAssignment",
                    resource_id=f"{trip_id}:{user_id}",
                )
            )

        removed = self._to_entity(model)
        await self._session.delete(model)
        await self._session.flush()

        return Success(value=removed)

    async def list_trip_ids(self) -> list[str]:
        """Return ids of trips with at least one assignment.

        Returns:
            Sorted list of trip ids.
        """
        stmt = select(TripRole.trip_id).distinct().order_by(TripRole.trip_id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_participants(self, trip_id: str) -> list[Participant]:
        """Return a trip's members joined with user and role names.

        Args:
            trip_id: Trip identifier.

        Returns:
            Participants ordered by join time.
        """
        stmt = (
            select(TripRole, User.display_name, Role.name)
            .join(User, User.id == TripRole.user_id)
            .join(Role, Role.id == TripRole.role_id)
            .where(TripRole.trip_id == trip_id)
            .order_by(TripRole.created_at, TripRole.user_id)
        )
        result = await self._session.execute(stmt)
        return [
            Participant(
                user_id=model.user_id,
                display_name=display_name,
                role_name=role_name,
                joined_at=model.created_at,
            )
            for model, display_name, role_name in result.all()
        ]

    async def _find(
        self, trip_id: str, user_id: str, *, for_update: bool
    ) -> TripRole | None:
        stmt = select(TripRole).where(
            TripRole.trip_id == trip_id,
            TripRole.user_id == user_id,
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: TripRole) -> RoleAssignment:
        return RoleAssignment(
            trip_id=model.trip_id,
            user_id=model.user_id,
            role_id=model.role_id,
            created_at=model.created_at,
        )
