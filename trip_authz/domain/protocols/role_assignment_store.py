"""Role and role-assignment store protocols.

The relational store is the local source of truth for trip membership.
``StoreTransaction`` groups the repositories that share one database
transaction; it is obtained from a ``StoreTransactionFactory`` and commits
when its context exits without error.

Usage:
    async with transaction_factory() as tx:
        current = await tx.assignments.get_for_user(trip_id, user_id, for_update=True)
        await tx.assignments.upsert(trip_id, user_id, role_id)
    # committed here; only now may policy facts be synchronized
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Protocol

from trip_authz.core.errors import NotFoundError
from trip_authz.core.result import Result
from trip_authz.domain.entities import Participant, Role, RoleAssignment


class RoleRepository(Protocol):
    """Read access to the seeded role set."""

    async def list_all(self) -> list[Role]:
        """Return every role."""
        ...


class RoleAssignmentStore(Protocol):
    """Protocol for trip role-assignment persistence.

    At most one assignment exists per (trip_id, user_id).
    """

    async def get(self, trip_id: str) -> list[RoleAssignment]:
        """Return every assignment on a trip."""
        ...

    async def get_for_user(
        self, trip_id: str, user_id: str, *, for_update: bool = False
    ) -> RoleAssignment | None:
        """Return one user's assignment on a trip.

        Args:
            trip_id: Trip identifier.
            user_id: User identifier.
            for_update: Lock the row for the rest of the transaction.

        Returns:
            The assignment, or None when the user holds no role on the trip.
        """
        ...

    async def upsert(self, trip_id: str, user_id: str, role_id: str) -> RoleAssignment:
        """Create or replace a user's assignment (delete then insert)."""
        ...

    async def remove(
        self, trip_id: str, user_id: str
    ) -> Result[RoleAssignment, NotFoundError]:
        """Remove a user's assignment.

        Returns:
            Success with the removed assignment, or Failure(NotFoundError).
        """
        ...

    async def list_trip_ids(self) -> list[str]:
        """Return the ids of every trip with at least one assignment."""
        ...

    async def list_participants(self, trip_id: str) -> list[Participant]:
        """Return a trip's members with display names and role names."""
        ...


class TripScopeRepository(Protocol):
    """Resolves the trip a resource belongs to."""

    async def get_expense_trip_id(self, expense_id: str) -> str | None:
        """Return the owning trip of an expense, or None if it does not exist."""
        ...

    async def get_trip_organization_id(self, trip_id: str) -> str | None:
        """Return the organization of a trip, or None if it does not exist."""
        ...

    async def list_expense_ids(self, trip_id: str) -> list[str]:
        """Return the ids of every expense recorded against a trip."""
        ...

    async def user_exists(self, user_id: str) -> bool:
        """Return True if the user is registered."""
        ...


class StoreTransaction(Protocol):
    """Repositories bound to one transaction."""

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def assignments(self) -> RoleAssignmentStore: ...

    @property
    def trips(self) -> TripScopeRepository: ...


type StoreTransactionFactory = Callable[
    [], AbstractAsyncContextManager[StoreTransaction]
]
