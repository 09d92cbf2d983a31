"""SQLAlchemy StoreTransaction.

Groups the role, assignment and trip-scope repositories on one session so
a participant mutation (lock, delete, insert) commits or rolls back as a
unit.

Usage:
    open_transaction = SqlStoreTransactionFactory(database)
    async with open_transaction() as tx:
        await tx.assignments.upsert(trip_id, user_id, role_id)
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from trip_authz.infrastructure.persistence.database import Database
from trip_authz.infrastructure.persistence.repositories import (
    RoleAssignmentStore,
    RoleRepository,
    TripScopeRepository,
)


class SqlStoreTransaction:
    """Repositories sharing one AsyncSession."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._roles = RoleRepository(session)
        self._assignments = RoleAssignmentStore(session)
        self._trips = TripScopeRepository(session)

    @property
    def roles(self) -> RoleRepository:
        return self._roles

    @property
    def assignments(self) -> RoleAssignmentStore:
        return self._assignments

    @property
    def trips(self) -> TripScopeRepository:
        return self._trips


class SqlStoreTransactionFactory:
    """Callable producing StoreTransaction contexts from a Database."""

    def __init__(self, database: Database) -> None:
        self._database = database

    @asynccontextmanager
    async def __call__(self) -> AsyncGenerator[SqlStoreTransaction, None]:
        async with self._database.get_session() as session:
            yield SqlStoreTransaction(session)
