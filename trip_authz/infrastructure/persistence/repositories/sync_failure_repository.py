"""Sync failure repository implementation.

Unlike the other repositories this one owns its sessions: each call runs
in a fresh transaction from ``Database.get_session`` so a failure record is
durable no matter what happens to the caller's unit of work.
"""

from datetime import UTC, datetime

from sqlalchemy import select, update

from trip_authz.domain.entities import SyncFailure
from trip_authz.infrastructure.persistence.database import Database
from trip_authz.infrastructure.persistence.models import PolicySyncFailure


class SyncFailureRepository:
    """SQLAlchemy implementation of SyncFailureLog protocol."""

    def __init__(self, database: Database) -> None:
        """Initialize repository.

        Args:
            database: Database providing independent sessions.
        """
        self._database = database

    async def record(self, failure: SyncFailure) -> None:
        """Persist a failure record in its own transaction."""
        async with self._database.get_session() as session:
            session.add(self._to_model(failure))

    async def list_pending(self, limit: int) -> list[SyncFailure]:
        """Return up to ``limit`` unresolved records, oldest first."""
        stmt = (
            select(PolicySyncFailure)
            .where(PolicySyncFailure.resolved_at.is_(None))
            .order_by(PolicySyncFailure.created_at)
            .limit(limit)
        )
        async with self._database.get_session() as session:
            result = await session.execute(stmt)
            return [self._to_entity(model) for model in result.scalars().all()]

    async def mark_resolved(self, failure_ids: list[str]) -> None:
        """Stamp ``resolved_at`` on the given records."""
        if not failure_ids:
            return
        stmt = (
            update(PolicySyncFailure)
            .where(PolicySyncFailure.id.in_(failure_ids))
            .values(resolved_at=datetime.now(UTC))
        )
        async with self._database.get_session() as session:
            await session.execute(stmt)

    def _to_model(self, entity: SyncFailure) -> PolicySyncFailure:
        return PolicySyncFailure(
            id=entity.id,
            created_at=entity.created_at,
            operation=entity.operation,
            reason=entity.reason,
            trip_id=entity.trip_id,
            user_id=entity.user_id,
            expense_id=entity.expense_id,
            resolved_at=entity.resolved_at,
        )

    def _to_entity(self, model: PolicySyncFailure) -> SyncFailure:
        return SyncFailure(
            id=model.id,
            created_at=model.created_at,
            operation=model.operation,
            reason=model.reason,
            trip_id=model.trip_id,
            user_id=model.user_id,
            expense_id=model.expense_id,
            resolved_at=model.resolved_at,
        )
