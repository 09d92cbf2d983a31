"""SyncFailure domain entity.

Records a policy-fact synchronization that failed after the local
role-assignment change had already been committed. The reconciliation
sweep replays unresolved records and marks them resolved.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import cast
from uuid import UUID

from uuid_extensions import uuid7


def _new_id() -> str:
    return str(cast(UUID, uuid7()))


@dataclass(slots=True, kw_only=True)
class SyncFailure:
    """A recoverable inconsistency between trip_roles and policy facts.

    Attributes:
        id: Unique record identifier (time-ordered).
        operation: Synchronizer operation that failed ("assignment_changed", ...).
        reason: Error message reported by the failed call.
        trip_id: Trip whose facts may be stale (None for non-trip operations).
        user_id: User whose facts may be stale, when known.
        expense_id: Expense whose relation facts may be stale, when known.
        created_at: When the failure was recorded.
        resolved_at: When reconciliation repaired it (None while pending).
    """

    operation: str
    reason: str
    trip_id: str | None = None
    user_id: str | None = None
    expense_id: str | None = None
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    resolved_at: datetime | None = None

    @property
    def is_resolved(self) -> bool:
        """True once reconciliation has repaired the drift."""
        return self.resolved_at is not None

    def mark_resolved(self) -> None:
        """Mark the drift as repaired."""
        self.resolved_at = datetime.now(UTC)
