"""Sync failure log protocol.

Persists fact synchronizations that failed after a local commit so the
reconciliation sweep can repair them. Implementations write on their own
transaction: a record must survive even when the caller's work is done.
"""

from typing import Protocol

from trip_authz.domain.entities import SyncFailure


class SyncFailureLog(Protocol):
    """Protocol for recording and replaying failed fact syncs."""

    async def record(self, failure: SyncFailure) -> None:
        """Persist a failure record."""
        ...

    async def list_pending(self, limit: int) -> list[SyncFailure]:
        """Return up to ``limit`` unresolved records, oldest first."""
        ...

    async def mark_resolved(self, failure_ids: list[str]) -> None:
        """Mark records as repaired."""
        ...
