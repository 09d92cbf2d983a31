"""Integration tests for SyncFailureRepository."""

from datetime import UTC, datetime, timedelta

import pytest

from trip_authz.domain.entities import SyncFailure
from trip_authz.infrastructure.persistence.repositories import SyncFailureRepository

pytestmark = pytest.mark.integration


@pytest.fixture
def repository(database):
    return SyncFailureRepository(database)


class TestSyncFailureRepository:
    async def test_record_and_list_pending_oldest_first(self, repository):
        now = datetime.now(UTC)
        newer = SyncFailure(
            operation="trip_created", reason="timeout", trip_id="t2", created_at=now
        )
        older = SyncFailure(
            operation="assignment_changed",
            reason="timeout",
            trip_id="t1",
            user_id="u1",
            created_at=now - timedelta(minutes=5),
        )
        await repository.record(newer)
        await repository.record(older)

        pending = await repository.list_pending(limit=10)

        assert [f.id for f in pending] == [older.id, newer.id]
        assert pending[0].user_id == "u1"
        assert pending[0].resolved_at is None

    async def test_limit(self, repository):
        for i in range(3):
            await repository.record(
                SyncFailure(operation="expense_deleted", reason="x", expense_id=f"e{i}")
            )

        assert len(await repository.list_pending(limit=2)) == 2

    async def test_mark_resolved_hides_records(self, repository):
        first = SyncFailure(operation="user_registered", reason="x", user_id="u1")
        second = SyncFailure(operation="user_registered", reason="x", user_id="u2")
        await repository.record(first)
        await repository.record(second)

        await repository.mark_resolved([first.id])

        assert [f.id for f in await repository.list_pending(limit=10)] == [second.id]

    async def test_mark_resolved_with_no_ids(self, repository):
        await repository.mark_resolved([])

        assert await repository.list_pending(limit=10) == []
