"""Unit tests for FactReconciler."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from trip_authz.application.services import (
    FactReconciler,
    ReconcileReport,
    RoleDirectory,
)
from trip_authz.application.services.fact_reconciler import MAX_RESYNC_ATTEMPTS
from trip_authz.core.result import Failure, Success
from trip_authz.domain.entities import Role, RoleAssignment, SyncFailure
from trip_authz.domain.errors import PolicySyncError, StoreUnavailableError
from trip_authz.domain.protocols import SyncFailureLog
from trip_authz.domain.value_objects import (
    FactChangeKind,
    expense_trip,
    has_role,
    organization_member,
    trip_organization,
)
from tests.fakes import stub_store

pytestmark = pytest.mark.unit

ROLES = [
    Role(id="r-org", name="organizer"),
    Role(id="r-part", name="participant"),
    Role(id="r-view", name="viewer"),
]


@pytest.fixture
def failure_log():
    log = AsyncMock(spec=SyncFailureLog)
    log.list_pending.return_value = []
    return log


def create_reconciler(policy_service, failure_log, mock_logger, **store_kwargs):
    factory, tx = stub_store(**store_kwargs)
    tx.assignments.get.return_value = [
        RoleAssignment(trip_id="t1", user_id="u1", role_id="r-org"),
        RoleAssignment(trip_id="t1", user_id="u2", role_id="r-view"),
    ]
    tx.trips.get_trip_organization_id.return_value = "default"
    tx.trips.list_expense_ids.return_value = ["e1"]
    tx.assignments.list_trip_ids.return_value = ["t1"]

    reconciler = FactReconciler(
        store=factory,
        client=policy_service,
        role_directory=RoleDirectory(
            loader=AsyncMock(return_value=ROLES), logger=mock_logger
        ),
        failure_log=failure_log,
        default_organization_id="default",
        batch_size=50,
        logger=mock_logger,
    )
    return reconciler, tx


EXPECTED_T1 = {
    has_role(user_id="u1", role_name="organizer", trip_id="t1"),
    has_role(user_id="u2", role_name="viewer", trip_id="t1"),
    trip_organization(trip_id="t1", organization_id="default"),
    expense_trip(expense_id="e1", trip_id="t1"),
}


class TestResyncTrip:
    """Rebuilding one trip's facts."""

    async def test_replaces_stale_facts_with_local_truth(
        self, policy_service, failure_log, mock_logger
    ):
        unrelated = has_role(user_id="u1", role_name="viewer", trip_id="t2")
        policy_service.facts |= {
            has_role(user_id="u3", role_name="organizer", trip_id="t1"),
            has_role(user_id="u2", role_name="organizer", trip_id="t1"),
            expense_trip(expense_id="e-gone", trip_id="t1"),
            unrelated,
        }
        reconciler, _ = create_reconciler(policy_service, failure_log, mock_logger)

        result = await reconciler.resync_trip("t1")

        assert result == Success(value=4)
        assert policy_service.facts == EXPECTED_T1 | {unrelated}

    async def test_single_batch_deletes_before_inserts(
        self, policy_service, failure_log, mock_logger
    ):
        reconciler, _ = create_reconciler(policy_service, failure_log, mock_logger)

        await reconciler.resync_trip("t1")

        assert len(policy_service.batches) == 1
        kinds = [c.kind for c in policy_service.batches[0]]
        assert kinds == [FactChangeKind.DELETES, FactChangeKind.INSERTS]
        assert len(policy_service.batches[0][0].items) == 3

    async def test_change_during_batch_is_rebuilt(
        self, policy_service, failure_log, mock_logger
    ):
        reconciler, tx = create_reconciler(policy_service, failure_log, mock_logger)
        before = [RoleAssignment(trip_id="t1", user_id="u1", role_id="r-org")]
        after = [RoleAssignment(trip_id="t1", user_id="u1", role_id="r-view")]
        tx.assignments.get.side_effect = [before, after, after]

        result = await reconciler.resync_trip("t1")

        assert isinstance(result, Success)
        assert len(policy_service.batches) == 2
        assert policy_service.facts == {
            has_role(user_id="u1", role_name="viewer", trip_id="t1"),
            trip_organization(trip_id="t1", organization_id="default"),
            expense_trip(expense_id="e1", trip_id="t1"),
        }
        failure_log.record.assert_not_awaited()

    async def test_unsettled_trip_is_recorded(
        self, policy_service, failure_log, mock_logger
    ):
        reconciler, tx = create_reconciler(policy_service, failure_log, mock_logger)
        role_ids = iter(["r-org", "r-view", "r-part", "r-org", "r-view"])
        tx.assignments.get.side_effect = lambda trip_id: [
            RoleAssignment(trip_id=trip_id, user_id="u1", role_id=next(role_ids))
        ]

        result = await reconciler.resync_trip("t1")

        assert isinstance(result, Failure)
        assert isinstance(result.error, PolicySyncError)
        assert len(policy_service.batches) == MAX_RESYNC_ATTEMPTS
        recorded = failure_log.record.call_args.args[0]
        assert (recorded.operation, recorded.trip_id) == ("trip_resync", "t1")
        assert mock_logger.warning.call_args.args[0] == "trip_resync_unsettled"

    async def test_deleted_trip_only_clears_facts(
        self, policy_service, failure_log, mock_logger
    ):
        policy_service.facts.add(
            has_role(user_id="u1", role_name="organizer", trip_id="t1")
        )
        reconciler, tx = create_reconciler(policy_service, failure_log, mock_logger)
        tx.assignments.get.return_value = []
        tx.trips.get_trip_organization_id.return_value = None

        result = await reconciler.resync_trip("t1")

        assert result == Success(value=0)
        assert policy_service.facts == set()
        tx.trips.list_expense_ids.assert_not_awaited()

    async def test_store_failure_makes_no_policy_call(
        self, policy_service, failure_log, mock_logger
    ):
        reconciler, _ = create_reconciler(
            policy_service, failure_log, mock_logger, error=ConnectionError("db down")
        )

        result = await reconciler.resync_trip("t1")

        assert isinstance(result, Failure)
        assert isinstance(result.error, StoreUnavailableError)
        assert policy_service.batches == []

    async def test_service_failure_is_returned(
        self, policy_service, failure_log, mock_logger
    ):
        policy_service.available = False
        reconciler, _ = create_reconciler(policy_service, failure_log, mock_logger)

        result = await reconciler.resync_trip("t1")

        assert isinstance(result, Failure)


class TestReconcilePending:
    """Replaying recorded sync failures."""

    async def test_nothing_pending(self, policy_service, failure_log, mock_logger):
        reconciler, _ = create_reconciler(policy_service, failure_log, mock_logger)

        result = await reconciler.reconcile_pending()

        assert result == Success(value=ReconcileReport())
        failure_log.mark_resolved.assert_not_awaited()

    async def test_replays_and_resolves(self, policy_service, failure_log, mock_logger):
        trip_a = SyncFailure(operation="assignment_changed", reason="timeout", trip_id="t1")
        trip_b = SyncFailure(operation="trip_created", reason="timeout", trip_id="t1")
        user = SyncFailure(operation="user_registered", reason="timeout", user_id="u9")
        unknown = SyncFailure(operation="mystery", reason="timeout")
        failure_log.list_pending.return_value = [trip_a, trip_b, user, unknown]
        reconciler, _ = create_reconciler(policy_service, failure_log, mock_logger)

        result = await reconciler.reconcile_pending()

        assert result == Success(
            value=ReconcileReport(trips_resynced=1, records_resolved=3, records_pending=1)
        )
        failure_log.list_pending.assert_awaited_once_with(50)
        failure_log.mark_resolved.assert_awaited_once_with([trip_a.id, trip_b.id, user.id])
        assert organization_member(user_id="u9", organization_id="default") in (
            policy_service.facts
        )
        assert EXPECTED_T1 <= policy_service.facts

    async def test_expense_deleted_replay(self, policy_service, failure_log, mock_logger):
        policy_service.facts.add(expense_trip(expense_id="e5", trip_id="t3"))
        record = SyncFailure(operation="expense_deleted", reason="timeout", expense_id="e5")
        failure_log.list_pending.return_value = [record]
        reconciler, _ = create_reconciler(policy_service, failure_log, mock_logger)

        result = await reconciler.reconcile_pending()

        assert result.value.records_resolved == 1
        assert policy_service.facts == set()

    async def test_failed_replay_stays_pending(
        self, policy_service, failure_log, mock_logger
    ):
        policy_service.available = False
        failure_log.list_pending.return_value = [
            SyncFailure(operation="assignment_changed", reason="timeout", trip_id="t1")
        ]
        reconciler, _ = create_reconciler(policy_service, failure_log, mock_logger)

        result = await reconciler.reconcile_pending()

        assert result.value == ReconcileReport(records_pending=1)
        failure_log.mark_resolved.assert_awaited_once_with([])

    async def test_unreadable_log(self, policy_service, failure_log, mock_logger):
        failure_log.list_pending.side_effect = ConnectionError("db down")
        reconciler, _ = create_reconciler(policy_service, failure_log, mock_logger)

        result = await reconciler.reconcile_pending()

        assert isinstance(result, Failure)
        assert isinstance(result.error, StoreUnavailableError)


class TestResyncAllAndLoop:
    """Whole-dataset resync and the background loop."""

    async def test_resync_all(self, policy_service, failure_log, mock_logger):
        reconciler, _ = create_reconciler(policy_service, failure_log, mock_logger)

        result = await reconciler.resync_all()

        assert result == Success(value=ReconcileReport(trips_resynced=1))
        assert policy_service.facts == EXPECTED_T1

    async def test_loop_survives_errors_until_cancelled(
        self, policy_service, failure_log, mock_logger
    ):
        reconciler, _ = create_reconciler(policy_service, failure_log, mock_logger)
        calls = 0

        async def flaky():
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RuntimeError("boom")
            return Success(value=ReconcileReport())

        reconciler.reconcile_pending = flaky

        task = asyncio.create_task(reconciler.run_reconciliation_loop(0))
        for _ in range(5):
            await asyncio.sleep(0)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert calls >= 2
        logged = [c.args[0] for c in mock_logger.error.call_args_list]
        assert "reconciliation_loop_error" in logged
