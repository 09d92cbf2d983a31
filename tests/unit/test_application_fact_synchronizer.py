"""Unit tests for FactSynchronizer.

Uses the in-memory FakePolicyService so tests can assert both the resulting
fact set and the exact change sets each call produced.
"""

from unittest.mock import AsyncMock

import pytest

from trip_authz.application.services import FactSynchronizer, RoleDirectory
from trip_authz.core.enums import ErrorCode
from trip_authz.core.result import Failure, Success
from trip_authz.domain.entities import Role, SyncFailure
from trip_authz.domain.errors import PolicySyncError
from trip_authz.domain.protocols import SyncFailureLog
from trip_authz.domain.value_objects import (
    FactChangeKind,
    expense_trip,
    has_role,
    organization_member,
    trip_organization,
    trip_roles_pattern,
)

pytestmark = pytest.mark.unit

ROLES = [
    Role(id="r-org", name="organizer"),
    Role(id="r-part", name="participant"),
    Role(id="r-view", name="viewer"),
]


@pytest.fixture
def failure_log():
    return AsyncMock(spec=SyncFailureLog)


@pytest.fixture
def synchronizer(policy_service, failure_log, mock_logger):
    return FactSynchronizer(
        client=policy_service,
        role_directory=RoleDirectory(
            loader=AsyncMock(return_value=ROLES), logger=mock_logger
        ),
        failure_log=failure_log,
        logger=mock_logger,
    )


class TestAssignmentChanged:
    """Role fact mirroring."""

    async def test_creation_inserts_role_fact(self, synchronizer, policy_service):
        result = await synchronizer.on_assignment_changed(
            "t1", "u1", old_role_id=None, new_role_id="r-part"
        )

        assert result == Success(value=None)
        assert policy_service.facts == {
            has_role(user_id="u1", role_name="participant", trip_id="t1")
        }

    async def test_change_is_one_batch_delete_then_insert(
        self, synchronizer, policy_service
    ):
        policy_service.facts.add(
            has_role(user_id="u1", role_name="participant", trip_id="t1")
        )

        result = await synchronizer.on_assignment_changed(
            "t1", "u1", old_role_id="r-part", new_role_id="r-view"
        )

        assert isinstance(result, Success)
        assert len(policy_service.batches) == 1
        changes = policy_service.batches[0]
        assert [c.kind for c in changes] == [
            FactChangeKind.DELETES,
            FactChangeKind.INSERTS,
        ]
        assert changes[0].items == [trip_roles_pattern(trip_id="t1", user_id="u1")]
        assert policy_service.facts == {
            has_role(user_id="u1", role_name="viewer", trip_id="t1")
        }

    async def test_removal_deletes_users_role_facts(self, synchronizer, policy_service):
        policy_service.facts |= {
            has_role(user_id="u1", role_name="viewer", trip_id="t1"),
            has_role(user_id="u2", role_name="organizer", trip_id="t1"),
        }

        result = await synchronizer.on_assignment_changed(
            "t1", "u1", old_role_id="r-view", new_role_id=None
        )

        assert isinstance(result, Success)
        assert policy_service.facts == {
            has_role(user_id="u2", role_name="organizer", trip_id="t1")
        }

    async def test_same_role_makes_no_call(self, synchronizer, policy_service):
        result = await synchronizer.on_assignment_changed(
            "t1", "u1", old_role_id="r-org", new_role_id="r-org"
        )

        assert result == Success(value=None)
        assert policy_service.batches == []

    async def test_unavailable_service_records_failure(
        self, synchronizer, policy_service, failure_log, mock_logger
    ):
        policy_service.available = False

        result = await synchronizer.on_assignment_changed(
            "t1", "u1", old_role_id=None, new_role_id="r-org"
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, PolicySyncError)
        assert result.error.code == ErrorCode.POLICY_SYNC_FAILED
        assert result.error.trip_id == "t1"
        recorded: SyncFailure = failure_log.record.call_args.args[0]
        assert recorded.operation == "assignment_changed"
        assert recorded.trip_id == "t1"
        assert recorded.user_id == "u1"
        assert not recorded.is_resolved
        assert mock_logger.error.call_args.args[0] == "policy_sync_failed"

    async def test_unknown_role_id_is_a_sync_failure(
        self, synchronizer, policy_service, failure_log
    ):
        result = await synchronizer.on_assignment_changed(
            "t1", "u1", old_role_id=None, new_role_id="r-missing"
        )

        assert isinstance(result, Failure)
        assert policy_service.batches == []
        failure_log.record.assert_awaited_once()

    async def test_unrecorded_failure_is_logged_critical(
        self, synchronizer, policy_service, failure_log, mock_logger
    ):
        policy_service.available = False
        failure_log.record.side_effect = ConnectionError("db down")

        result = await synchronizer.on_assignment_changed(
            "t1", "u1", old_role_id=None, new_role_id="r-org"
        )

        assert isinstance(result, Failure)
        assert (
            mock_logger.critical.call_args.args[0]
            == "policy_sync_failure_not_recorded"
        )


class TestLifecycleHooks:
    """Trip, user and expense relation facts."""

    async def test_trip_created_links_organization(self, synchronizer, policy_service):
        await synchronizer.on_trip_created("t1", "default")

        assert policy_service.facts == {
            trip_organization(trip_id="t1", organization_id="default")
        }

    async def test_trip_deleted_removes_roles_relations_and_expenses(
        self, synchronizer, policy_service
    ):
        policy_service.facts |= {
            has_role(user_id="u1", role_name="organizer", trip_id="t1"),
            has_role(user_id="u2", role_name="viewer", trip_id="t1"),
            trip_organization(trip_id="t1", organization_id="default"),
            expense_trip(expense_id="e1", trip_id="t1"),
            has_role(user_id="u1", role_name="viewer", trip_id="t2"),
            expense_trip(expense_id="e2", trip_id="t2"),
        }

        result = await synchronizer.on_trip_deleted("t1")

        assert isinstance(result, Success)
        assert policy_service.facts == {
            has_role(user_id="u1", role_name="viewer", trip_id="t2"),
            expense_trip(expense_id="e2", trip_id="t2"),
        }
        assert len(policy_service.batches[0]) == 1
        assert len(policy_service.batches[0][0].items) == 3

    async def test_user_registered_grants_membership(self, synchronizer, policy_service):
        await synchronizer.on_user_registered("u1", "default")

        assert policy_service.facts == {
            organization_member(user_id="u1", organization_id="default")
        }

    async def test_expense_created_and_deleted(self, synchronizer, policy_service):
        await synchronizer.on_expense_created("e1", "t1")
        assert policy_service.facts == {expense_trip(expense_id="e1", trip_id="t1")}

        await synchronizer.on_expense_deleted("e1")
        assert policy_service.facts == set()

    async def test_failed_expense_delete_records_expense_id(
        self, synchronizer, policy_service, failure_log
    ):
        policy_service.available = False

        await synchronizer.on_expense_deleted("e1")

        recorded: SyncFailure = failure_log.record.call_args.args[0]
        assert recorded.operation == "expense_deleted"
        assert recorded.expense_id == "e1"
        assert recorded.trip_id is None
