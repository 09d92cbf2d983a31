"""Unit tests for policy fact value objects and FactBatch ordering."""

import pytest

from trip_authz.domain.enums import Decision, ResourceType, is_valid_action
from trip_authz.domain.value_objects import (
    FactBatch,
    FactChangeKind,
    FactPattern,
    PolicyValue,
    expense_trip,
    has_role,
    organization_member,
    trip_organization,
    trip_roles_pattern,
)

pytestmark = pytest.mark.unit


class TestPolicyValue:
    """PolicyValue construction."""

    def test_rejects_empty_id(self):
        with pytest.raises(ValueError):
            PolicyValue("User", "")

    def test_rejects_empty_type(self):
        with pytest.raises(ValueError):
            PolicyValue("", "u1")


class TestFactHelpers:
    """Fact shapes shared with the policy service."""

    def test_has_role_shape(self):
        fact = has_role(user_id="u1", role_name="organizer", trip_id="t1")

        assert fact.predicate == "has_role"
        assert fact.args == (
            PolicyValue("User", "u1"),
            PolicyValue("String", "organizer"),
            PolicyValue("Trip", "t1"),
        )

    def test_trip_roles_pattern_for_one_user_wildcards_role(self):
        pattern = trip_roles_pattern(trip_id="t1", user_id="u1")

        assert pattern.args == (PolicyValue("User", "u1"), None, PolicyValue("Trip", "t1"))

    def test_trip_roles_pattern_without_user_matches_everyone(self):
        pattern = trip_roles_pattern(trip_id="t1")

        assert pattern.args[0] is None
        assert pattern.args[1] is None

    def test_relation_facts(self):
        assert trip_organization(trip_id="t1", organization_id="o1").args[1] == (
            PolicyValue("String", "organization")
        )
        assert expense_trip(expense_id="e1", trip_id="t1").args[0] == PolicyValue(
            "Expense", "e1"
        )
        assert organization_member(user_id="u1", organization_id="o1").args[1] == (
            PolicyValue("String", "member")
        )

    def test_pattern_from_fact_matches_exactly(self):
        fact = has_role(user_id="u1", role_name="viewer", trip_id="t1")

        pattern = FactPattern.from_fact(fact)

        assert (pattern.predicate, pattern.args) == (fact.predicate, fact.args)
        assert None not in pattern.args


class TestFactBatch:
    """Ordering and coalescing of change sets."""

    def test_new_batch_is_empty(self):
        assert FactBatch().is_empty
        assert FactBatch().changes == []

    def test_adjacent_operations_coalesce(self):
        batch = FactBatch()
        p1 = trip_roles_pattern(trip_id="t1")
        p2 = trip_roles_pattern(trip_id="t2")
        f1 = has_role(user_id="u1", role_name="viewer", trip_id="t1")
        p3 = trip_roles_pattern(trip_id="t3")

        batch.delete(p1)
        batch.delete(p2)
        batch.insert(f1)
        batch.delete(p3)

        changes = batch.changes
        assert [c.kind for c in changes] == [
            FactChangeKind.DELETES,
            FactChangeKind.INSERTS,
            FactChangeKind.DELETES,
        ]
        assert changes[0].items == [p1, p2]
        assert changes[1].items == [f1]
        assert changes[2].items == [p3]

    def test_role_change_keeps_delete_before_insert(self):
        batch = FactBatch()
        batch.delete(trip_roles_pattern(trip_id="t1", user_id="u1"))
        batch.insert(has_role(user_id="u1", role_name="organizer", trip_id="t1"))

        assert [c.kind.value for c in batch.changes] == ["deletes", "inserts"]

    def test_delete_of_fact_becomes_exact_pattern(self):
        batch = FactBatch()
        fact = has_role(user_id="u1", role_name="viewer", trip_id="t1")

        batch.delete(fact)

        item = batch.changes[0].items[0]
        assert isinstance(item, FactPattern)
        assert item == FactPattern.from_fact(fact)


class TestPermissionVocabulary:
    """Legal actions per resource type."""

    @pytest.mark.parametrize(
        ("resource_type", "action"),
        [
            (ResourceType.TRIP, "participants.manage"),
            (ResourceType.TRIP, "expense.create"),
            (ResourceType.EXPENSE, "manage"),
            (ResourceType.ORGANIZATION, "trip.create"),
        ],
    )
    def test_declared_actions_are_valid(self, resource_type, action):
        assert is_valid_action(resource_type, action)

    @pytest.mark.parametrize(
        ("resource_type", "action"),
        [
            (ResourceType.TRIP, "fly"),
            (ResourceType.EXPENSE, "participants.manage"),
            (ResourceType.USER, "view"),
        ],
    )
    def test_undeclared_actions_are_invalid(self, resource_type, action):
        assert not is_valid_action(resource_type, action)

    def test_decision_is_allowed(self):
        assert Decision.ALLOW.is_allowed
        assert not Decision.DENY.is_allowed
