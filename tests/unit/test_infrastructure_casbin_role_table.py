"""Tests for the casbin-backed role/permission table."""

from unittest.mock import MagicMock

import pytest

from trip_authz.domain.enums import PERMISSIONS, ResourceType
from trip_authz.infrastructure.authorization import CasbinRolePermissionTable

pytestmark = pytest.mark.unit

ROLES = ("organizer", "participant", "viewer", "member")

# Expected grants per (resource type, action)
GRANTS = {
    (ResourceType.TRIP, "view"): {"organizer", "participant", "viewer"},
    (ResourceType.TRIP, "participants.list"): {"organizer", "participant", "viewer"},
    (ResourceType.TRIP, "expense.list"): {"organizer", "participant", "viewer"},
    (ResourceType.TRIP, "manage"): {"organizer"},
    (ResourceType.TRIP, "participants.manage"): {"organizer"},
    (ResourceType.TRIP, "expense.create"): {"organizer", "participant"},
    (ResourceType.EXPENSE, "view"): {"organizer", "participant", "viewer"},
    (ResourceType.EXPENSE, "manage"): {"organizer", "participant"},
    (ResourceType.ORGANIZATION, "trip.create"): {"member"},
    (ResourceType.ORGANIZATION, "trip.list"): {"member"},
}


class TestRolePolicy:
    """The packaged policy matches the documented role table."""

    @pytest.mark.parametrize(("key", "roles"), GRANTS.items())
    def test_granting_roles(self, role_table, key, roles):
        resource_type, action = key

        granting = {
            role for role in ROLES if role_table.allows(role, resource_type, action)
        }

        assert granting == roles

    def test_every_declared_action_is_covered(self):
        declared = {
            (resource_type, action)
            for resource_type, actions in PERMISSIONS.items()
            for action in actions
        }

        assert declared == set(GRANTS)

    @pytest.mark.parametrize(
        ("role", "resource_type", "action", "expected"),
        [
            ("organizer", ResourceType.TRIP, "participants.manage", True),
            ("viewer", ResourceType.TRIP, "participants.manage", False),
            ("participant", ResourceType.EXPENSE, "manage", True),
            ("member", ResourceType.TRIP, "view", False),
            ("admin", ResourceType.TRIP, "view", False),
        ],
    )
    def test_allows(self, role_table, role, resource_type, action, expected):
        assert role_table.allows(role, resource_type, action) is expected


class TestFailClosed:
    """Enforcer errors deny."""

    def test_enforcer_error_denies_and_logs(self, mock_logger):
        enforcer = MagicMock()
        enforcer.enforce.side_effect = RuntimeError("corrupt policy")
        table = CasbinRolePermissionTable(enforcer, mock_logger)

        assert table.allows("organizer", ResourceType.TRIP, "view") is False
        assert mock_logger.error.call_args.args[0] == "role_permission_check_error"
