"""Casbin-backed role/permission table.

The local evaluation strategy answers "does role R grant action A on
resource type T" from a static casbin policy (``role_policy.csv``) under a
plain ACL model (``model.conf``). Role membership itself lives in
trip_roles; casbin only holds the role → permission mapping.

Following hexagonal architecture:
- Application code depends on the ``allows`` call shape, not on casbin
- Enforcer errors fail closed (deny)

Usage:
    table = CasbinRolePermissionTable.from_default_policy(logger=logger)
    table.allows("organizer", ResourceType.TRIP, "participants.manage")  # True
"""

from pathlib import Path

import casbin

from trip_authz.domain.enums import ResourceType
from trip_authz.domain.protocols import LoggerProtocol

_POLICY_DIR = Path(__file__).parent
MODEL_PATH = _POLICY_DIR / "model.conf"
POLICY_PATH = _POLICY_DIR / "role_policy.csv"


class CasbinRolePermissionTable:
    """Role → permission lookups over a casbin Enforcer.

    Attributes:
        _enforcer: Casbin enforcer loaded with the role policy.
        _logger: Structured logger.
    """

    def __init__(self, enforcer: casbin.Enforcer, logger: LoggerProtocol) -> None:
        """Initialize table with a loaded enforcer.

        Args:
            enforcer: Casbin enforcer with model and policy loaded.
            logger: Structured logger.
        """
        self._enforcer = enforcer
        self._logger = logger

    @classmethod
    def from_default_policy(
        cls,
        *,
        logger: LoggerProtocol,
        model_path: Path = MODEL_PATH,
        policy_path: Path = POLICY_PATH,
    ) -> "CasbinRolePermissionTable":
        """Build the table from the packaged model and policy files."""
        enforcer = casbin.Enforcer(str(model_path), str(policy_path))
        logger.info(
            "role_permission_table_loaded",
            model_path=str(model_path),
            policy_path=str(policy_path),
        )
        return cls(enforcer, logger)

    def allows(self, role_name: str, resource_type: ResourceType, action: str) -> bool:
        """Check whether a role grants an action on a resource type.

        Args:
            role_name: Role name ("organizer", "member", ...).
            resource_type: Resource type being accessed.
            action: Action name.

        Returns:
            bool: True if granted. False on any enforcer error (fail closed).
        """
        try:
            return bool(self._enforcer.enforce(role_name, resource_type.value, action))
        except Exception as e:
            self._logger.error(
                "role_permission_check_error",
                error=e,
                role=role_name,
                resource_type=resource_type.value,
                action=action,
            )
            return False
