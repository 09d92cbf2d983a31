"""Authorization infrastructure package.

- model.conf: casbin ACL model (role, resource type, action)
- role_policy.csv: role → permission table
- casbin_role_table.py: CasbinRolePermissionTable used by the local evaluator
"""

from trip_authz.infrastructure.authorization.casbin_role_table import (
    CasbinRolePermissionTable,
)

__all__ = ["CasbinRolePermissionTable"]
