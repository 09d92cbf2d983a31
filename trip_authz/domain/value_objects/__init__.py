"""Domain value objects.

Usage:
    from trip_authz.domain.value_objects import Actor, PolicyFact, has_role
"""

from trip_authz.domain.value_objects.actor import Actor, AuthorizationRequest
from trip_authz.domain.value_objects.fact_batch import (
    FactBatch,
    FactChangeKind,
    FactChangeSet,
)
from trip_authz.domain.value_objects.policy_fact import (
    FactPattern,
    PolicyFact,
    PolicyValue,
    expense_relations_pattern,
    expense_trip,
    has_role,
    organization_member,
    resource_value,
    trip_organization,
    trip_expenses_pattern,
    trip_relations_pattern,
    trip_roles_pattern,
    user_value,
)

__all__ = [
    "Actor",
    "AuthorizationRequest",
    "FactBatch",
    "FactChangeKind",
    "FactChangeSet",
    "FactPattern",
    "PolicyFact",
    "PolicyValue",
    "expense_relations_pattern",
    "expense_trip",
    "has_role",
    "organization_member",
    "resource_value",
    "trip_organization",
    "trip_expenses_pattern",
    "trip_relations_pattern",
    "trip_roles_pattern",
    "user_value",
]
