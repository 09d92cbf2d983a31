"""Permission evaluator protocol.

Two strategies implement it: LocalRoleEvaluator (trip_roles + role table)
and RemotePolicyEvaluator (policy service). Exactly one is active per
deployment, selected by ``Settings.authorization_strategy``.
"""

from typing import Protocol

from trip_authz.core.errors import ValidationError
from trip_authz.core.result import Result
from trip_authz.domain.enums import Decision, ResourceType


class PermissionEvaluatorProtocol(Protocol):
    """Decides whether an actor may perform an action on a resource."""

    async def evaluate(
        self,
        actor_id: str,
        action: str,
        resource_type: ResourceType,
        resource_id: str,
    ) -> Result[Decision, ValidationError]:
        """Evaluate one permission.

        Returns:
            Success(ALLOW | DENY). DENY also covers every infrastructure
            failure (fail-closed). Failure(ValidationError) only for an
            action outside the resource type's vocabulary.
        """
        ...
