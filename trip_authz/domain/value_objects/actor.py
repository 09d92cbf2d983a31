"""Actor and authorization request value objects.

The session/identity layer is an external collaborator; it hands this
subsystem an opaque Actor (or None when the request is unauthenticated).
"""

from collections.abc import Mapping
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Actor:
    """Authenticated caller.

    Attributes:
        user_id: Opaque user identifier.
        session_id: Session the request arrived on, when known.
    """

    user_id: str
    session_id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationRequest:
    """Everything the gateway needs to decide one protected operation.

    Attributes:
        actor: Authenticated caller, or None.
        resource_type: Requested resource type name ("Trip", "Expense", ...).
        action: Requested action name ("participants.manage", ...).
        path_params: Route parameters the resource id is resolved from.
    """

    actor: Actor | None
    resource_type: str
    action: str
    path_params: Mapping[str, str] = field(default_factory=dict)
