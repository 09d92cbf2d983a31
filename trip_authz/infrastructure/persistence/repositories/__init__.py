"""Repository implementations.

Each repository maps SQLAlchemy models to domain entities and implements
the matching protocol from trip_authz.domain.protocols.
"""

from trip_authz.infrastructure.persistence.repositories.role_assignment_store import (
    RoleAssignmentStore,
)
from trip_authz.infrastructure.persistence.repositories.role_repository import (
    RoleRepository,
)
from trip_authz.infrastructure.persistence.repositories.sync_failure_repository import (
    SyncFailureRepository,
)
from trip_authz.infrastructure.persistence.repositories.trip_scope_repository import (
    TripScopeRepository,
)

__all__ = [
    "RoleAssignmentStore",
    "RoleRepository",
    "SyncFailureRepository",
    "TripScopeRepository",
]
