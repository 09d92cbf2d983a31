"""Database models for the persistence layer.

Importing this package registers every table with ``BaseModel.metadata``.

Note:
    Domain entities (dataclasses) live in trip_authz/domain/entities/ and are
    mapped to these models by the repositories.
"""

from trip_authz.infrastructure.persistence.models.role import Role, TripRole
from trip_authz.infrastructure.persistence.models.sync_failure import (
    PolicySyncFailure,
)
from trip_authz.infrastructure.persistence.models.trip import Expense, Trip
from trip_authz.infrastructure.persistence.models.user import User

__all__ = [
    "Expense",
    "PolicySyncFailure",
    "Role",
    "Trip",
    "TripRole",
    "User",
]
