"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols without inheritance.

Usage:
    from trip_authz.domain.protocols import PolicyClientProtocol, RoleAssignmentStore
"""

from trip_authz.domain.protocols.logger_protocol import LoggerProtocol
from trip_authz.domain.protocols.permission_evaluator_protocol import (
    PermissionEvaluatorProtocol,
)
from trip_authz.domain.protocols.policy_client_protocol import (
    BatchBuilder,
    PolicyClientProtocol,
)
from trip_authz.domain.protocols.role_assignment_store import (
    RoleAssignmentStore,
    RoleRepository,
    StoreTransaction,
    StoreTransactionFactory,
    TripScopeRepository,
)
from trip_authz.domain.protocols.sync_failure_log import SyncFailureLog

__all__ = [
    "BatchBuilder",
    "LoggerProtocol",
    "PermissionEvaluatorProtocol",
    "PolicyClientProtocol",
    "RoleAssignmentStore",
    "RoleRepository",
    "StoreTransaction",
    "StoreTransactionFactory",
    "SyncFailureLog",
    "TripScopeRepository",
]
