"""Container module - centralized dependency injection.

- infrastructure: logger, database, store transactions, policy client
- authorization: role directory, evaluators, gateway, synchronizer, services

Usage:
    from trip_authz.core.container import get_authorization_gateway, get_logger
"""

from trip_authz.core.container.authorization import (
    get_authorization_gateway,
    get_fact_reconciler,
    get_fact_synchronizer,
    get_participant_service,
    get_permission_evaluator,
    get_role_directory,
    get_role_permission_table,
)
from trip_authz.core.container.infrastructure import (
    get_database,
    get_logger,
    get_policy_client,
    get_store_transaction_factory,
    get_sync_failure_log,
)

__all__ = [
    "get_authorization_gateway",
    "get_database",
    "get_fact_reconciler",
    "get_fact_synchronizer",
    "get_logger",
    "get_participant_service",
    "get_permission_evaluator",
    "get_policy_client",
    "get_role_directory",
    "get_role_permission_table",
    "get_store_transaction_factory",
    "get_sync_failure_log",
]
