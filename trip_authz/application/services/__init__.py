"""Application services.

Usage:
    from trip_authz.application.services import AuthorizationGateway, FactSynchronizer
"""

from trip_authz.application.services.authorization_gateway import (
    AuthorizationGateway,
    default_resolvers,
)
from trip_authz.application.services.fact_reconciler import (
    FactReconciler,
    ReconcileReport,
)
from trip_authz.application.services.fact_synchronizer import FactSynchronizer
from trip_authz.application.services.participant_service import ParticipantService
from trip_authz.application.services.permission_evaluator import (
    LocalRoleEvaluator,
    RemotePolicyEvaluator,
)
from trip_authz.application.services.role_directory import RoleDirectory

__all__ = [
    "AuthorizationGateway",
    "FactReconciler",
    "FactSynchronizer",
    "LocalRoleEvaluator",
    "ParticipantService",
    "ReconcileReport",
    "RemotePolicyEvaluator",
    "RoleDirectory",
    "default_resolvers",
]
