"""Authorization dependency factories.

Wires the role directory, the active permission evaluator, the fact
synchronizer/reconciler and the authorization gateway. All app-scoped:
each holds only app-scoped collaborators and opens its own store
transactions per call.

Strategy selection happens once here from ``settings.authorization_strategy``.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from trip_authz.core.config import settings
from trip_authz.core.container.infrastructure import (
    get_logger,
    get_policy_client,
    get_store_transaction_factory,
    get_sync_failure_log,
)
from trip_authz.domain.enums import AuthorizationStrategy

if TYPE_CHECKING:
    from trip_authz.application.services import (
        AuthorizationGateway,
        FactReconciler,
        FactSynchronizer,
        ParticipantService,
        RoleDirectory,
    )
    from trip_authz.domain.protocols import PermissionEvaluatorProtocol
    from trip_authz.infrastructure.authorization import CasbinRolePermissionTable


@lru_cache()
def get_role_directory() -> "RoleDirectory":
    """Get the process-wide role directory (loads roles on first use)."""
    from trip_authz.application.services import RoleDirectory

    open_transaction = get_store_transaction_factory()

    async def load_roles():
        async with open_transaction() as tx:
            return await tx.roles.list_all()

    return RoleDirectory(loader=load_roles, logger=get_logger())


@lru_cache()
def get_role_permission_table() -> "CasbinRolePermissionTable":
    """Get the casbin role → permission table."""
    from trip_authz.infrastructure.authorization import CasbinRolePermissionTable

    return CasbinRolePermissionTable.from_default_policy(logger=get_logger())


@lru_cache()
def get_permission_evaluator() -> "PermissionEvaluatorProtocol":
    """Get the evaluator for the configured strategy.

    Returns:
        LocalRoleEvaluator for ``local``, RemotePolicyEvaluator for ``remote``.
    """
    from trip_authz.application.services import (
        LocalRoleEvaluator,
        RemotePolicyEvaluator,
    )

    if settings.authorization_strategy is AuthorizationStrategy.REMOTE:
        return RemotePolicyEvaluator(client=get_policy_client(), logger=get_logger())

    return LocalRoleEvaluator(
        store=get_store_transaction_factory(),
        role_directory=get_role_directory(),
        role_table=get_role_permission_table(),
        default_organization_id=settings.default_organization_id,
        logger=get_logger(),
    )


@lru_cache()
def get_authorization_gateway() -> "AuthorizationGateway":
    """Get the authorization gateway with the standard resolver registry."""
    from trip_authz.application.services import (
        AuthorizationGateway,
        default_resolvers,
    )

    return AuthorizationGateway(
        evaluator=get_permission_evaluator(),
        resolvers=default_resolvers(settings.default_organization_id),
        logger=get_logger(),
    )


@lru_cache()
def get_fact_synchronizer() -> "FactSynchronizer":
    """Get the post-commit policy fact synchronizer."""
    from trip_authz.application.services import FactSynchronizer

    return FactSynchronizer(
        client=get_policy_client(),
        role_directory=get_role_directory(),
        failure_log=get_sync_failure_log(),
        logger=get_logger(),
    )


@lru_cache()
def get_fact_reconciler() -> "FactReconciler":
    """Get the fact reconciler."""
    from trip_authz.application.services import FactReconciler

    return FactReconciler(
        store=get_store_transaction_factory(),
        client=get_policy_client(),
        role_directory=get_role_directory(),
        failure_log=get_sync_failure_log(),
        default_organization_id=settings.default_organization_id,
        batch_size=settings.reconcile_batch_size,
        logger=get_logger(),
    )


@lru_cache()
def get_participant_service() -> "ParticipantService":
    """Get the participant service."""
    from trip_authz.application.services import ParticipantService

    return ParticipantService(
        store=get_store_transaction_factory(),
        synchronizer=get_fact_synchronizer(),
        role_directory=get_role_directory(),
        logger=get_logger(),
    )
