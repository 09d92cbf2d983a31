"""Policy service adapter."""

from trip_authz.infrastructure.policy.policy_client import PolicyClient

__all__ = ["PolicyClient"]
