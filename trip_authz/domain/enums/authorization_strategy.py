"""Permission evaluation strategies.

Exactly one strategy is active per deployment, selected once from
``Settings.authorization_strategy``. Both produce the same allow/deny
outcomes for equivalent state so deployments can migrate between them.
"""

from enum import Enum


class AuthorizationStrategy(str, Enum):
    """Available permission evaluators."""

    LOCAL = "local"
    """Look up the caller's trip role in the relational store."""

    REMOTE = "remote"
    """Delegate the decision to the remote policy service."""
