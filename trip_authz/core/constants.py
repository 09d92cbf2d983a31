"""Centralized constants for internal implementation details.

Environment-specific settings live in ``trip_authz/core/config.py``.

Categories:
- Timeouts: Default bounds for policy service calls
- Limits: Truncation and safety limits
- Tenancy: Single-tenant defaults
- Policy vocabulary: Predicates and relation names used in facts
"""

# =============================================================================
# Timeouts
# =============================================================================

POLICY_SERVICE_TIMEOUT_DEFAULT: float = 5.0
"""Default timeout in seconds for a policy service call."""

# =============================================================================
# Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum length of a response body kept in error details."""

# =============================================================================
# Tenancy
# =============================================================================

DEFAULT_ORGANIZATION_ID: str = "default"
"""Organization id every resource belongs to in single-tenant deployments."""

ORGANIZATION_MEMBER_ROLE: str = "member"
"""Role every registered user holds on the default organization."""

# =============================================================================
# Policy vocabulary
# =============================================================================

HAS_ROLE: str = "has_role"
"""Fact predicate binding an actor to a role on a resource."""

HAS_RELATION: str = "has_relation"
"""Fact predicate linking two resources (Trip -> Organization, Expense -> Trip)."""

STRING_TYPE: str = "String"
"""Value type used for literal role and relation names in facts."""

USER_TYPE: str = "User"
"""Value type of actors."""

TRIP_RELATION: str = "trip"
"""Relation name from an Expense to its Trip."""

ORGANIZATION_RELATION: str = "organization"
"""Relation name from a Trip to its Organization."""
