"""Authorization decision outcome."""

from enum import Enum


class Decision(str, Enum):
    """Outcome of a permission evaluation.

    Deny is a normal outcome, not an error. Evaluators return Deny whenever
    access cannot be affirmatively confirmed (fail-closed).
    """

    ALLOW = "allow"
    DENY = "deny"

    @property
    def is_allowed(self) -> bool:
        """True for ALLOW."""
        return self is Decision.ALLOW
