"""Core enums package.

Usage:
    from trip_authz.core.enums import ErrorCode, Environment
"""

from trip_authz.core.enums.environment import Environment
from trip_authz.core.enums.error_code import ErrorCode

__all__ = ["Environment", "ErrorCode"]
