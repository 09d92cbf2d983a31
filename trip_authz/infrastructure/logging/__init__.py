"""Logging adapters implementing LoggerProtocol."""

from trip_authz.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
