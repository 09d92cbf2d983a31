"""Persistence layer: SQLAlchemy models, repositories and session handling."""

from trip_authz.infrastructure.persistence.database import Database

__all__ = ["Database"]
