"""Policy sync failure database model.

Immutable apart from ``resolved_at``. No foreign keys: a failure about a
deleted trip must outlive the trip so its facts can still be cleaned up.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from trip_authz.infrastructure.persistence.base import BaseModel


class PolicySyncFailure(BaseModel):
    """Recorded fact-sync failure awaiting reconciliation.

    Indexes:
        - idx_policy_sync_failures_pending: (resolved_at, created_at) - oldest pending first
    """

    __tablename__ = "policy_sync_failures"

    operation: Mapped[str] = mapped_column(String(64), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    trip_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    user_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    expense_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        Index("idx_policy_sync_failures_pending", "resolved_at", "created_at"),
    )
