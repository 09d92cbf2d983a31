"""User database model.

Users are owned by the identity layer; this table only exists so role
assignments can reference them.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from trip_authz.infrastructure.persistence.base import BaseModel


class User(BaseModel):
    """Registered user.

    Fields:
        id: String primary key (from BaseModel)
        created_at: Registration timestamp (from BaseModel)
        display_name: Name shown in participant lists
    """

    __tablename__ = "users"

    display_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
    )
