"""Role model and the user/role association table."""
from sqlalchemy import Column, ForeignKey, Index, Integer, String, Table, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin, UUIDv7Mixin


# Junction table for many-to-many relationship between users and roles
role_users = Table(
    "role_users",
    Base.metadata,
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        Uuid,
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    # Index for lookups by role (composite PK already indexes user_id first)
    Index("ix_role_users_role_id", "role_id"),
)


class Role(Base, UUIDv7Mixin, TimestampMixin):
    """
    Authorization level record.

    Higher auth_level means more privileged. A user's effective level is the maximum
    auth_level across the roles attached to them.
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    auth_level: Mapped[int] = mapped_column(Integer, nullable=False)
