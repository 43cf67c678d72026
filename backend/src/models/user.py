"""User model for registered accounts."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.role import Role, role_users


class User(Base, UUIDv7Mixin, TimestampMixin):
    """User model - identity record with a bcrypt password hash."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash, never serialized",
    )

    # Association rows are removed by the database (ON DELETE CASCADE)
    roles: Mapped[list[Role]] = relationship(
        secondary=role_users,
        lazy="selectin",
        passive_deletes=True,
    )
