"""SQLAlchemy models."""
from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.role import Role, role_users  # Must be before user due to import
from models.todo import Todo
from models.user import User

__all__ = [
    "Base",
    "Role",
    "TimestampMixin",
    "Todo",
    "UUIDv7Mixin",
    "User",
    "role_users",
]
