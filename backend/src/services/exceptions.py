"""Shared exceptions for service layer operations."""


class NotFoundError(Exception):
    """
    Raised when an entity does not exist.

    Todo lookups also raise this when the todo belongs to another user, so callers
    cannot distinguish "not yours" from "does not exist".
    """

    def __init__(self, entity_name: str) -> None:
        self.entity_name = entity_name
        super().__init__(f"{entity_name} not found")


class AlreadyExistsError(Exception):
    """Raised when a write violates a uniqueness constraint (e.g., duplicate email)."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} already exists")


class InvalidCredentialsError(Exception):
    """
    Raised on any failed login.

    The message is identical for unknown emails and wrong passwords.
    """

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class InvalidActionError(Exception):
    """Raised when a role change item has an action other than 'add' or 'remove'."""

    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__("Invalid action")


class CacheCorruptedError(Exception):
    """Raised when a cached payload cannot be deserialized into the expected shape."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Cached value for '{key}' is corrupted")
