"""FastAPI dependencies for injection."""
from fastapi import Depends

from core.auth import (
    ADMIN_AUTH_LEVEL,
    get_container,
    get_current_user_id,
    require_auth_level,
)
from services.container import ServiceContainer
from services.role_service import RoleService
from services.todo_service import TodoService
from services.user_service import UserService

require_admin = require_auth_level(ADMIN_AUTH_LEVEL)


def get_user_service(container: ServiceContainer = Depends(get_container)) -> UserService:
    """Return the shared UserService."""
    return container.users


def get_role_service(container: ServiceContainer = Depends(get_container)) -> RoleService:
    """Return the shared RoleService."""
    return container.roles


def get_todo_service(container: ServiceContainer = Depends(get_container)) -> TodoService:
    """Return the shared TodoService."""
    return container.todos


__all__ = [
    "get_container",
    "get_current_user_id",
    "get_role_service",
    "get_todo_service",
    "get_user_service",
    "require_admin",
]
