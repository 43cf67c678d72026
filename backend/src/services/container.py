"""Wiring of the services from explicit configuration, done once at startup."""
from dataclasses import dataclass

from core.cache import Cache
from core.config import Settings
from core.security import TokenService
from db.store import Store
from services.role_service import RoleService
from services.todo_service import TodoService
from services.user_service import UserService


@dataclass
class ServiceContainer:
    """Stateless services shared by all requests, plus the backends they hold."""

    store: Store
    cache: Cache
    token_service: TokenService
    users: UserService
    roles: RoleService
    todos: TodoService


def build_container(settings: Settings, store: Store, cache: Cache) -> ServiceContainer:
    """Construct every service with the given store, cache and settings."""
    token_service = TokenService(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_hours=settings.access_token_expire_hours,
    )
    ttl = settings.cache_ttl_seconds
    return ServiceContainer(
        store=store,
        cache=cache,
        token_service=token_service,
        users=UserService(store, cache, token_service, cache_ttl=ttl),
        roles=RoleService(store, cache, cache_ttl=ttl),
        todos=TodoService(store, cache, cache_ttl=ttl),
    )
