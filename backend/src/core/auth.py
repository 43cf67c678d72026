"""Authentication and authorization dependencies for bearer access tokens."""
import logging
from collections.abc import Awaitable, Callable
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.security import InvalidTokenError
from services.container import ServiceContainer

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)

# Minimum auth level for the /admin routes
ADMIN_AUTH_LEVEL = 2


def get_container(request: Request) -> ServiceContainer:
    """Return the service container built during application startup."""
    return request.app.state.services


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    container: ServiceContainer = Depends(get_container),
) -> UUID:
    """
    Resolve the caller's user ID from the bearer token.

    Raises:
        HTTPException: 401 if the token is missing, badly signed, or expired.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = container.token_service.validate_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.info("Token rejected: %s", e.reason)
        detail = "Token has expired" if e.reason == "expired" else "Invalid token"
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claims.user_id


def require_auth_level(level: int) -> Callable[..., Awaitable[UUID]]:
    """
    Build a dependency that admits callers whose highest role level is at least `level`.

    The level is read from the database on every request, so role changes take
    effect immediately.
    """

    async def dependency(
        user_id: UUID = Depends(get_current_user_id),
        container: ServiceContainer = Depends(get_container),
    ) -> UUID:
        user_level = await container.users.get_auth_level(user_id)
        if user_level < level:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permission",
            )
        return user_id

    return dependency
