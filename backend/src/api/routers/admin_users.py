"""User administration endpoints (auth level 2 and above)."""
from uuid import UUID

from fastapi import APIRouter, Depends

from api.dependencies import get_user_service, require_admin
from schemas.user import ChangeRoleRequest, UserCreate, UserResponse, UserUpdate
from services.user_service import UserService

router = APIRouter(
    prefix="/v1/admin/users",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/", response_model=list[UserResponse])
async def list_users(users: UserService = Depends(get_user_service)) -> list[UserResponse]:
    """List all users."""
    return await users.get_users()


@router.post("/", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create a user."""
    return await users.create_user(data)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Get a single user."""
    return await users.get_user_by_id(user_id)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update the supplied fields of a user."""
    return await users.update_user(user_id, data)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: UUID,
    users: UserService = Depends(get_user_service),
) -> None:
    """Delete a user along with their todos."""
    await users.delete_user(user_id)


@router.patch("/{user_id}/role", status_code=204)
async def change_role(
    user_id: UUID,
    data: ChangeRoleRequest,
    users: UserService = Depends(get_user_service),
) -> None:
    """
    Add and remove roles for a user.

    All items are applied in one transaction: if any role is missing, nothing changes.
    """
    await users.change_role(user_id, data.items)
