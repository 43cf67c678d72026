"""Public account endpoints: registration, login and profile edits."""
from uuid import UUID

from fastapi import APIRouter, Depends

from api.dependencies import get_current_user_id, get_user_service
from schemas.user import LoginRequest, LoginResponse, UserCreate, UserResponse, UserUpdate
from services.user_service import UserService

router = APIRouter(prefix="/v1", tags=["users"])


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    data: UserCreate,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Create an account. Returns 422 if the email is already registered."""
    return await users.create_user(data)


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    users: UserService = Depends(get_user_service),
) -> LoginResponse:
    """Exchange email and password for an access token valid for 24 hours."""
    token = await users.login(data)
    return LoginResponse(access_token=token)


@router.put("/profile", response_model=UserResponse)
async def edit_profile(
    data: UserUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update the caller's own username, email or password."""
    return await users.update_user(current_user_id, data)
