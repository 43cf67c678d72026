"""Role administration endpoints (auth level 2 and above)."""
from uuid import UUID

from fastapi import APIRouter, Depends

from api.dependencies import get_role_service, require_admin
from schemas.role import RoleCreate, RoleResponse, RoleUpdate
from services.role_service import RoleService

router = APIRouter(
    prefix="/v1/admin/roles",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@router.get("/", response_model=list[RoleResponse])
async def list_roles(roles: RoleService = Depends(get_role_service)) -> list[RoleResponse]:
    """List all roles."""
    return await roles.get_roles()


@router.post("/", response_model=RoleResponse, status_code=201)
async def create_role(
    data: RoleCreate,
    roles: RoleService = Depends(get_role_service),
) -> RoleResponse:
    """Create a role."""
    return await roles.create_role(data)


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: UUID,
    roles: RoleService = Depends(get_role_service),
) -> RoleResponse:
    """Get a single role."""
    return await roles.get_role_by_id(role_id)


@router.patch("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: UUID,
    data: RoleUpdate,
    roles: RoleService = Depends(get_role_service),
) -> RoleResponse:
    """Update the supplied fields of a role."""
    return await roles.update_role(role_id, data)


@router.delete("/{role_id}", status_code=204)
async def delete_role(
    role_id: UUID,
    roles: RoleService = Depends(get_role_service),
) -> None:
    """Delete a role and detach it from every user."""
    await roles.delete_role(role_id)
