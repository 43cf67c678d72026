"""Database access for roles."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.role import Role
from repositories.utils import flush
from services.exceptions import NotFoundError


async def get_roles(db: AsyncSession) -> list[Role]:
    """Get all roles, oldest first."""
    result = await db.execute(select(Role).order_by(Role.created_at, Role.id))
    return list(result.scalars().all())


async def get_role_by_id(db: AsyncSession, role_id: UUID) -> Role:
    """
    Get a role by ID.

    Raises:
        NotFoundError: If no role has this ID.
    """
    role = await db.get(Role, role_id)
    if role is None:
        raise NotFoundError("Role")
    return role


async def create_role(db: AsyncSession, role: Role) -> Role:
    """Insert a role. Does not commit."""
    db.add(role)
    await flush(db)
    return role


async def update_role(db: AsyncSession, role: Role) -> Role:
    """Persist changes made to a loaded role. Does not commit."""
    await flush(db)
    return role


async def delete_role(db: AsyncSession, role: Role) -> None:
    """Delete a role; its user associations are removed by ON DELETE CASCADE."""
    await db.delete(role)
    await flush(db)
