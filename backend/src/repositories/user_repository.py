"""Database access for users and their role associations."""
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.role import Role, role_users
from models.user import User
from repositories.utils import flush
from services.exceptions import NotFoundError


async def get_users(db: AsyncSession) -> list[User]:
    """Get all users, oldest first."""
    result = await db.execute(select(User).order_by(User.created_at, User.id))
    return list(result.scalars().all())


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User:
    """
    Get a user by ID, with roles loaded.

    Raises:
        NotFoundError: If no user has this ID.
    """
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User")
    return user


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by email, or None. Login relies on the None to pick the dummy hash."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def create_user(db: AsyncSession, user: User) -> User:
    """
    Insert a user. Does not commit.

    Raises:
        AlreadyExistsError: If the email is already registered.
    """
    db.add(user)
    await flush(db)
    return user


async def update_user(db: AsyncSession, user: User) -> User:
    """
    Persist changes made to a loaded user. Does not commit.

    Raises:
        AlreadyExistsError: If the new email is already registered.
    """
    await flush(db)
    return user


async def delete_user(db: AsyncSession, user: User) -> None:
    """Delete a user; role associations and todos go with it (ON DELETE CASCADE)."""
    await db.delete(user)
    await flush(db)


async def add_roles(db: AsyncSession, user: User, roles: list[Role]) -> None:
    """Attach roles to a user in one flush. Roles already attached are skipped."""
    attached = {role.id for role in user.roles}
    for role in roles:
        if role.id not in attached:
            user.roles.append(role)
            attached.add(role.id)
    await flush(db)


async def remove_roles(db: AsyncSession, user: User, roles: list[Role]) -> None:
    """Detach roles from a user in one flush. Roles not attached are ignored."""
    detach = {role.id for role in roles}
    user.roles = [role for role in user.roles if role.id not in detach]
    await flush(db)


async def get_auth_level(db: AsyncSession, user_id: UUID) -> int:
    """Return the highest auth_level across the user's roles, or 0 with no roles."""
    result = await db.execute(
        select(func.coalesce(func.max(Role.auth_level), 0))
        .select_from(role_users)
        .join(Role, Role.id == role_users.c.role_id)
        .where(role_users.c.user_id == user_id),
    )
    return int(result.scalar_one())
