"""Service layer for role operations."""
from uuid import UUID

from pydantic import TypeAdapter

from models.role import Role
from repositories import role_repository
from schemas.role import RoleCreate, RoleResponse, RoleUpdate
from services.base_entity_service import CachedEntityService

_role_adapter = TypeAdapter(RoleResponse)
_role_list_adapter = TypeAdapter(list[RoleResponse])


class RoleService(CachedEntityService):
    """Role CRUD with read-through caching. Callers gate access to admins."""

    cache_prefix = "roles"

    async def get_roles(self) -> list[RoleResponse]:
        """Get all roles, from cache when possible."""

        async def load() -> list[RoleResponse]:
            async with self._store.session() as db:
                roles = await role_repository.get_roles(db)
                return [RoleResponse.model_validate(r) for r in roles]

        return await self._read_through(self._all_key(), _role_list_adapter, load)

    async def get_role_by_id(self, role_id: UUID) -> RoleResponse:
        """
        Get a role by ID, from cache when possible.

        Raises:
            NotFoundError: If the role does not exist.
        """

        async def load() -> RoleResponse:
            async with self._store.session() as db:
                role = await role_repository.get_role_by_id(db, role_id)
                return RoleResponse.model_validate(role)

        return await self._read_through(self._key(role_id), _role_adapter, load)

    async def create_role(self, data: RoleCreate) -> RoleResponse:
        """Create a role and invalidate the role collection."""
        async with self._store.session() as db:
            role = await role_repository.create_role(
                db, Role(name=data.name, auth_level=data.auth_level),
            )
            result = RoleResponse.model_validate(role)

        await self._invalidate(self._all_key())
        return result

    async def update_role(self, role_id: UUID, data: RoleUpdate) -> RoleResponse:
        """
        Update the supplied fields of a role.

        Raises:
            NotFoundError: If the role does not exist.
        """
        async with self._store.session() as db:
            role = await role_repository.get_role_by_id(db, role_id)
            for field, value in data.model_dump(exclude_unset=True).items():
                if value is not None:
                    setattr(role, field, value)
            await role_repository.update_role(db, role)
            result = RoleResponse.model_validate(role)

        await self._invalidate(self._key(role_id), self._all_key())
        return result

    async def delete_role(self, role_id: UUID) -> None:
        """
        Delete a role.

        Raises:
            NotFoundError: If the role does not exist.
        """
        async with self._store.session() as db:
            role = await role_repository.get_role_by_id(db, role_id)
            await role_repository.delete_role(db, role)

        await self._invalidate(self._key(role_id), self._all_key())
