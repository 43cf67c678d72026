"""Service layer for users: CRUD, login and role changes."""
import asyncio
import logging
from uuid import UUID

from pydantic import TypeAdapter

from core.cache import Cache
from core.security import DUMMY_PASSWORD_HASH, TokenService, hash_password, verify_password
from db.store import Store
from models.role import Role
from models.user import User
from repositories import role_repository, user_repository
from schemas.user import ChangeRoleItem, LoginRequest, UserCreate, UserResponse, UserUpdate
from services.base_entity_service import CachedEntityService, collection_key
from services.exceptions import InvalidActionError, InvalidCredentialsError
from services.todo_service import TodoService

logger = logging.getLogger(__name__)

_user_adapter = TypeAdapter(UserResponse)
_user_list_adapter = TypeAdapter(list[UserResponse])


class UserService(CachedEntityService):
    """User accounts, authentication and role assignment."""

    cache_prefix = "users"

    def __init__(
        self,
        store: Store,
        cache: Cache,
        token_service: TokenService,
        cache_ttl: int = CachedEntityService.CACHE_TTL,
    ) -> None:
        super().__init__(store, cache, cache_ttl)
        self._token_service = token_service

    async def get_users(self) -> list[UserResponse]:
        """Get all users, from cache when possible."""

        async def load() -> list[UserResponse]:
            async with self._store.session() as db:
                users = await user_repository.get_users(db)
                return [UserResponse.model_validate(u) for u in users]

        return await self._read_through(self._all_key(), _user_list_adapter, load)

    async def get_user_by_id(self, user_id: UUID) -> UserResponse:
        """
        Get a user by ID, from cache when possible.

        Raises:
            NotFoundError: If the user does not exist.
        """

        async def load() -> UserResponse:
            async with self._store.session() as db:
                user = await user_repository.get_user_by_id(db, user_id)
                return UserResponse.model_validate(user)

        return await self._read_through(self._key(user_id), _user_adapter, load)

    async def create_user(self, data: UserCreate) -> UserResponse:
        """
        Create a user with a hashed password (registration and admin create).

        Raises:
            AlreadyExistsError: If the email is already registered.
        """
        password_hash = await asyncio.to_thread(hash_password, data.password)
        async with self._store.session() as db:
            user = await user_repository.create_user(
                db,
                User(username=data.username, email=data.email, password=password_hash),
            )
            result = UserResponse.model_validate(user)

        await self._invalidate(self._all_key())
        return result

    async def update_user(self, user_id: UUID, data: UserUpdate) -> UserResponse:
        """
        Update the supplied fields of a user. A new password is re-hashed.

        Raises:
            NotFoundError: If the user does not exist.
            AlreadyExistsError: If the new email is already registered.
        """
        changes = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        if "password" in changes:
            changes["password"] = await asyncio.to_thread(hash_password, changes["password"])

        async with self._store.session() as db:
            user = await user_repository.get_user_by_id(db, user_id)
            for field, value in changes.items():
                setattr(user, field, value)
            await user_repository.update_user(db, user)
            result = UserResponse.model_validate(user)

        await self._invalidate(self._key(user_id), self._all_key())
        return result

    async def delete_user(self, user_id: UUID) -> None:
        """
        Delete a user together with their role assignments and todos.

        Raises:
            NotFoundError: If the user does not exist.
        """
        async with self._store.session() as db:
            user = await user_repository.get_user_by_id(db, user_id)
            await user_repository.delete_user(db, user)

        # The user's todos were removed by cascade, so their owner-scoped list goes too
        await self._invalidate(
            self._key(user_id),
            self._all_key(),
            collection_key(TodoService.cache_prefix, user_id),
        )

    async def login(self, data: LoginRequest) -> str:
        """
        Verify credentials and issue an access token.

        A bcrypt comparison always runs: unknown emails are checked against a dummy
        hash so response time does not reveal whether the account exists.

        Raises:
            InvalidCredentialsError: For an unknown email or a wrong password alike.
        """
        async with self._store.session() as db:
            user = await user_repository.get_user_by_email(db, data.email)

        password_hash = user.password if user is not None else DUMMY_PASSWORD_HASH
        verified = await asyncio.to_thread(verify_password, data.password, password_hash)
        if not verified or user is None:
            logger.info("login_failed")
            raise InvalidCredentialsError()

        logger.info("login_succeeded user_id=%s", user.id)
        return self._token_service.generate_access_token(user.id, user.username)

    async def change_role(self, user_id: UUID, items: list[ChangeRoleItem]) -> None:
        """
        Attach and detach roles for a user in a single transaction.

        Every referenced role is loaded before anything is written. Any missing user,
        missing role or unknown action rolls the whole change back.

        No cache keys are invalidated: cached user payloads do not carry roles, and
        the authorization level is always read from the database.

        Raises:
            NotFoundError: If the user or any referenced role does not exist.
            InvalidActionError: If an item's action is not "add" or "remove".
        """
        async with self._store.transaction() as db:
            user = await user_repository.get_user_by_id(db, user_id)

            to_add: list[Role] = []
            to_remove: list[Role] = []
            for item in items:
                role = await role_repository.get_role_by_id(db, item.id)
                if item.action == "add":
                    to_add.append(role)
                elif item.action == "remove":
                    to_remove.append(role)
                else:
                    raise InvalidActionError(item.action)

            if to_add:
                await user_repository.add_roles(db, user, to_add)
            if to_remove:
                await user_repository.remove_roles(db, user, to_remove)

        logger.info(
            "roles_changed user_id=%s added=%s removed=%s",
            user_id,
            len(to_add),
            len(to_remove),
        )

    async def get_auth_level(self, user_id: UUID) -> int:
        """Return the user's effective authorization level (uncached)."""
        async with self._store.session() as db:
            return await user_repository.get_auth_level(db, user_id)
