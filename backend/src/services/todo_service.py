"""Service layer for todo operations, scoped to the owning user."""
import logging
from uuid import UUID

from pydantic import TypeAdapter

from models.todo import Todo
from repositories import todo_repository, user_repository
from schemas.todo import TodoCreate, TodoResponse, TodoUpdate
from services.base_entity_service import CachedEntityService
from services.exceptions import NotFoundError

logger = logging.getLogger(__name__)

_todo_adapter = TypeAdapter(TodoResponse)
_todo_list_adapter = TypeAdapter(list[TodoResponse])


class TodoService(CachedEntityService):
    """
    Todo CRUD for the authenticated owner.

    Every path compares the caller's ID with the todo's owner. A mismatch is reported
    as NotFoundError, never as a permission error, so other users' todos cannot be
    probed for existence.
    """

    cache_prefix = "todos"

    async def get_todos_by_user_id(self, user_id: UUID) -> list[TodoResponse]:
        """Get all todos owned by a user, from cache when possible."""

        async def load() -> list[TodoResponse]:
            async with self._store.session() as db:
                todos = await todo_repository.get_todos_by_user_id(db, user_id)
                return [TodoResponse.model_validate(t) for t in todos]

        return await self._read_through(self._all_key(user_id), _todo_list_adapter, load)

    async def get_todo_by_id(self, todo_id: UUID, user_id: UUID) -> TodoResponse:
        """
        Get a todo owned by user_id, from cache when possible.

        The cache is keyed by todo ID only, so the owner check runs after every
        lookup, cached or not.

        Raises:
            NotFoundError: If the todo does not exist or belongs to another user.
        """

        async def load() -> TodoResponse:
            async with self._store.session() as db:
                todo = await todo_repository.get_todo_by_id(db, todo_id)
                return TodoResponse.model_validate(todo)

        todo = await self._read_through(self._key(todo_id), _todo_adapter, load)
        if todo.user_id != user_id:
            logger.debug("todo_owner_mismatch todo_id=%s", todo_id)
            raise NotFoundError("Todo")
        return todo

    async def create_todo(self, data: TodoCreate, user_id: UUID) -> TodoResponse:
        """
        Create a todo owned by user_id and invalidate that user's todo list.

        Raises:
            NotFoundError: If the owner no longer exists (e.g., a token outliving its user).
        """
        async with self._store.session() as db:
            await user_repository.get_user_by_id(db, user_id)
            todo = await todo_repository.create_todo(
                db,
                Todo(
                    title=data.title,
                    description=data.description,
                    is_completed=data.is_completed,
                    user_id=user_id,
                ),
            )
            result = TodoResponse.model_validate(todo)

        await self._invalidate(self._all_key(user_id))
        return result

    async def update_todo(
        self,
        todo_id: UUID,
        data: TodoUpdate,
        user_id: UUID,
    ) -> TodoResponse:
        """
        Update the supplied fields of a todo owned by user_id.

        Raises:
            NotFoundError: If the todo does not exist or belongs to another user.
        """
        async with self._store.session() as db:
            todo = await todo_repository.get_todo_by_id(db, todo_id)
            if todo.user_id != user_id:
                raise NotFoundError("Todo")
            for field, value in data.model_dump(exclude_unset=True).items():
                if value is not None:
                    setattr(todo, field, value)
            await todo_repository.update_todo(db, todo)
            result = TodoResponse.model_validate(todo)

        await self._invalidate(self._key(todo_id), self._all_key(user_id))
        return result

    async def delete_todo(self, todo_id: UUID, user_id: UUID) -> None:
        """
        Delete a todo owned by user_id.

        Raises:
            NotFoundError: If the todo does not exist or belongs to another user.
        """
        async with self._store.session() as db:
            todo = await todo_repository.get_todo_by_id(db, todo_id)
            if todo.user_id != user_id:
                raise NotFoundError("Todo")
            await todo_repository.delete_todo(db, todo)

        await self._invalidate(self._key(todo_id), self._all_key(user_id))
