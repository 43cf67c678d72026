"""Database access for todos."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.todo import Todo
from repositories.utils import flush
from services.exceptions import NotFoundError


async def get_todos_by_user_id(db: AsyncSession, user_id: UUID) -> list[Todo]:
    """Get all todos owned by a user, oldest first."""
    result = await db.execute(
        select(Todo)
        .where(Todo.user_id == user_id)
        .order_by(Todo.created_at, Todo.id),
    )
    return list(result.scalars().all())


async def get_todo_by_id(db: AsyncSession, todo_id: UUID) -> Todo:
    """
    Get a todo by ID regardless of owner. Ownership is checked by the service.

    Raises:
        NotFoundError: If no todo has this ID.
    """
    todo = await db.get(Todo, todo_id)
    if todo is None:
        raise NotFoundError("Todo")
    return todo


async def create_todo(db: AsyncSession, todo: Todo) -> Todo:
    """Insert a todo. Does not commit."""
    db.add(todo)
    await flush(db)
    return todo


async def update_todo(db: AsyncSession, todo: Todo) -> Todo:
    """Persist changes made to a loaded todo. Does not commit."""
    await flush(db)
    return todo


async def delete_todo(db: AsyncSession, todo: Todo) -> None:
    """Delete a todo. Does not commit."""
    await db.delete(todo)
    await flush(db)
