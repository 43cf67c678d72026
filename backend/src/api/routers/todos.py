"""Todo endpoints for the authenticated user."""
from uuid import UUID

from fastapi import APIRouter, Depends

from api.dependencies import get_current_user_id, get_todo_service
from schemas.todo import TodoCreate, TodoResponse, TodoUpdate
from services.todo_service import TodoService

router = APIRouter(prefix="/v1/todos", tags=["todos"])


@router.get("/", response_model=list[TodoResponse])
async def list_todos(
    current_user_id: UUID = Depends(get_current_user_id),
    todos: TodoService = Depends(get_todo_service),
) -> list[TodoResponse]:
    """List the caller's todos."""
    return await todos.get_todos_by_user_id(current_user_id)


@router.post("/", response_model=TodoResponse, status_code=201)
async def create_todo(
    data: TodoCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    todos: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Create a todo owned by the caller."""
    return await todos.create_todo(data, current_user_id)


@router.get("/{todo_id}", response_model=TodoResponse)
async def get_todo(
    todo_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    todos: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Get one of the caller's todos. Other users' todos return 404."""
    return await todos.get_todo_by_id(todo_id, current_user_id)


@router.patch("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: UUID,
    data: TodoUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    todos: TodoService = Depends(get_todo_service),
) -> TodoResponse:
    """Update the supplied fields of one of the caller's todos."""
    return await todos.update_todo(todo_id, data, current_user_id)


@router.delete("/{todo_id}", status_code=204)
async def delete_todo(
    todo_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    todos: TodoService = Depends(get_todo_service),
) -> None:
    """Delete one of the caller's todos."""
    await todos.delete_todo(todo_id, current_user_id)
