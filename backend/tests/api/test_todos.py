"""Tests for the todo endpoints."""
from unittest.mock import AsyncMock

from httpx import AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from core.redis import RedisCache
from services.container import ServiceContainer
from services.user_service import UserService
from tests.api.conftest import FAKE_UUID, register_and_login


async def _create(client: AsyncClient, headers: dict[str, str], **fields: object) -> dict:
    payload = {"title": "Buy milk", **fields}
    response = await client.post("/v1/todos/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_todo(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    """Creating a todo returns it with defaults filled in."""
    todo = await _create(client, auth_headers)

    assert todo["title"] == "Buy milk"
    assert todo["description"] == ""
    assert todo["is_completed"] is False
    assert "user_id" in todo


async def test_create_todo_blank_title_is_422(
    client: AsyncClient, auth_headers: dict[str, str],
) -> None:
    """A whitespace-only title is rejected."""
    response = await client.post("/v1/todos/", json={"title": "   "}, headers=auth_headers)
    assert response.status_code == 422


async def test_list_todos_only_own(
    client: AsyncClient,
    auth_headers: dict[str, str],
    other_auth_headers: dict[str, str],
) -> None:
    """Each user lists only their own todos."""
    await _create(client, auth_headers, title="alice's")
    await _create(client, other_auth_headers, title="bob's")

    response = await client.get("/v1/todos/", headers=auth_headers)

    assert response.status_code == 200
    assert [t["title"] for t in response.json()] == ["alice's"]


async def test_list_todos_reflects_create_after_cached_read(
    client: AsyncClient, auth_headers: dict[str, str],
) -> None:
    """A cached list is refreshed after a create."""
    await _create(client, auth_headers, title="first")
    await client.get("/v1/todos/", headers=auth_headers)

    await _create(client, auth_headers, title="second")
    response = await client.get("/v1/todos/", headers=auth_headers)

    assert [t["title"] for t in response.json()] == ["first", "second"]


async def test_get_todo(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    """The owner can fetch a todo by ID."""
    todo = await _create(client, auth_headers)

    response = await client.get(f"/v1/todos/{todo['id']}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["id"] == todo["id"]


async def test_get_other_users_todo_is_404(
    client: AsyncClient,
    auth_headers: dict[str, str],
    other_auth_headers: dict[str, str],
) -> None:
    """Another user's todo looks exactly like a missing one."""
    todo = await _create(client, auth_headers)

    foreign = await client.get(f"/v1/todos/{todo['id']}", headers=other_auth_headers)
    missing = await client.get(f"/v1/todos/{FAKE_UUID}", headers=other_auth_headers)

    assert foreign.status_code == 404
    assert missing.status_code == 404
    assert foreign.json() == missing.json() == {"detail": "Todo not found"}


async def test_update_todo(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    """A partial update changes only the supplied fields."""
    todo = await _create(client, auth_headers, description="2 litres")

    response = await client.patch(
        f"/v1/todos/{todo['id']}", json={"is_completed": True}, headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["is_completed"] is True
    assert response.json()["description"] == "2 litres"


async def test_update_other_users_todo_is_404(
    client: AsyncClient,
    auth_headers: dict[str, str],
    other_auth_headers: dict[str, str],
) -> None:
    """Another user cannot update the todo, and it stays unchanged."""
    todo = await _create(client, auth_headers)

    response = await client.patch(
        f"/v1/todos/{todo['id']}", json={"title": "hijacked"}, headers=other_auth_headers,
    )

    assert response.status_code == 404
    unchanged = await client.get(f"/v1/todos/{todo['id']}", headers=auth_headers)
    assert unchanged.json()["title"] == "Buy milk"


async def test_delete_todo(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    """A deleted todo is gone."""
    todo = await _create(client, auth_headers)
    await client.get(f"/v1/todos/{todo['id']}", headers=auth_headers)

    response = await client.delete(f"/v1/todos/{todo['id']}", headers=auth_headers)

    assert response.status_code == 204
    response = await client.get(f"/v1/todos/{todo['id']}", headers=auth_headers)
    assert response.status_code == 404


async def test_delete_other_users_todo_is_404(
    client: AsyncClient,
    auth_headers: dict[str, str],
    other_auth_headers: dict[str, str],
) -> None:
    """Another user cannot delete the todo."""
    todo = await _create(client, auth_headers)

    response = await client.delete(f"/v1/todos/{todo['id']}", headers=other_auth_headers)

    assert response.status_code == 404
    assert (await client.get(f"/v1/todos/{todo['id']}", headers=auth_headers)).status_code == 200


async def test_cache_failure_is_opaque_500(
    client: AsyncClient,
    auth_headers: dict[str, str],
    container: ServiceContainer,
) -> None:
    """A failing cache write surfaces as a generic 500 with no backend details."""
    broken = AsyncMock()
    broken.get.return_value = None
    broken.set.side_effect = RedisConnectionError("redis://secret-host:6379 refused")
    container.todos._cache = RedisCache(broken)

    response = await client.get("/v1/todos/", headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


async def test_create_todo_for_deleted_user_is_404(
    client: AsyncClient, user_service: UserService,
) -> None:
    """A token that outlives its user cannot create todos."""
    user_id, headers = await register_and_login(client, "gone@example.com", "gone")
    await user_service.delete_user(user_id)

    response = await client.post("/v1/todos/", json={"title": "x"}, headers=headers)

    assert response.status_code == 404
    assert response.json() == {"detail": "User not found"}
