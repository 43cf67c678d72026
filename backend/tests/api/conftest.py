"""Shared fixtures for API tests."""
from uuid import UUID

import pytest
from httpx import AsyncClient

from services.role_service import RoleService
from services.user_service import UserService
from tests.conftest import TEST_PASSWORD, grant_level

# Constant for non-existent entity ID
FAKE_UUID = "00000000-0000-0000-0000-000000000000"


async def register_and_login(
    client: AsyncClient,
    email: str,
    username: str,
    password: str = TEST_PASSWORD,
) -> tuple[UUID, dict[str, str]]:
    """Register an account over HTTP and return its ID and bearer headers."""
    response = await client.post(
        "/v1/register",
        json={"email": email, "username": username, "password": password},
    )
    assert response.status_code == 201, response.text
    user_id = UUID(response.json()["id"])

    response = await client.post("/v1/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    token = response.json()["access_token"]
    return user_id, {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Bearer headers for an ordinary user with no roles."""
    _, headers = await register_and_login(client, "alice@example.com", "alice")
    return headers


@pytest.fixture
async def other_auth_headers(client: AsyncClient) -> dict[str, str]:
    """Bearer headers for a second ordinary user."""
    _, headers = await register_and_login(client, "bob@example.com", "bob")
    return headers


@pytest.fixture
async def admin_headers(
    client: AsyncClient,
    user_service: UserService,
    role_service: RoleService,
) -> dict[str, str]:
    """Bearer headers for a user holding an auth level 2 role."""
    user_id, headers = await register_and_login(client, "editor@example.com", "editor")
    await grant_level(user_service, role_service, user_id, 2)
    return headers
