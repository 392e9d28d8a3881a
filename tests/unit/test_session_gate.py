"""Unit tests for SessionGateMiddleware."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from app.presentation.session_gate import SessionGateMiddleware
from tests.fakes.session_token_service_fake import FakeSessionTokenService

pytestmark = pytest.mark.unit


@pytest.fixture
def token_service() -> FakeSessionTokenService:
    return FakeSessionTokenService()


@pytest.fixture
def app(token_service) -> FastAPI:
    app = FastAPI()
    app.add_middleware(
        SessionGateMiddleware,
        token_service=token_service,
        protected_prefixes=["/api/user", "/api/todo"],
    )

    @app.get("/api/user/me")
    async def me(request: Request):
        return {"account_id": request.state.account_id}

    @app.get("/api/users")
    async def not_protected_lookalike():
        return {"ok": True}

    @app.get("/api/auth/login")
    async def public():
        return {"ok": True}

    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.asyncio
async def test_missing_header_rejected(client):
    response = await client.get("/api/user/me")

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "message": "Missing or invalid authorization header",
        "error": "UNAUTHORIZED",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer   ", "token-without-scheme"])
async def test_non_bearer_header_rejected(client, header):
    response = await client.get("/api/user/me", headers={"Authorization": header})

    assert response.status_code == 401
    assert response.json()["message"] == "Missing or invalid authorization header"


@pytest.mark.asyncio
async def test_malformed_token_rejected(client):
    response = await client.get("/api/user/me", headers={"Authorization": "Bearer malformed"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


@pytest.mark.asyncio
async def test_revoked_token_rejected(client, token_service):
    token = token_service.issue(3)
    token_service.revoke(token)

    response = await client.get("/api/user/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_valid_token_forwards_account_id(client, token_service):
    token = token_service.issue(7)

    response = await client.get("/api/user/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {"account_id": 7}


@pytest.mark.asyncio
async def test_scheme_is_case_insensitive(client, token_service):
    token = token_service.issue(7)

    response = await client.get("/api/user/me", headers={"Authorization": f"bearer {token}"})

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unprotected_paths_pass_through(client):
    assert (await client.get("/api/auth/login")).status_code == 200
    assert (await client.get("/api/users")).status_code == 200


def test_prefix_matching_is_segment_based(token_service):
    gate = SessionGateMiddleware(app=None, token_service=token_service, protected_prefixes=["/api/todo/"])

    assert gate.is_protected("/api/todo")
    assert gate.is_protected("/api/todo/12")
    assert not gate.is_protected("/api/todos")
    assert not gate.is_protected("/api/auth/register")
