"""Tests for the /auth endpoints."""

from uuid import uuid4

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from src.taskboard.core.config import get_settings
from src.taskboard.models import UserType
from tests.conftest import Stores
from tests.factories import DEFAULT_TEST_PASSWORD
from tests.helpers import auth_headers, login, refresh_cookie, register_and_login, seed_user

pytestmark = [pytest.mark.api, pytest.mark.asyncio]


class TestRegister:
    async def test_register_creates_employee(self, client: AsyncClient):
        response = await client.post(
            "/auth/register", json={"email": "  New@Example.com ", "password": "password123"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "new@example.com"
        assert body["user_type"] == UserType.EMPLOYEE.value
        assert "password" not in str(body)

    async def test_duplicate_email_case_insensitive(self, client: AsyncClient):
        payload = {"email": "dup@example.com", "password": "password123"}
        assert (await client.post("/auth/register", json=payload)).status_code == 201

        payload["email"] = "DUP@example.com"
        response = await client.post("/auth/register", json=payload)

        assert response.status_code == 409
        assert response.json()["error"]["type"] == "EMAIL_ALREADY_EXISTS"

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "not-an-email", "password": "password123"},
            {"email": "short@example.com", "password": "short"},
            {"email": "pad@example.com", "password": "  1234567  "},
            {"email": "missing@example.com"},
        ],
    )
    async def test_invalid_payload(self, client: AsyncClient, payload: dict):
        response = await client.post("/auth/register", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["type"] == "BAD_REQUEST"


class TestLogin:
    async def test_login_returns_access_token_and_cookie(
        self, client: AsyncClient, stores: Stores
    ):
        user = seed_user(stores.users)

        response = await client.post(
            "/auth/login", json={"email": user.email, "password": DEFAULT_TEST_PASSWORD}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "Bearer"
        assert body["expires_in"] == 15 * 60
        assert body["user"] == {"id": str(user.id), "email": user.email, "type": user.user_type}
        assert "refresh_token" not in body

        cookie = response.headers["set-cookie"]
        assert cookie.startswith("refresh_token=")
        assert "HttpOnly" in cookie
        assert "Path=/" in cookie
        assert "samesite=lax" in cookie.lower()
        assert len(stores.tokens.active_for(user.id)) == 1

    async def test_email_matched_case_insensitively(self, client: AsyncClient, stores: Stores):
        seed_user(stores.users, email="known@example.com")

        response = await client.post(
            "/auth/login", json={"email": " KNOWN@Example.com", "password": DEFAULT_TEST_PASSWORD}
        )

        assert response.status_code == 200

    @pytest.mark.parametrize(
        "email,password",
        [
            ("nobody@example.com", DEFAULT_TEST_PASSWORD),
            ("known@example.com", "wrong-password"),
            ("known@example.com", "short"),
            ("k@", DEFAULT_TEST_PASSWORD),
            ("", ""),
        ],
    )
    async def test_bad_credentials_look_the_same(
        self, client: AsyncClient, stores: Stores, email: str, password: str
    ):
        seed_user(stores.users, email="known@example.com")

        response = await client.post("/auth/login", json={"email": email, "password": password})

        assert response.status_code == 401
        assert response.json()["error"] == {
            "type": "INVALID_CREDENTIALS",
            "message": "Invalid email or password",
        }

    async def test_login_revokes_earlier_sessions(self, client: AsyncClient, stores: Stores):
        user = seed_user(stores.users)
        first = await login(client, user.email)
        second = await login(client, user.email)

        replay = await client.post("/auth/refresh", headers=refresh_cookie(first.refresh_token))
        assert replay.status_code == 401

        rotated = await client.post("/auth/refresh", headers=refresh_cookie(second.refresh_token))
        assert rotated.status_code == 200


class TestRefresh:
    async def test_rotation_is_single_use(self, client: AsyncClient, stores: Stores):
        user = seed_user(stores.users)
        session = await login(client, user.email)

        response = await client.post(
            "/auth/refresh", headers=refresh_cookie(session.refresh_token)
        )
        assert response.status_code == 200
        new_refresh = response.cookies["refresh_token"]
        assert new_refresh != session.refresh_token
        client.cookies.clear()

        replay = await client.post("/auth/refresh", headers=refresh_cookie(session.refresh_token))
        assert replay.status_code == 401
        assert replay.json()["error"]["type"] == "UNAUTHORIZED"

        again = await client.post("/auth/refresh", headers=refresh_cookie(new_refresh))
        assert again.status_code == 200

    async def test_new_access_token_works(self, client: AsyncClient, stores: Stores):
        user = seed_user(stores.users)
        session = await login(client, user.email)

        response = await client.post(
            "/auth/refresh", headers=refresh_cookie(session.refresh_token)
        )
        access = response.json()["access_token"]

        assert (await client.get("/users", headers=auth_headers(access))).status_code == 200

    async def test_missing_cookie(self, client: AsyncClient):
        response = await client.post("/auth/refresh")

        assert response.status_code == 401

    async def test_access_token_is_not_a_refresh_token(self, client: AsyncClient, stores: Stores):
        user = seed_user(stores.users)
        session = await login(client, user.email)

        response = await client.post("/auth/refresh", headers=refresh_cookie(session.access_token))

        assert response.status_code == 401


class TestLogout:
    async def test_logout_revokes_and_clears_cookie(self, client: AsyncClient, stores: Stores):
        user = seed_user(stores.users)
        session = await login(client, user.email)

        response = await client.post("/auth/logout", headers=refresh_cookie(session.refresh_token))

        assert response.status_code == 200
        assert response.json() == {"message": "logged out"}
        assert "Max-Age=0" in response.headers["set-cookie"]
        assert stores.tokens.active_for(user.id) == []

        replay = await client.post("/auth/refresh", headers=refresh_cookie(session.refresh_token))
        assert replay.status_code == 401

    @pytest.mark.parametrize("headers", [{}, {"Cookie": "refresh_token=garbage"}])
    async def test_logout_always_succeeds(self, client: AsyncClient, headers: dict):
        response = await client.post("/auth/logout", headers=headers)

        assert response.status_code == 200

    async def test_logout_all(self, client: AsyncClient, stores: Stores):
        user = seed_user(stores.users)
        session = await login(client, user.email)

        response = await client.post("/auth/logout-all", headers=session.headers)

        assert response.status_code == 200
        assert response.json() == {"message": "logged out from all sessions", "revoked": 1}
        refresh = await client.post("/auth/refresh", headers=refresh_cookie(session.refresh_token))
        assert refresh.status_code == 401
        # The access token stays valid until it expires
        assert (await client.get("/users", headers=session.headers)).status_code == 200

    async def test_logout_all_requires_access_token(self, client: AsyncClient):
        assert (await client.post("/auth/logout-all")).status_code == 401


class TestAuthorizationGuard:
    @pytest.mark.parametrize(
        "authorization",
        [
            None,
            "",
            "Bearer",
            "Bearer ",
            "bearer {token}",
            "Token {token}",
            "Bearer  {token}",
            "Bearer not.a.jwt",
        ],
    )
    async def test_rejected_headers(
        self, client: AsyncClient, stores: Stores, authorization: str | None
    ):
        user = seed_user(stores.users)
        session = await login(client, user.email)
        headers = {}
        if authorization is not None:
            headers["Authorization"] = authorization.format(token=session.access_token)

        response = await client.get("/users", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"]["type"] == "UNAUTHORIZED"

    async def test_refresh_token_is_not_an_access_token(
        self, client: AsyncClient, stores: Stores
    ):
        user = seed_user(stores.users)
        session = await login(client, user.email)

        response = await client.get("/users", headers=auth_headers(session.refresh_token))

        assert response.status_code == 401


class TestUpdateUserType:
    async def test_admin_promotes_employee(self, client: AsyncClient, stores: Stores):
        admin = seed_user(stores.users, UserType.ADMIN.value)
        employee = seed_user(stores.users)
        session = await login(client, admin.email)

        response = await client.patch(
            f"/auth/{employee.id}/update-usertype",
            json={"user_type": "task_manager"},
            headers=session.headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "user_type updated successfully"
        assert body["user"]["user_type"] == "task_manager"
        assert stores.users.users[employee.id].user_type == "task_manager"

    @pytest.mark.parametrize(
        "caller_type,target,user_type,expected",
        [
            ("employee", "other", "admin", 403),
            ("task_manager", "other", "admin", 403),
            ("admin", "self", "employee", 403),
            ("admin", "other", "superuser", 400),
            ("admin", "missing", "employee", 404),
        ],
    )
    async def test_matrix(
        self,
        client: AsyncClient,
        stores: Stores,
        caller_type: str,
        target: str,
        user_type: str,
        expected: int,
    ):
        caller = seed_user(stores.users, caller_type)
        other = seed_user(stores.users)
        target_id = {"self": caller.id, "other": other.id, "missing": uuid4()}[target]
        session = await login(client, caller.email)

        response = await client.patch(
            f"/auth/{target_id}/update-usertype",
            json={"user_type": user_type},
            headers=session.headers,
        )

        assert response.status_code == expected

    async def test_demoted_admin_loses_rights_immediately(
        self, client: AsyncClient, stores: Stores
    ):
        admin = seed_user(stores.users, UserType.ADMIN.value)
        other = seed_user(stores.users)
        session = await login(client, admin.email)
        stores.users.users[admin.id].user_type = UserType.EMPLOYEE.value

        response = await client.patch(
            f"/auth/{other.id}/update-usertype",
            json={"user_type": "task_manager"},
            headers=session.headers,
        )

        assert response.status_code == 403


async def test_bootstrap_admin_registration(client: AsyncClient, app: FastAPI):
    settings = get_settings().model_copy(update={"bootstrap_admin_emails": ["boss@example.com"]})
    app.dependency_overrides[get_settings] = lambda: settings

    session = await register_and_login(client, "Boss@example.com")
    response = await client.get("/users", headers=session.headers)

    assert response.json()[0]["user_type"] == UserType.ADMIN.value


class TestGuardPrecedence:
    async def test_guard_runs_before_body_validation(self, client: AsyncClient):
        response = await client.post("/tasks", json={"title": ""})

        assert response.status_code == 401
        assert response.json()["error"]["type"] == "UNAUTHORIZED"

    async def test_unparseable_json_is_rejected_before_the_guard(self, client: AsyncClient):
        response = await client.post(
            "/tasks", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["type"] == "BAD_REQUEST"
