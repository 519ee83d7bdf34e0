"""Integration tests for the authentication routes."""

import pytest

pytestmark = [pytest.mark.integration, pytest.mark.auth]

TEST_PASSWORD = "testpassword"
COOKIE = "widgetdesk_token"


class TestSignUp:
    @pytest.mark.asyncio
    async def test_sign_up(self, async_client):
        response = await async_client.post(
            "/api/auth/sign-up", json={"email": "fresh@example.com", "password": "pw123456"}
        )

        assert response.status_code == 201
        assert response.json() == {
            "success": "Account created. You can now sign in.",
            "error": None,
        }

    @pytest.mark.asyncio
    async def test_sign_up_existing_account(self, async_client, test_user):
        response = await async_client.post(
            "/api/auth/sign-up", json={"email": test_user.email, "password": "pw"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "An account with this email already exists"

    @pytest.mark.asyncio
    async def test_sign_up_missing_password(self, async_client):
        response = await async_client.post(
            "/api/auth/sign-up", json={"email": "fresh@example.com"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Email and password are required"


class TestSignIn:
    @pytest.mark.asyncio
    async def test_sign_in_redirects_with_cookie(self, async_client, test_user):
        response = await async_client.post(
            "/api/auth/sign-in",
            json={"email": test_user.email, "password": TEST_PASSWORD},
            follow_redirects=False,
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard"
        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith(f"{COOKIE}=")
        assert "httponly" in set_cookie.lower()

    @pytest.mark.asyncio
    async def test_cookie_opens_dashboard(self, async_client, test_user):
        sign_in = await async_client.post(
            "/api/auth/sign-in",
            json={"email": test_user.email, "password": TEST_PASSWORD},
            follow_redirects=False,
        )
        token = sign_in.cookies[COOKIE]
        async_client.cookies.clear()

        response = await async_client.get(
            "/dashboard", headers={"Cookie": f"{COOKIE}={token}"}
        )

        assert response.status_code == 200
        assert len(response.json()["widgets"]) == 4

    @pytest.mark.asyncio
    async def test_wrong_password_stays_inline(self, async_client, test_user):
        response = await async_client.post(
            "/api/auth/sign-in",
            json={"email": test_user.email, "password": "nope"},
            follow_redirects=False,
        )

        assert response.status_code == 401
        assert response.json() == {"success": None, "error": "Invalid email or password"}
        assert "set-cookie" not in response.headers

    @pytest.mark.asyncio
    async def test_missing_fields(self, async_client):
        response = await async_client.post("/api/auth/sign-in", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Email and password are required"


class TestToken:
    @pytest.mark.asyncio
    async def test_token_form(self, async_client, test_user):
        response = await async_client.post(
            "/api/auth/token",
            data={"username": test_user.email, "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"

        me = await async_client.get(
            "/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"}
        )
        assert me.status_code == 200
        assert me.json()["email"] == test_user.email

    @pytest.mark.asyncio
    async def test_token_bad_credentials(self, async_client, test_user):
        response = await async_client.post(
            "/api/auth/token", data={"username": test_user.email, "password": "nope"}
        )

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_me_requires_token(self, async_client):
        response = await async_client.get("/api/auth/me")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_rejects_garbage_token(self, async_client):
        response = await async_client.get(
            "/api/auth/me", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 401


class TestSignOut:
    @pytest.mark.asyncio
    async def test_sign_out_clears_cookie_and_canvas(
        self, async_client, auth_headers, canvas_store, test_user
    ):
        await async_client.post(
            "/api/canvas/widgets", json={"type": "notes"}, headers=auth_headers
        )
        assert test_user.id in canvas_store

        response = await async_client.post(
            "/api/auth/sign-out", headers=auth_headers, follow_redirects=False
        )

        assert response.status_code == 303
        assert response.headers["location"] == "/auth/login"
        assert response.headers["set-cookie"].startswith(f'{COOKIE}=""')
        assert test_user.id not in canvas_store

    @pytest.mark.asyncio
    async def test_sign_out_when_anonymous(self, async_client):
        response = await async_client.post("/api/auth/sign-out", follow_redirects=False)

        assert response.status_code == 303
