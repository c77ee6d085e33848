"""Login / refresh / logout round trips with the refresh cookie."""

import uuid

import pytest
from fastapi.testclient import TestClient

from technotes.main import create_app
from technotes.security import create_access_token


@pytest.fixture
def alice(make_user):
    return make_user("alice", password="Passw0rd!")


def login(client, username="alice", password="Passw0rd!"):
    return client.post("/api/v1/auth", json={"username": username, "password": password})


class TestLogin:
    def test_login_sets_refresh_cookie(self, client, alice):
        response = login(client)
        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 15 * 60
        assert body["access_token"]

        set_cookie = response.headers["set-cookie"]
        assert set_cookie.startswith("jwt=")
        assert "HttpOnly" in set_cookie
        assert client.cookies.get("jwt")

    def test_missing_fields(self, client):
        response = client.post("/api/v1/auth", json={"username": "alice"})
        assert response.status_code == 400
        assert response.json() == {"message": "All fields are required"}

    def test_wrong_password(self, client, alice):
        response = login(client, password="nope")
        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_unknown_user(self, client):
        assert login(client, username="ghost").status_code == 401

    def test_inactive_user(self, client, alice):
        client.patch(
            f"/api/v1/users/{alice['id']}",
            json={"username": "alice", "roles": ["Employee"], "active": False},
        )
        assert login(client).status_code == 401

    def test_updated_password_is_used(self, client, alice):
        client.patch(
            f"/api/v1/users/{alice['id']}",
            json={"username": "alice", "roles": ["Employee"], "active": True, "password": "n3w-pass"},
        )
        assert login(client).status_code == 401
        assert login(client, password="n3w-pass").status_code == 200


class TestRefresh:
    def test_without_cookie(self, client):
        response = client.get("/api/v1/auth/refresh")
        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_with_unknown_token(self, client):
        client.cookies.set("jwt", "not-a-real-token")
        response = client.get("/api/v1/auth/refresh")
        assert response.status_code == 403
        assert response.json() == {"message": "Forbidden"}

    def test_rotates_token(self, client, alice):
        login(client)
        first = client.cookies.get("jwt")

        response = client.get("/api/v1/auth/refresh")
        assert response.status_code == 200
        assert response.json()["access_token"]
        second = client.cookies.get("jwt")
        assert second and second != first

        # the rotated-out token is gone
        client.cookies.clear()
        client.cookies.set("jwt", first)
        assert client.get("/api/v1/auth/refresh").status_code == 403


class TestLogout:
    def test_without_cookie(self, client):
        response = client.post("/api/v1/auth/logout")
        assert response.status_code == 204
        assert response.content == b""

    def test_clears_cookie_and_revokes(self, client, alice):
        login(client)
        token = client.cookies.get("jwt")

        response = client.post("/api/v1/auth/logout")
        assert response.status_code == 200
        assert response.json() == {"message": "Cookie cleared"}
        assert "jwt=" in response.headers["set-cookie"]

        client.cookies.clear()
        client.cookies.set("jwt", token)
        assert client.get("/api/v1/auth/refresh").status_code == 403


class TestRequireAuth:
    @pytest.fixture
    def guarded_client(self, test_settings, database):
        settings = test_settings.model_copy(update={"require_auth": True})
        with TestClient(create_app(settings=settings, database=database)) as test_client:
            yield test_client, settings

    def test_users_need_bearer_token(self, guarded_client):
        client, _ = guarded_client
        response = client.get("/api/v1/users")
        assert response.status_code == 403

    def test_valid_token_passes(self, guarded_client):
        client, settings = guarded_client
        token = create_access_token({"sub": str(uuid.uuid4())}, settings=settings)
        response = client.get("/api/v1/notes", headers={"Authorization": f"Bearer {token}"})
        # past the guard, the table is just empty
        assert response.status_code == 404
        assert response.json() == {"message": "No notes found"}

    def test_garbage_token(self, guarded_client):
        client, _ = guarded_client
        response = client.get("/api/v1/users", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 403
        assert response.json() == {"message": "Invalid token or expired token"}

    def test_auth_routes_stay_open(self, guarded_client):
        client, _ = guarded_client
        assert client.post("/api/v1/auth/logout").status_code == 204
