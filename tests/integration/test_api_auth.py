"""Authentication endpoint tests."""

import pytest


@pytest.mark.integration
class TestLogin:
    """POST /api/auth/login."""

    def test_login_returns_token_pair(self, client, account_data, registered_account):
        response = client.post(
            "/api/auth/login",
            json={"username": account_data["username"], "password": account_data["password"]},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["account_id"] == registered_account["id"]
        assert body["username"] == account_data["username"]
        assert body["access_token"] != body["refresh_token"]

    def test_wrong_password_rejected(self, client, account_data, registered_account):
        response = client.post(
            "/api/auth/login",
            json={"username": account_data["username"], "password": "wrong"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password"

    def test_unknown_user_gets_same_response(self, client):
        response = client.post("/api/auth/login", json={"username": "ghost", "password": "x"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid username or password"


@pytest.mark.integration
class TestRefresh:
    """POST /api/auth/refresh."""

    def test_refresh_token_yields_usable_access_token(self, client, account_data, registered_account):
        tokens = client.post(
            "/api/auth/login",
            json={"username": account_data["username"], "password": account_data["password"]},
        ).json()

        response = client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})

        assert response.status_code == 200
        headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
        update = client.put(
            "/restful/accounts",
            json={**account_data, "id": registered_account["id"], "password": ""},
            headers=headers,
        )
        assert update.status_code == 200

    def test_access_token_cannot_refresh(self, client, auth_headers):
        access_token = auth_headers["Authorization"].split(" ", 1)[1]

        response = client.post("/api/auth/refresh", json={"refresh_token": access_token})

        assert response.status_code == 401

    def test_garbage_bearer_token_rejected(self, client, account_data, registered_account):
        response = client.put(
            "/restful/accounts",
            json={**account_data, "id": registered_account["id"]},
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401
