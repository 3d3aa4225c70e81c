"""Account endpoint tests: registration and modification constraints."""

import pytest
from fastapi import Depends
from sqlalchemy.orm import Session

from bookstore.db.database import get_db
from bookstore.repositories.dependencies import get_account_repository
from bookstore.repositories.sqlalchemy_impl import SQLAlchemyAccountRepository


def _constraints(response):
    return [error["constraint"] for error in response.json()["errors"]]


class UnseeingAccountRepository(SQLAlchemyAccountRepository):
    """Identity lookups report no matches, so duplicates reach the database."""

    def __init__(self, session, rollbacks):
        super().__init__(session)
        self.rollbacks = rollbacks

    async def exists_by_username_or_email_or_telephone(self, username, email, telephone):
        return False

    async def find_by_username_or_email_or_telephone(self, username, email, telephone):
        return []

    async def rollback(self):
        self.rollbacks.append(True)
        await super().rollback()


@pytest.fixture
def unseeing_repository(client):
    """Swap in a repository whose validators miss concurrent duplicates."""
    rollbacks = []

    def override(db: Session = Depends(get_db)):
        return UnseeingAccountRepository(db, rollbacks)

    client.app.dependency_overrides[get_account_repository] = override
    yield rollbacks
    client.app.dependency_overrides.pop(get_account_repository, None)


@pytest.mark.integration
class TestGetAccount:
    """GET /restful/accounts/{username}."""

    def test_get_registered_account(self, client, registered_account, account_data):
        assert registered_account["username"] == account_data["username"]
        assert registered_account["email"] == account_data["email"]
        assert "password" not in registered_account

    def test_unknown_account_is_404_problem(self, client):
        response = client.get("/restful/accounts/ghost")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/problem+json"
        assert response.json()["title"] == "Account Not Found"


@pytest.mark.integration
class TestCreateAccount:
    """POST /restful/accounts requires a unique account."""

    def test_create_account(self, client, account_data):
        response = client.post("/restful/accounts", json=account_data)

        assert response.status_code == 201
        assert response.json()["code"] == 0

    @pytest.mark.parametrize("field", ["username", "email", "telephone"])
    def test_duplicate_identity_field_rejected(self, client, account_data, registered_account, field):
        duplicate = {
            **account_data,
            "username": "another",
            "email": "another@example.com",
            "telephone": "13900000000",
        }
        duplicate[field] = account_data[field]

        response = client.post("/restful/accounts", json=duplicate)

        assert response.status_code == 422
        assert response.headers["content-type"] == "application/problem+json"
        assert _constraints(response) == ["UniqueAccount"]

    def test_password_required(self, client, account_data):
        response = client.post("/restful/accounts", json={**account_data, "password": ""})

        assert response.status_code == 422
        assert "Password is required" in response.json()["detail"]

    def test_malformed_payload_rejected(self, client, account_data):
        response = client.post("/restful/accounts", json={**account_data, "email": "not-an-email"})

        assert response.status_code == 422
        assert response.json()["title"] == "Validation Error"


@pytest.mark.integration
class TestUpdateAccount:
    """PUT /restful/accounts requires an existing, owned, non-conflicting account."""

    def test_anonymous_update_rejected(self, client, account_data, registered_account):
        response = client.put(
            "/restful/accounts", json={**account_data, "id": registered_account["id"]}
        )

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_update_own_account(self, client, account_data, registered_account, auth_headers):
        payload = {
            **account_data,
            "id": registered_account["id"],
            "password": "",
            "location": "Tang Dynasty, Chang'an",
        }

        response = client.put("/restful/accounts", json=payload, headers=auth_headers)

        assert response.status_code == 200, response.text
        stored = client.get(f"/restful/accounts/{account_data['username']}").json()
        assert stored["location"] == "Tang Dynasty, Chang'an"

        # Blank password keeps the old one
        login = client.post(
            "/api/auth/login",
            json={"username": account_data["username"], "password": account_data["password"]},
        )
        assert login.status_code == 200

    def test_update_clears_omitted_optional_fields(
        self, client, account_data, registered_account, auth_headers
    ):
        payload = {
            key: value
            for key, value in account_data.items()
            if key not in ("name", "avatar", "location")
        }
        payload["id"] = registered_account["id"]

        response = client.put("/restful/accounts", json=payload, headers=auth_headers)

        assert response.status_code == 200, response.text
        stored = client.get(f"/restful/accounts/{account_data['username']}").json()
        assert stored["name"] is None
        assert stored["avatar"] is None
        assert stored["location"] is None

    def test_update_changes_password(self, client, account_data, registered_account, auth_headers):
        payload = {**account_data, "id": registered_account["id"], "password": "N3w-passw0rd"}

        assert client.put("/restful/accounts", json=payload, headers=auth_headers).status_code == 200

        old = client.post(
            "/api/auth/login",
            json={"username": account_data["username"], "password": account_data["password"]},
        )
        new = client.post(
            "/api/auth/login",
            json={"username": account_data["username"], "password": "N3w-passw0rd"},
        )
        assert old.status_code == 401
        assert new.status_code == 200

    def test_update_missing_account_rejected(self, client, account_data, auth_headers):
        response = client.put(
            "/restful/accounts", json={**account_data, "id": 999999}, headers=auth_headers
        )

        assert response.status_code == 422
        assert _constraints(response)[:2] == ["ExistsAccount", "AuthenticatedAccount"]

    def test_update_other_account_rejected(self, client, account_data, auth_headers):
        other = {
            **account_data,
            "username": "reader",
            "email": "reader@example.com",
            "telephone": "13000000000",
        }
        assert client.post("/restful/accounts", json=other).status_code == 201
        other_id = client.get("/restful/accounts/reader").json()["id"]

        response = client.put(
            "/restful/accounts", json={**other, "id": other_id}, headers=auth_headers
        )

        assert response.status_code == 422
        assert _constraints(response) == ["AuthenticatedAccount"]

    def test_update_conflicting_with_other_account_rejected(
        self, client, account_data, registered_account, auth_headers
    ):
        other = {
            **account_data,
            "username": "reader",
            "email": "reader@example.com",
            "telephone": "13000000000",
        }
        assert client.post("/restful/accounts", json=other).status_code == 201

        payload = {**account_data, "id": registered_account["id"], "email": "reader@example.com"}
        response = client.put("/restful/accounts", json=payload, headers=auth_headers)

        assert response.status_code == 422
        assert _constraints(response) == ["NotConflictAccount"]


@pytest.mark.integration
class TestConcurrentDuplicates:
    """Store uniqueness still holds when a duplicate slips past the validators."""

    def test_create_duplicate_is_409_problem(
        self, client, account_data, registered_account, unseeing_repository
    ):
        response = client.post("/restful/accounts", json=account_data)

        assert response.status_code == 409
        assert response.headers["content-type"] == "application/problem+json"
        assert response.json()["title"] == "Conflict"
        assert unseeing_repository == [True]

    def test_update_into_other_account_is_409_problem(
        self, client, account_data, registered_account, auth_headers, unseeing_repository
    ):
        other = {
            **account_data,
            "username": "reader",
            "email": "reader@example.com",
            "telephone": "13000000000",
        }
        assert client.post("/restful/accounts", json=other).status_code == 201

        payload = {**account_data, "id": registered_account["id"], "email": "reader@example.com"}
        response = client.put("/restful/accounts", json=payload, headers=auth_headers)

        assert response.status_code == 409
        assert response.headers["content-type"] == "application/problem+json"
        assert unseeing_repository == [True]
        stored = client.get(f"/restful/accounts/{account_data['username']}").json()
        assert stored["email"] == account_data["email"]
