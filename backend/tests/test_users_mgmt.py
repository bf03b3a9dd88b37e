import pytest
from fastapi.testclient import TestClient

from ird_properties.models.user import User
from tests.conftest import get_auth_headers


# ============== CREATE USER ==============


def test_create_user_as_admin(client: TestClient, admin_headers):
    """Admin can create a new user."""
    response = client.post(
        "/api/v1/users",
        json={
            "username": "newstore",
            "name": "New Store Keeper",
            "department": "Store Department",
            "email": "newstore@example.com",
            "password": "securepass123",
            "role": "store_manager",
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "newstore"
    assert data["name"] == "New Store Keeper"
    assert data["role"] == "store_manager"
    assert data["is_active"] is True
    assert "hashed_password" not in data


def test_create_user_defaults_to_requester_role(client: TestClient, admin_headers):
    response = client.post(
        "/api/v1/users",
        json={"username": "plain", "name": "Plain User", "password": "password123"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["role"] == "user"


def test_create_user_duplicate_username(client: TestClient, admin_headers, requester_user):
    """Creating a user with an existing username returns 400."""
    response = client.post(
        "/api/v1/users",
        json={
            "username": requester_user.username,
            "name": "Duplicate",
            "password": "password123",
        },
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert "already exists" in response.json()["detail"]


def test_create_user_short_password(client: TestClient, admin_headers):
    response = client.post(
        "/api/v1/users",
        json={"username": "shorty", "name": "Shorty", "password": "123"},
        headers=admin_headers,
    )
    assert response.status_code == 422


def test_create_user_as_non_admin_forbidden(client: TestClient, store_headers):
    """Non-admin users cannot create users."""
    response = client.post(
        "/api/v1/users",
        json={"username": "sneaky", "name": "Sneaky User", "password": "password123", "role": "admin"},
        headers=store_headers,
    )
    assert response.status_code == 403


# ============== LIST / GET USERS ==============


def test_list_users_as_admin(client: TestClient, admin_headers, requester_user, store_manager_user):
    response = client.get("/api/v1/users", headers=admin_headers)
    assert response.status_code == 200
    usernames = {u["username"] for u in response.json()}
    assert usernames == {"admin", "requester", "store"}


def test_list_users_filter_by_role(client: TestClient, admin_headers, requester_user, store_manager_user):
    response = client.get("/api/v1/users", params={"role": "store_manager"}, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert [u["username"] for u in data] == ["store"]


def test_list_users_as_non_admin_forbidden(client: TestClient, requester_headers):
    response = client.get("/api/v1/users", headers=requester_headers)
    assert response.status_code == 403


def test_get_own_profile(client: TestClient, requester_headers, requester_user):
    response = client.get(f"/api/v1/users/{requester_user.id}", headers=requester_headers)
    assert response.status_code == 200
    assert response.json()["department"] == "ADRD"


def test_get_other_user_forbidden(client: TestClient, requester_headers, store_manager_user):
    response = client.get(f"/api/v1/users/{store_manager_user.id}", headers=requester_headers)
    assert response.status_code == 403


def test_get_nonexistent_user(client: TestClient, admin_headers):
    response = client.get("/api/v1/users/999999", headers=admin_headers)
    assert response.status_code == 404
    assert "not found" in response.json()["detail"].lower()


# ============== UPDATE USER ==============


def test_update_own_profile(client: TestClient, requester_headers, requester_user):
    response = client.put(
        f"/api/v1/users/{requester_user.id}",
        json={"department": "Finance", "email": "sidrak@example.com"},
        headers=requester_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["department"] == "Finance"
    assert data["email"] == "sidrak@example.com"


def test_update_own_role_forbidden(client: TestClient, requester_headers, requester_user):
    response = client.put(
        f"/api/v1/users/{requester_user.id}",
        json={"role": "admin"},
        headers=requester_headers,
    )
    assert response.status_code == 403


def test_update_user_role_as_admin(client: TestClient, admin_headers, requester_user):
    response = client.put(
        f"/api/v1/users/{requester_user.id}",
        json={"role": "store_manager"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["role"] == "store_manager"


# ============== PASSWORD ==============


def test_change_own_password(client: TestClient, requester_headers, requester_user):
    response = client.put(
        f"/api/v1/users/{requester_user.id}/password",
        json={"current_password": "password123", "new_password": "newsecret456"},
        headers=requester_headers,
    )
    assert response.status_code == 200

    login_response = client.post(
        "/api/v1/auth/login",
        data={"username": requester_user.username, "password": "newsecret456"},
    )
    assert login_response.status_code == 200


def test_change_own_password_wrong_current(client: TestClient, requester_headers, requester_user):
    response = client.put(
        f"/api/v1/users/{requester_user.id}/password",
        json={"current_password": "wrong", "new_password": "newsecret456"},
        headers=requester_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Current password is incorrect"


def test_admin_resets_password_without_current(client: TestClient, admin_headers, store_manager_user):
    response = client.put(
        f"/api/v1/users/{store_manager_user.id}/password",
        json={"new_password": "storepass789"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert get_auth_headers(client, store_manager_user.username, "storepass789")


# ============== DELETE USER ==============


def test_delete_user_deactivates(client: TestClient, db_session, admin_headers, requester_user):
    """Deleting a user keeps the row so their requests stay attributable."""
    response = client.delete(f"/api/v1/users/{requester_user.id}", headers=admin_headers)
    assert response.status_code == 204

    user = db_session.query(User).filter(User.id == requester_user.id).one()
    assert user.is_active is False

    login_response = client.post(
        "/api/v1/auth/login",
        data={"username": "requester", "password": "password123"},
    )
    assert login_response.status_code == 403


def test_delete_self_fails(client: TestClient, admin_headers, admin_user):
    response = client.delete(f"/api/v1/users/{admin_user.id}", headers=admin_headers)
    assert response.status_code == 400
    assert "Cannot delete your own account" in response.json()["detail"]


# ============== NULL FIELDS ==============


@pytest.mark.parametrize("payload", [
    {"name": None},
    {"role": None},
    {"is_active": None},
    {"department": None, "email": None},
])
def test_update_user_null_fields_are_ignored(client: TestClient, db_session, admin_headers, requester_user, payload):
    """Explicit nulls leave the stored values untouched."""
    response = client.put(f"/api/v1/users/{requester_user.id}", json=payload, headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Sidrak H."
    assert data["role"] == "user"
    assert data["is_active"] is True
    assert data["department"] == "ADRD"

    user = db_session.query(User).filter(User.id == requester_user.id).one()
    assert user.is_active is True


def test_user_can_still_log_in_after_null_is_active(client: TestClient, admin_headers, requester_user):
    client.put(f"/api/v1/users/{requester_user.id}", json={"is_active": None}, headers=admin_headers)

    headers = get_auth_headers(client, requester_user.username)
    assert client.get("/api/v1/auth/me", headers=headers).status_code == 200


def test_self_update_with_null_role_allowed(client: TestClient, requester_headers, requester_user):
    """A null role is not a role change, so requesters may send it."""
    response = client.put(
        f"/api/v1/users/{requester_user.id}",
        json={"role": None, "name": "Sidrak Haile"},
        headers=requester_headers,
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Sidrak Haile"
    assert response.json()["role"] == "user"
