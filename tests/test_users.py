"""
Tests for user management endpoints.
"""

from fastapi.testclient import TestClient

from acquisitions.core.config import settings
from acquisitions.models.user import User

USERS = f"{settings.API_PREFIX}/users"


def test_list_users(client: TestClient, test_user: User, other_user: User, login_as) -> None:
    login_as(test_user)
    response = client.get(USERS)
    assert response.status_code == 200
    users = response.json()["users"]
    assert [u["email"] for u in users] == [test_user.email, other_user.email]
    assert all("password" not in u for u in users)


def test_list_users_unauthenticated(client: TestClient) -> None:
    response = client.get(USERS)
    assert response.status_code == 401
    assert response.json() == {"error": "Authentication required"}


def test_invalid_token_rejected(client: TestClient) -> None:
    client.cookies.set("token", "not.a.jwt")
    response = client.get(USERS)
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired token"}


def test_get_user_by_id(client: TestClient, test_user: User, other_user: User, login_as) -> None:
    login_as(test_user)
    response = client.get(f"{USERS}/{other_user.id}")
    assert response.status_code == 200
    data = response.json()["user"]
    assert data["id"] == other_user.id
    assert data["email"] == other_user.email
    assert data["role"] == "user"
    assert "password" not in data


def test_get_user_not_found(client: TestClient, test_user: User, login_as) -> None:
    login_as(test_user)
    response = client.get(f"{USERS}/9999")
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_get_user_bad_id(client: TestClient, test_user: User, login_as) -> None:
    login_as(test_user)
    for bad_id in ("abc", "0", "-3"):
        response = client.get(f"{USERS}/{bad_id}")
        assert response.status_code == 400, bad_id
        assert response.json()["error"] == "Validation error"


def test_update_self(client: TestClient, test_user: User, login_as) -> None:
    login_as(test_user)
    response = client.patch(
        f"{USERS}/{test_user.id}",
        json={"name": "Renamed", "email": "Renamed@Example.com"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "User updated successfully"
    assert data["user"]["name"] == "Renamed"
    assert data["user"]["email"] == "renamed@example.com"
    assert data["user"]["role"] == "user"


def test_update_other_user_forbidden(
    client: TestClient, test_user: User, other_user: User, login_as
) -> None:
    login_as(test_user)
    response = client.patch(f"{USERS}/{other_user.id}", json={"name": "Hijacked"})
    assert response.status_code == 403
    assert response.json() == {"error": "You are not allowed to update this user"}


def test_non_admin_cannot_change_own_role(client: TestClient, test_user: User, login_as) -> None:
    login_as(test_user)
    response = client.patch(f"{USERS}/{test_user.id}", json={"role": "admin"})
    assert response.status_code == 403
    assert response.json() == {"error": "Only admin users can change user roles"}


def test_role_change_by_user_5_is_forbidden(client: TestClient, login_as) -> None:
    login_as({"id": 5, "email": "five@example.com", "role": "user"})
    response = client.patch(f"{USERS}/5", json={"role": "admin"})
    assert response.status_code == 403


def test_admin_can_change_role(
    client: TestClient, test_admin: User, test_user: User, login_as
) -> None:
    login_as(test_admin)
    response = client.patch(f"{USERS}/{test_user.id}", json={"role": "admin"})
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "admin"


def test_update_requires_a_field(client: TestClient, test_user: User, login_as) -> None:
    login_as(test_user)
    response = client.patch(f"{USERS}/{test_user.id}", json={})
    assert response.status_code == 400
    assert response.json()["details"] == ["At least one field must be provided to update"]


def test_update_validation_error(client: TestClient, test_user: User, login_as) -> None:
    login_as(test_user)
    response = client.patch(f"{USERS}/{test_user.id}", json={"email": "nope"})
    assert response.status_code == 400
    assert response.json()["details"][0].startswith("email:")


def test_update_unauthenticated(client: TestClient, test_user: User) -> None:
    response = client.patch(f"{USERS}/{test_user.id}", json={"name": "Nobody"})
    assert response.status_code == 401


def test_update_not_found(client: TestClient, test_admin: User, login_as) -> None:
    login_as(test_admin)
    response = client.patch(f"{USERS}/9999", json={"name": "Ghost"})
    assert response.status_code == 404


def test_update_email_conflict(
    client: TestClient, test_user: User, other_user: User, login_as
) -> None:
    login_as(test_user)
    response = client.patch(f"{USERS}/{test_user.id}", json={"email": other_user.email})
    assert response.status_code == 409


def test_delete_self(client: TestClient, test_user: User, login_as) -> None:
    user_id = test_user.id
    login_as(test_user)
    response = client.delete(f"{USERS}/{user_id}")
    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully", "userId": user_id}


def test_admin_deletes_user_then_get_is_not_found(
    client: TestClient, test_admin: User, test_user: User, login_as
) -> None:
    user_id = test_user.id
    login_as(test_admin)
    response = client.delete(f"{USERS}/{user_id}")
    assert response.status_code == 200

    response = client.get(f"{USERS}/{user_id}")
    assert response.status_code == 404

    response = client.delete(f"{USERS}/{user_id}")
    assert response.status_code == 404


def test_delete_other_user_forbidden(
    client: TestClient, test_user: User, other_user: User, login_as
) -> None:
    login_as(test_user)
    response = client.delete(f"{USERS}/{other_user.id}")
    assert response.status_code == 403
    assert response.json() == {"error": "You are not allowed to delete this user"}


def test_delete_unauthenticated(client: TestClient, test_user: User) -> None:
    response = client.delete(f"{USERS}/{test_user.id}")
    assert response.status_code == 401


def test_session_of_deleted_user_cannot_act_on_next_account(client: TestClient) -> None:
    """Ids of deleted users are never reassigned, so their cookies match no one."""
    sign_up = f"{settings.API_PREFIX}/auth/sign-up"

    response = client.post(sign_up, json={"name": "Old", "email": "old@x.com", "password": "secret1"})
    assert response.status_code == 201
    old_id = response.json()["user"]["id"]
    old_token = response.cookies.get("token")

    assert client.delete(f"{USERS}/{old_id}").status_code == 200

    response = client.post(sign_up, json={"name": "New", "email": "new@x.com", "password": "secret1"})
    assert response.status_code == 201
    new_id = response.json()["user"]["id"]
    assert new_id != old_id

    client.cookies.clear()
    client.cookies.set("token", old_token)
    response = client.patch(f"{USERS}/{new_id}", json={"name": "Hijacked"})
    assert response.status_code == 403
    response = client.delete(f"{USERS}/{new_id}")
    assert response.status_code == 403
