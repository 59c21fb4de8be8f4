"""
Tests for authentication, tokens and the role gate
"""

from datetime import timedelta
from unittest import mock

from campus_events.core.security import create_access_token, create_refresh_token
from campus_events.services.auth_service import FORGOT_PASSWORD_MESSAGE, auth_service, token_claims


def test_register_returns_admin_and_tokens(client):
    response = client.post("/api/auth/register", json={
        "username": "new_admin",
        "email": "new.admin@college.edu",
        "password": "longenough",
    })

    assert response.status_code == 201
    body = response.json()
    assert set(body) == {"success", "message", "data", "timestamp"}
    assert body["data"]["admin"]["role"] == "admin"
    assert "password_hash" not in body["data"]["admin"]
    assert body["data"]["access_token"] and body["data"]["refresh_token"]


def test_register_duplicate_username(client, admin):
    response = client.post("/api/auth/register", json={
        "username": admin.username,
        "email": "other@college.edu",
        "password": "longenough",
    })

    assert response.status_code == 409
    assert response.json()["success"] is False


def test_register_short_password(client):
    response = client.post("/api/auth/register", json={
        "username": "new_admin",
        "email": "new.admin@college.edu",
        "password": "12345",
    })

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "password"


def test_login_by_username_or_email(client, admin, password):
    by_name = client.post("/api/auth/login", json={"identifier": admin.username, "password": password})
    by_email = client.post("/api/auth/login", json={"identifier": admin.email, "password": password})

    assert by_name.status_code == 200
    assert by_email.status_code == 200
    assert by_email.json()["data"]["admin"]["last_login"] is not None


def test_login_failures_share_one_message(client, make_admin, password):
    inactive = make_admin("sleepy", "sleepy@college.edu", is_active=False)
    make_admin()

    responses = [
        client.post("/api/auth/login", json={"identifier": inactive.username, "password": password}),
        client.post("/api/auth/login", json={"identifier": "admin_one", "password": "wrong-password"}),
        client.post("/api/auth/login", json={"identifier": "nobody", "password": password}),
    ]

    for response in responses:
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"


def test_missing_and_bad_tokens(client, admin):
    assert client.get("/api/auth/profile").status_code == 401

    response = client.get("/api/auth/profile", headers={"Authorization": "Bearer not.a.token"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_expired_token(client, admin):
    token = create_access_token(token_claims(admin), expires_delta=timedelta(seconds=-1))
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


def test_refresh_token_is_not_an_access_token(client, admin):
    token = create_refresh_token({"id": admin.id})
    response = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_refresh_issues_access_token(client, admin):
    token = create_refresh_token({"id": admin.id})
    response = client.post("/api/auth/refresh", json={"refresh_token": token})

    assert response.status_code == 200
    access = response.json()["data"]["access_token"]
    assert client.get("/api/auth/profile", headers={"Authorization": f"Bearer {access}"}).status_code == 200


def test_role_gate_on_admin_list(client, admin, super_admin, auth_headers):
    assert client.get("/api/auth/admins", headers=auth_headers(admin)).status_code == 403

    response = client.get("/api/auth/admins", headers=auth_headers(super_admin))
    assert response.status_code == 200
    assert {a["username"] for a in response.json()["data"]} == {admin.username, super_admin.username}


def test_super_admin_cannot_deactivate_self(client, super_admin, auth_headers):
    response = client.post(f"/api/auth/admins/{super_admin.id}/deactivate", headers=auth_headers(super_admin))

    assert response.status_code == 400


def test_deactivated_admin_loses_session(client, admin, super_admin, auth_headers):
    headers = auth_headers(admin)
    response = client.post(f"/api/auth/admins/{admin.id}/deactivate", headers=auth_headers(super_admin))
    assert response.status_code == 200
    assert response.json()["data"]["is_active"] is False

    assert client.get("/api/auth/validate", headers=headers).status_code == 401

    reactivated = client.post(f"/api/auth/admins/{admin.id}/activate", headers=auth_headers(super_admin))
    assert reactivated.json()["data"]["is_active"] is True


def test_change_password(client, admin, headers, password):
    wrong = client.post("/api/auth/change-password", headers=headers, json={
        "current_password": "not-it", "new_password": "brand-new-pass",
    })
    assert wrong.status_code == 400

    ok = client.post("/api/auth/change-password", headers=headers, json={
        "current_password": password, "new_password": "brand-new-pass",
    })
    assert ok.status_code == 200

    login = client.post("/api/auth/login", json={"identifier": admin.username, "password": "brand-new-pass"})
    assert login.status_code == 200


def test_profile_update_conflict(client, make_admin, admin, headers):
    make_admin("taken_name", "taken@college.edu")

    response = client.put("/api/auth/profile", headers=headers, json={"username": "taken_name"})
    assert response.status_code == 409

    response = client.put("/api/auth/profile", headers=headers, json={"username": "fresh_name"})
    assert response.status_code == 200
    assert response.json()["data"]["username"] == "fresh_name"


def test_forgot_password_does_not_reveal_accounts(client, admin):
    with mock.patch.object(auth_service.notifier, "send_password_reset") as send:
        known = client.post("/api/auth/forgot-password", json={"email": admin.email})
        unknown = client.post("/api/auth/forgot-password", json={"email": "ghost@college.edu"})

    assert known.json()["message"] == unknown.json()["message"] == FORGOT_PASSWORD_MESSAGE
    send.assert_called_once()
    assert send.call_args.args[0] == admin.email


def test_logout(client, headers):
    response = client.post("/api/auth/logout", headers=headers)

    assert response.status_code == 200
    assert response.json()["success"] is True
