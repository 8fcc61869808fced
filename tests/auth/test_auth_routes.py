"""
Tests for the authentication endpoints.
"""
from clinic_programs.auth import service as auth_service_module
from clinic_programs.auth import utils as auth_utils
from clinic_programs.auth.models import User, UserRole

from conftest import ADA, DOCTOR


def test_register_returns_user_without_password(client):
    response = client.post("/auth/register", json=DOCTOR)

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "User Registered Successfully"
    assert body["user"]["email"] == DOCTOR["email"]
    assert body["user"]["role"] == "DOCTOR"
    assert body["confirmation_email_queued"] is False
    assert "password" not in body["user"]
    assert "password_hash" not in body["user"]


def test_register_role_defaults_to_doctor(client):
    account = {"email": "x@example.com", "password": "secret1", "full_name": "X"}
    response = client.post("/auth/register", json=account)
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "DOCTOR"


def test_register_duplicate_email_is_conflict(client):
    assert client.post("/auth/register", json=DOCTOR).status_code == 201
    response = client.post("/auth/register", json=DOCTOR)
    assert response.status_code == 409
    assert response.json() == {"message": "A user with this email already exists."}


def test_register_rejects_unknown_role(client):
    response = client.post("/auth/register", json={**DOCTOR, "role": "NURSE"})
    assert response.status_code == 400


def test_email_failure_does_not_fail_registration(client, monkeypatch):
    def broken_send(email, full_name, role):
        raise RuntimeError("SMTP down")

    monkeypatch.setattr(auth_service_module, "email_configured", lambda: True)
    monkeypatch.setattr(auth_utils, "send_registration_confirmation_email", broken_send)

    response = client.post("/auth/register", json=DOCTOR)

    assert response.status_code == 201
    assert response.json()["confirmation_email_queued"] is True


def test_login_success(client):
    client.post("/auth/register", json=DOCTOR)
    response = client.post("/auth/login", json={"email": DOCTOR["email"], "password": DOCTOR["password"]})

    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["token_type"] == "bearer"
    assert body["user"]["full_name"] == DOCTOR["full_name"]
    assert body["user"]["role"] == "DOCTOR"


def test_login_wrong_password_issues_no_token(client):
    client.post("/auth/register", json=DOCTOR)
    response = client.post("/auth/login", json={"email": DOCTOR["email"], "password": "nope-nope"})

    assert response.status_code == 401
    assert "token" not in response.json()
    assert response.json()["message"] == "Invalid Password"


def test_login_unknown_email(client):
    response = client.post("/auth/login", json={"email": "ghost@example.com", "password": "whatever"})
    assert response.status_code == 401


def test_me_returns_current_user(client, doctor):
    response = client.get("/auth/me", headers=doctor["headers"])
    assert response.status_code == 200
    assert response.json()["user"]["id"] == doctor["id"]


def test_missing_token_is_401(client):
    response = client.get("/program/all")
    assert response.status_code == 401
    assert response.json() == {"message": "Access denied"}


def test_bad_token_is_403(client):
    response = client.get("/program/all", headers={"Authorization": "Bearer forged.token.value"})
    assert response.status_code == 403
    assert response.json() == {"message": "Invalid token"}


def test_admin_cannot_use_doctor_only_endpoints(client, admin):
    response = client.post("/clients/register", json=ADA, headers=admin["headers"])
    assert response.status_code == 403


def test_stale_token_role_is_rechecked_against_storage(client, db, doctor):
    # Token was issued while the user was a DOCTOR
    user = db.query(User).filter(User.id == doctor["id"]).first()
    user.role = UserRole.ADMIN
    db.commit()

    response = client.post("/clients/register", json=ADA, headers=doctor["headers"])

    assert response.status_code == 403
    assert "DOCTOR" in response.json()["message"]
