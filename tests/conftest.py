"""
Test configuration for the clinic programs backend.
"""
import os

# Settings are read at import time, so the test environment goes first
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
for mail_var in ("MAIL_USERNAME", "MAIL_PASSWORD", "MAIL_FROM", "MAIL_SERVER"):
    os.environ.pop(mail_var, None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_programs.database import Base, get_db
from clinic_programs.main import app

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DOCTOR = {"email": "doctor@example.com", "password": "doctor-pass", "full_name": "Gregory House", "role": "DOCTOR"}
ADMIN = {"email": "admin@example.com", "password": "admin-pass", "full_name": "Lisa Cuddy", "role": "ADMIN"}

ADA = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "date_of_birth": "1985-12-10",
    "gender": "FEMALE",
    "city": "London",
    "phone": "0712345678",
    "email": "ada@example.com",
    "allergies": ["Penicillin", " ", "Peanuts"],
}


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Override the get_db dependency
    app.dependency_overrides[get_db] = override_get_db

    # Create test client
    with TestClient(app) as client:
        yield client

    # Remove dependency override
    app.dependency_overrides = {}


def register_and_login(client, account):
    """
    Register ``account`` through the API and log in.

    Returns:
        dict: user id, token and ready-to-use Authorization headers
    """
    response = client.post("/auth/register", json=account)
    assert response.status_code == 201, response.text
    user_id = response.json()["user"]["id"]

    response = client.post("/auth/login", json={"email": account["email"], "password": account["password"]})
    assert response.status_code == 200, response.text
    token = response.json()["token"]
    return {"id": user_id, "token": token, "headers": {"Authorization": f"Bearer {token}"}}


@pytest.fixture
def doctor(client):
    return register_and_login(client, DOCTOR)


@pytest.fixture
def admin(client):
    return register_and_login(client, ADMIN)


@pytest.fixture
def ada(client, doctor):
    """Client record for Ada Lovelace registered by the doctor."""
    response = client.post("/clients/register", json=ADA, headers=doctor["headers"])
    assert response.status_code == 201, response.text
    return response.json()["client"]


@pytest.fixture
def malaria(client, doctor):
    """The Malaria program created by the doctor."""
    response = client.post(
        "/program/create",
        json={"name": "Malaria", "description": "Malaria treatment and follow-up"},
        headers=doctor["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]
