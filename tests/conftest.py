import os

os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["RAZORPAY_KEY_ID"] = "rzp_test_key"
os.environ["RAZORPAY_KEY_SECRET"] = "rzp_test_secret"
os.environ["GEMINI_API_KEY"] = "test-gemini-key"
os.environ["EMAIL_USER"] = "admin@robusta.in"
os.environ["EMAIL_PASS"] = "app-password"
os.environ["EMAIL_BATCH_SIZE"] = "50"
os.environ["ADMIN_EMAILS"] = "boss@robusta.in"

import mongomock
import pytest
from fastapi.testclient import TestClient

import database
from database import create_document, get_document_by_id
from main import app
from schemas import User
from security import create_access_token


@pytest.fixture(autouse=True)
def mock_db(monkeypatch):
    db = mongomock.MongoClient()["robusta_test"]
    monkeypatch.setattr(database, "db", db)
    database.ensure_indexes()
    yield db


@pytest.fixture
def client():
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


def _make_user(email, role):
    user_id = create_document("user", User(email=email, name=email.split("@")[0], role=role))
    return get_document_by_id("user", user_id)


@pytest.fixture
def user():
    return _make_user("guest@example.com", "user")


@pytest.fixture
def admin():
    return _make_user("owner@robusta.in", "admin")


@pytest.fixture
def user_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin)}"}
