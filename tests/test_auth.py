from unittest.mock import patch

import jwt
import pytest
from fastapi import HTTPException
from pymongo.errors import DuplicateKeyError

import security
from config import Config
from database import create_document, get_document


def _login(client, claims):
    with patch("routers.auth.verify_identity_token", return_value=claims):
        return client.post("/api/auth/firebase", json={"idToken": "firebase-token"})


def test_firebase_login_creates_user_and_issues_token(client, mock_db):
    res = _login(client, {"email": "Ana@Example.com", "name": "Ana", "uid": "fb-1"})
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["user"]["email"] == "ana@example.com"
    assert body["user"]["role"] == "user"

    claims = jwt.decode(body["token"], Config.JWT_SECRET, algorithms=["HS256"])
    assert claims["sub"] == body["user"]["_id"]
    assert claims["role"] == "user"
    assert mock_db["user"].count_documents({}) == 1


def test_firebase_login_reuses_existing_user(client, mock_db):
    _login(client, {"email": "ana@example.com", "uid": "fb-1"})
    res = _login(client, {"email": "ana@example.com", "uid": "fb-1"})
    assert res.status_code == 200
    assert res.json()["user"]["name"] == "ana"
    assert mock_db["user"].count_documents({}) == 1


def test_firebase_login_backfills_uid(client, user):
    _login(client, {"email": user["email"], "uid": "fb-9"})
    assert get_document("user", {"email": user["email"]})["firebase_uid"] == "fb-9"


def test_admin_emails_get_admin_role(client):
    res = _login(client, {"email": "boss@robusta.in", "uid": "fb-2"})
    assert res.json()["user"]["role"] == "admin"


def test_firebase_login_requires_id_token(client):
    res = client.post("/api/auth/firebase", json={})
    assert res.status_code == 400
    assert res.json()["message"] == "idToken is required"


def test_firebase_login_requires_email_claim(client):
    res = _login(client, {"uid": "fb-3"})
    assert res.status_code == 400


def test_firebase_login_rejected_token(client):
    with patch("routers.auth.verify_identity_token", side_effect=HTTPException(401, "Invalid Firebase token")):
        res = client.post("/api/auth/firebase", json={"idToken": "bad"})
    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Invalid Firebase token"}


def test_me_requires_bearer(client):
    assert client.get("/api/users/me").status_code == 401
    assert client.get("/api/users/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 401


def test_me_returns_current_user(client, user_headers, user):
    res = client.get("/api/users/me", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["email"] == user["email"]


@pytest.mark.parametrize("method,path", [
    ("get", "/api/users"),
    ("get", "/api/orders"),
    ("get", "/api/franchises"),
    ("get", "/api/marketing/recipients"),
    ("post", "/api/menu"),
    ("delete", "/api/artworks/000000000000000000000000"),
])
def test_admin_routes_reject_non_admin(client, user_headers, method, path):
    res = getattr(client, method)(path, headers=user_headers)
    assert res.status_code == 403
    assert res.json() == {"success": False, "message": "Forbidden - Admin access required"}


def test_admin_can_list_users_and_change_roles(client, admin_headers, user):
    res = client.get("/api/users", headers=admin_headers)
    assert res.status_code == 200
    assert {u["email"] for u in res.json()} == {"guest@example.com", "owner@robusta.in"}

    res = client.put(f"/api/users/{user['_id']}/role", headers=admin_headers, json={"role": "admin"})
    assert res.status_code == 200
    assert res.json()["role"] == "admin"

    res = client.put(f"/api/users/{user['_id']}/role", headers=admin_headers, json={"role": "owner"})
    assert res.status_code == 400


def test_email_is_unique_in_the_store(user):
    with pytest.raises(DuplicateKeyError):
        create_document("user", {"email": user["email"], "name": "twin", "role": "user"})


def test_concurrent_first_login_reuses_the_winner(client, user, mock_db):
    calls = []

    def first_lookup_misses(collection, query):
        calls.append(query)
        return None if len(calls) == 1 else get_document(collection, query)

    with patch("routers.auth.get_document", side_effect=first_lookup_misses):
        res = _login(client, {"email": user["email"], "uid": "fb-7"})
    assert res.status_code == 200
    assert res.json()["user"]["_id"] == user["_id"]
    assert mock_db["user"].count_documents({"email": user["email"]}) == 1


def test_firebase_init_race_returns_existing_app(monkeypatch):
    monkeypatch.setattr(security.Config, "FIREBASE_CREDENTIALS_PATH", "/secrets/firebase.json")
    monkeypatch.setattr(security.Config, "FIREBASE_CREDENTIALS", None)
    existing = object()
    with patch("security.credentials.Certificate"), \
            patch("security.firebase_admin.get_app", side_effect=[ValueError("no app"), existing]), \
            patch("security.firebase_admin.initialize_app", side_effect=ValueError("already exists")):
        assert security._firebase_app() is existing
