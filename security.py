"""
Identity and session tokens.

Firebase ID tokens prove who the caller is; the API then hands out its own
HS256 JWT which every protected route expects as a bearer token.
"""
import json
from datetime import datetime, timedelta, timezone
from typing import Optional

import firebase_admin
import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from firebase_admin import auth as firebase_auth, credentials
from jwt import PyJWTError

from config import Config
from database import get_document_by_id
from logger import get_logger

logger = get_logger(__name__)

bearer = HTTPBearer(auto_error=False)


# ===================== Firebase =====================
def _firebase_app():
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass
    if Config.FIREBASE_CREDENTIALS:
        cred = credentials.Certificate(json.loads(Config.FIREBASE_CREDENTIALS))
    elif Config.FIREBASE_CREDENTIALS_PATH:
        cred = credentials.Certificate(Config.FIREBASE_CREDENTIALS_PATH)
    else:
        raise HTTPException(503, "Identity service is not configured")
    try:
        app = firebase_admin.initialize_app(cred)
    except ValueError:
        # Another request initialized the default app first
        return firebase_admin.get_app()
    logger.info("Firebase Admin initialized")
    return app


def verify_identity_token(id_token: str) -> dict:
    """Verify a Firebase ID token and return its decoded claims."""
    app = _firebase_app()
    try:
        return firebase_auth.verify_id_token(id_token, app=app)
    except firebase_auth.ExpiredIdTokenError:
        raise HTTPException(401, "Firebase token has expired. Please sign in again.")
    except (firebase_auth.InvalidIdTokenError, ValueError) as e:
        logger.warning("Firebase token rejected: %s", e)
        raise HTTPException(401, "Invalid Firebase token")


# ===================== Session JWT =====================
def _secret() -> str:
    if not Config.JWT_SECRET:
        raise HTTPException(503, "JWT_SECRET is not configured")
    return Config.JWT_SECRET


def create_access_token(user: dict) -> str:
    payload = {
        "sub": user["_id"],
        "email": user["email"],
        "role": user.get("role", "user"),
        "exp": datetime.now(timezone.utc) + timedelta(days=Config.JWT_EXPIRES_DAYS),
    }
    return jwt.encode(payload, _secret(), algorithm=Config.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, _secret(), algorithms=[Config.JWT_ALGORITHM])
    except PyJWTError:
        raise HTTPException(401, "Invalid or expired token")


def _user_from_token(token: str) -> dict:
    payload = decode_access_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(401, "Invalid token")
    user = get_document_by_id("user", user_id)
    if not user:
        raise HTTPException(401, "User not found")
    return user


# ===================== Dependencies =====================
def get_current_user(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> dict:
    if creds is None or not creds.credentials:
        raise HTTPException(401, "Unauthorized")
    return _user_from_token(creds.credentials)


def get_optional_user(creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer)) -> Optional[dict]:
    """Like get_current_user, but guests (no or bad token) get None."""
    if creds is None or not creds.credentials:
        return None
    try:
        return _user_from_token(creds.credentials)
    except HTTPException:
        return None


def is_admin(user: Optional[dict]) -> bool:
    return bool(user) and user.get("role") == "admin"


def require_admin(user: dict = Depends(get_current_user)) -> dict:
    if not is_admin(user):
        raise HTTPException(403, "Forbidden - Admin access required")
    return user
