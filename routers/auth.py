from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from pymongo.errors import DuplicateKeyError

from config import Config
from database import create_document, get_document, get_document_by_id, update_document
from logger import get_logger
from schemas import User
from security import verify_identity_token, create_access_token

router = APIRouter()
logger = get_logger(__name__)


class FirebaseLoginRequest(BaseModel):
    id_token: Optional[str] = Field(None, alias="idToken")

    model_config = {"populate_by_name": True}


def public_user(user: dict) -> dict:
    return {
        "_id": user["_id"],
        "email": user["email"],
        "name": user.get("name"),
        "role": user.get("role", "user"),
    }


def upsert_user(email: str, name: Optional[str], uid: Optional[str]) -> dict:
    """Find the local user by email, creating it on first login."""
    email = email.strip().lower()
    user = get_document("user", {"email": email})
    if not user:
        role = "admin" if email in Config.ADMIN_EMAILS else "user"
        new_user = User(email=email, name=name or email.split("@")[0], role=role, firebase_uid=uid)
        try:
            user_id = create_document("user", new_user)
        except DuplicateKeyError:
            # A concurrent first login created it
            return get_document("user", {"email": email})
        logger.info("Created user %s (%s)", email, role)
        return get_document_by_id("user", user_id)
    if uid and not user.get("firebase_uid"):
        update_document("user", user["_id"], {"firebase_uid": uid})
        user["firebase_uid"] = uid
    return user


@router.post("/firebase")
def login_with_firebase(payload: FirebaseLoginRequest):
    if not payload.id_token:
        raise HTTPException(400, "idToken is required")

    claims = verify_identity_token(payload.id_token)
    email = claims.get("email")
    if not email:
        raise HTTPException(400, "Email not available from Firebase token")

    user = upsert_user(email, claims.get("name"), claims.get("uid"))
    token = create_access_token(user)
    logger.info("Session token issued for user %s", user["_id"])
    return {"success": True, "token": token, "user": public_user(user)}
