from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from database import get_documents, get_document_by_id, update_document
from routers.auth import public_user
from schemas import UserRole
from security import get_current_user, require_admin

router = APIRouter()


class RoleUpdateRequest(BaseModel):
    role: UserRole


@router.get("")
def list_users(admin: dict = Depends(require_admin)):
    return [public_user(u) for u in get_documents("user", sort=[("created_at", -1)])]


@router.get("/me")
def get_me(user: dict = Depends(get_current_user)):
    return public_user(user)


@router.put("/{user_id}/role")
def update_user_role(user_id: str, payload: RoleUpdateRequest, admin: dict = Depends(require_admin)):
    if not update_document("user", user_id, {"role": payload.role}):
        raise HTTPException(404, "User not found")
    return public_user(get_document_by_id("user", user_id))
