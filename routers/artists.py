import re
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator
from pymongo.errors import DuplicateKeyError

from database import create_document, get_document, get_documents, get_document_by_id, update_document, is_valid_id
from logger import get_logger
from schemas import Artist, normalize_tags
from security import get_current_user, is_admin

router = APIRouter()
logger = get_logger(__name__)


class ArtistCreate(BaseModel):
    user_id: Optional[str] = Field(None, description="Admins may create a profile on behalf of a user")
    display_name: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    art_styles: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    instagram_url: Optional[str] = None
    website_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    is_featured: bool = False
    is_active: bool = True


class ArtistUpdate(BaseModel):
    display_name: Optional[str] = Field(None, min_length=1)
    bio: Optional[str] = None
    location: Optional[str] = None
    art_styles: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    instagram_url: Optional[str] = None
    website_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator("art_styles", "tags")
    @classmethod
    def lowercase_tags(cls, v):
        return normalize_tags(v) if v is not None else v


def placeholder_profile(name: str) -> dict:
    return {
        "_id": "temp",
        "display_name": name,
        "bio": "Artist profile coming soon.",
        "art_styles": [],
        "is_active": True,
    }


@router.get("")
def list_artists(featured: Optional[bool] = None, style: Optional[str] = None):
    query = {"is_active": True}
    if featured:
        query["is_featured"] = True
    if style:
        query["art_styles"] = {"$in": [style.strip().lower()]}
    return get_documents("artist", query, sort=[("created_at", -1)])


@router.get("/{id_or_name}")
def get_artist(id_or_name: str):
    if is_valid_id(id_or_name):
        artist = get_document_by_id("artist", id_or_name)
    else:
        artist = get_document("artist", {"display_name": {"$regex": f"^{re.escape(id_or_name)}$", "$options": "i"}})
    if not artist:
        return placeholder_profile(id_or_name)
    return artist


@router.post("", status_code=201)
def create_artist(payload: ArtistCreate, user: dict = Depends(get_current_user)):
    if not payload.display_name:
        raise HTTPException(400, "Display Name is required")

    owner_id = payload.user_id if (payload.user_id and is_admin(user)) else user["_id"]
    if get_document("artist", {"user_id": owner_id}):
        raise HTTPException(400, "User already has an artist profile")

    data = payload.model_dump()
    data["user_id"] = owner_id
    if not is_admin(user):
        data["is_featured"] = False
    try:
        artist_id = create_document("artist", Artist(**data))
    except DuplicateKeyError:
        raise HTTPException(400, "Artist profile already exists")
    logger.info("Artist profile %s created for user %s", artist_id, owner_id)
    return get_document_by_id("artist", artist_id)


@router.put("/{artist_id}")
def update_artist(artist_id: str, payload: ArtistUpdate, user: dict = Depends(get_current_user)):
    # Non-admins can only touch the profile they own
    owner_filter = None if is_admin(user) else {"user_id": user["_id"]}
    data = payload.model_dump(exclude_unset=True)
    if owner_filter:
        data.pop("is_featured", None)
    if not update_document("artist", artist_id, data, filter_extra=owner_filter):
        raise HTTPException(404, "Artist not found or unauthorized")
    return get_document_by_id("artist", artist_id)
