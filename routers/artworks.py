from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from database import create_document, get_documents, get_document_by_id, update_document, delete_document
from schemas import Artwork, normalize_tags
from security import require_admin

router = APIRouter()


class ArtworkUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    artist_id: Optional[str] = None
    artist_name: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    medium: Optional[str] = None
    tags: Optional[List[str]] = None
    image_url: Optional[str] = None
    is_available: Optional[bool] = None

    @field_validator("tags")
    @classmethod
    def lowercase_tags(cls, v):
        return normalize_tags(v) if v is not None else v


def with_artist(artwork: dict) -> dict:
    """Attach the artist profile, when the artwork references one."""
    if artwork and artwork.get("artist_id"):
        artwork["artist"] = get_document_by_id("artist", artwork["artist_id"])
    return artwork


def _fill_artist_name(data: dict) -> dict:
    if data.get("artist_id") and not data.get("artist_name"):
        artist = get_document_by_id("artist", data["artist_id"])
        if not artist:
            raise HTTPException(400, "Artist not found")
        data["artist_name"] = artist.get("display_name")
    return data


@router.get("")
def list_artworks(tag: Optional[str] = None, available: Optional[bool] = None):
    query = {}
    if tag:
        query["tags"] = {"$in": [tag.strip().lower()]}
    if available is not None:
        query["is_available"] = available
    return [with_artist(a) for a in get_documents("artwork", query, sort=[("created_at", -1)])]


@router.get("/{artwork_id}")
def get_artwork(artwork_id: str):
    artwork = get_document_by_id("artwork", artwork_id)
    if not artwork:
        raise HTTPException(404, "Artwork not found")
    return with_artist(artwork)


@router.post("", status_code=201)
def create_artwork(payload: Artwork, admin: dict = Depends(require_admin)):
    artwork_id = create_document("artwork", _fill_artist_name(payload.model_dump()))
    return with_artist(get_document_by_id("artwork", artwork_id))


@router.put("/{artwork_id}")
def update_artwork(artwork_id: str, payload: ArtworkUpdate, admin: dict = Depends(require_admin)):
    data = _fill_artist_name(payload.model_dump(exclude_unset=True))
    if not update_document("artwork", artwork_id, data):
        raise HTTPException(404, "Artwork not found")
    return with_artist(get_document_by_id("artwork", artwork_id))


@router.delete("/{artwork_id}")
def delete_artwork(artwork_id: str, admin: dict = Depends(require_admin)):
    if not delete_document("artwork", artwork_id):
        raise HTTPException(404, "Artwork not found")
    return {"message": "Artwork deleted successfully"}
