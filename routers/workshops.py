from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, UploadFile, File
from pydantic import BaseModel, Field, field_validator

from database import create_document, get_documents, get_document_by_id, update_document, delete_document
from schemas import Workshop, WorkshopStatus, normalize_tags
from security import require_admin
from storage import upload_image, StorageError

router = APIRouter()


class WorkshopUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    date: Optional[datetime] = None
    time: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, ge=0)
    tags: Optional[List[str]] = None
    status: Optional[WorkshopStatus] = None
    is_active: Optional[bool] = None
    image_url: Optional[str] = None

    @field_validator("tags")
    @classmethod
    def lowercase_tags(cls, v):
        return normalize_tags(v) if v is not None else v


class WorkshopStatusUpdate(BaseModel):
    status: WorkshopStatus


def _updated(workshop_id: str, data: dict) -> dict:
    if not update_document("workshop", workshop_id, data):
        raise HTTPException(404, "Workshop not found")
    return get_document_by_id("workshop", workshop_id)


@router.get("")
def list_workshops(status: Optional[WorkshopStatus] = None):
    query = {"status": status} if status else {}
    return get_documents("workshop", query, sort=[("date", 1)])


@router.get("/{workshop_id}")
def get_workshop(workshop_id: str):
    workshop = get_document_by_id("workshop", workshop_id)
    if not workshop:
        raise HTTPException(404, "Workshop not found")
    return workshop


@router.post("", status_code=201)
def create_workshop(payload: Workshop, admin: dict = Depends(require_admin)):
    workshop_id = create_document("workshop", payload)
    return get_document_by_id("workshop", workshop_id)


@router.put("/{workshop_id}")
def update_workshop(workshop_id: str, payload: WorkshopUpdate, admin: dict = Depends(require_admin)):
    return _updated(workshop_id, payload.model_dump(exclude_unset=True))


@router.patch("/{workshop_id}/status")
def update_workshop_status(workshop_id: str, payload: WorkshopStatusUpdate, admin: dict = Depends(require_admin)):
    return _updated(workshop_id, {"status": payload.status})


@router.post("/{workshop_id}/image")
def upload_workshop_image(workshop_id: str, image: UploadFile = File(...), admin: dict = Depends(require_admin)):
    if not get_document_by_id("workshop", workshop_id):
        raise HTTPException(404, "Workshop not found")
    try:
        uploaded = upload_image(image.file.read(), image.filename or "workshop.jpg", folder="/robusta/workshops")
    except StorageError as e:
        raise HTTPException(500, {"message": "Failed to upload image", "error": str(e)})
    return _updated(workshop_id, {"image_url": uploaded["url"]})


@router.delete("/{workshop_id}")
def delete_workshop(workshop_id: str, admin: dict = Depends(require_admin)):
    if not delete_document("workshop", workshop_id):
        raise HTTPException(404, "Workshop not found")
    return {"message": "Workshop deleted successfully"}
