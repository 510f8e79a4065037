from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from database import create_document, get_documents, get_document_by_id, update_document, delete_document
from schemas import MenuItem, MenuCategory, StockStatus, normalize_tags
from security import require_admin

router = APIRouter()


class MenuItemUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[MenuCategory] = None
    price: Optional[float] = Field(None, ge=0)
    tags: Optional[List[str]] = None
    tasting_notes: Optional[str] = None
    image_url: Optional[str] = None
    stock_status: Optional[StockStatus] = None

    @field_validator("tags")
    @classmethod
    def lowercase_tags(cls, v):
        return normalize_tags(v) if v is not None else v


@router.get("")
def list_menu(category: Optional[str] = None, tag: Optional[str] = None):
    # Admin screens need out-of-stock items too, so nothing is filtered by stock
    query = {}
    if category:
        query["category"] = category.lower()
    if tag:
        query["tags"] = {"$in": [tag.strip().lower()]}
    return get_documents("menuitem", query, sort=[("created_at", -1)])


@router.get("/{item_id}")
def get_menu_item(item_id: str):
    item = get_document_by_id("menuitem", item_id)
    if not item:
        raise HTTPException(404, "Item not found")
    return item


@router.post("", status_code=201)
def create_menu_item(payload: MenuItem, admin: dict = Depends(require_admin)):
    item_id = create_document("menuitem", payload)
    return get_document_by_id("menuitem", item_id)


@router.put("/{item_id}")
def update_menu_item(item_id: str, payload: MenuItemUpdate, admin: dict = Depends(require_admin)):
    if not update_document("menuitem", item_id, payload.model_dump(exclude_unset=True)):
        raise HTTPException(404, "Item not found")
    return get_document_by_id("menuitem", item_id)


@router.delete("/{item_id}")
def delete_menu_item(item_id: str, admin: dict = Depends(require_admin)):
    if not delete_document("menuitem", item_id):
        raise HTTPException(404, "Item not found")
    return {"message": "Item deleted successfully"}
