from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field

from database import create_document, get_documents, get_document_by_id, update_document, delete_document
from logger import get_logger
from schemas import FranchiseLead, LEAD_STATUSES
from security import require_admin

router = APIRouter()
logger = get_logger(__name__)


class FranchiseApplication(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    city: Optional[str] = None
    investment_capacity: Optional[str] = None
    message: Optional[str] = None


class LeadStatusUpdate(BaseModel):
    status: Optional[str] = None


@router.post("", status_code=201)
def apply_for_franchise(payload: FranchiseApplication):
    lead_id = create_document("franchiselead", FranchiseLead(**payload.model_dump()))
    logger.info("New franchise lead %s", lead_id)
    return {"success": True, "id": lead_id, "message": "Application received"}


@router.get("")
def list_leads(admin: dict = Depends(require_admin)):
    return get_documents("franchiselead", sort=[("created_at", -1)])


@router.put("/{lead_id}/status")
def update_lead_status(lead_id: str, payload: LeadStatusUpdate, admin: dict = Depends(require_admin)):
    if payload.status not in LEAD_STATUSES:
        raise HTTPException(400, f"Invalid status. Must be one of: {', '.join(LEAD_STATUSES)}")
    if not update_document("franchiselead", lead_id, {"status": payload.status}):
        raise HTTPException(404, "Lead not found")
    return get_document_by_id("franchiselead", lead_id)


@router.delete("/{lead_id}")
def delete_lead(lead_id: str, admin: dict = Depends(require_admin)):
    if not delete_document("franchiselead", lead_id):
        raise HTTPException(404, "Lead not found")
    return {"message": "Lead deleted successfully"}
