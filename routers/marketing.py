from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field

from database import create_document, get_documents, get_document_by_id
from logger import get_logger
from mailer import send_broadcast, send_single, MailerNotConfigured
from schemas import EmailTemplate
from security import require_admin

# Every route here is admin only
router = APIRouter(dependencies=[Depends(require_admin)])
logger = get_logger(__name__)


class BroadcastRequest(BaseModel):
    subject: Optional[str] = None
    text_content: Optional[str] = Field(None, alias="textContent")

    model_config = {"populate_by_name": True}


class TestEmailRequest(BroadcastRequest):
    to: EmailStr


class TemplateRequest(BaseModel):
    template_name: Optional[str] = Field(None, alias="templateName")
    subject: Optional[str] = None
    html_content: Optional[str] = Field(None, alias="htmlContent")

    model_config = {"populate_by_name": True}


def _recipients() -> list:
    return get_documents("user", projection={"email": 1, "name": 1})


def _send_or_500(send, *args):
    try:
        return send(*args)
    except MailerNotConfigured as e:
        raise HTTPException(503, {"message": "Email service is not configured", "error": str(e)})
    except Exception as e:
        logger.exception("Email send failed")
        raise HTTPException(500, {"message": f"Error sending email: {e}", "error": str(e)})


@router.get("/recipients")
def get_email_recipients():
    users = _recipients()
    if not users:
        raise HTTPException(404, "No users found")
    return {"success": True, "totalRecipients": len(users), "users": users}


@router.post("/broadcast")
def broadcast(payload: BroadcastRequest, admin: dict = Depends(require_admin)):
    if not payload.subject or not payload.text_content:
        raise HTTPException(400, "Subject and content are required")

    email_list = [u["email"] for u in _recipients() if u.get("email")]
    if not email_list:
        raise HTTPException(404, "No valid email addresses found in user database")

    logger.info("Broadcast by %s to %d recipients", admin["email"], len(email_list))
    result = _send_or_500(send_broadcast, email_list, admin["email"], payload.subject, payload.text_content, admin.get("name"))
    return {
        "success": True,
        "message": "Broadcast email sent successfully",
        "recipientCount": result["recipientCount"],
    }


@router.post("/test")
def send_test_email(payload: TestEmailRequest, admin: dict = Depends(require_admin)):
    if not payload.subject or not payload.text_content:
        raise HTTPException(400, "Subject and content are required")
    _send_or_500(send_single, payload.to, admin["email"], payload.subject, payload.text_content, admin.get("name"))
    return {"success": True, "message": f"Test email sent to {payload.to}"}


@router.post("/template", status_code=201)
def save_email_template(payload: TemplateRequest):
    if not payload.template_name or not payload.subject or not payload.html_content:
        raise HTTPException(400, "Template name, subject, and content are required")
    template = EmailTemplate(
        template_name=payload.template_name,
        subject=payload.subject,
        html_content=payload.html_content,
    )
    template_id = create_document("emailtemplate", template)
    return {"success": True, "message": "Email template saved", "template": get_document_by_id("emailtemplate", template_id)}


@router.get("/templates")
def list_email_templates():
    return get_documents("emailtemplate", sort=[("created_at", -1)])
