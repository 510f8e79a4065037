from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from barista import build_system_context, build_prompt, recommendation_cards
from database import create_document
from gemini import GeminiClient
from logger import get_logger
from schemas import Interaction
from security import get_optional_user

router = APIRouter()
logger = get_logger(__name__)

BREAK_MESSAGE = "I am taking a quick coffee break. Please try again in a moment."


class ChatRequest(BaseModel):
    message: Optional[str] = None


@router.post("")
def chat_with_barista(payload: ChatRequest, user: Optional[dict] = Depends(get_optional_user)):
    if not payload.message or not payload.message.strip():
        raise HTTPException(400, "Message is required")

    try:
        prompt = build_prompt(build_system_context(), payload.message)
        reply = GeminiClient().generate(prompt)
        create_document("interaction", Interaction(
            user_id=user["_id"] if user else None,
            query=payload.message,
            response=reply,
        ))
    except Exception as e:
        logger.exception("Chatbot error")
        raise HTTPException(500, {"message": BREAK_MESSAGE, "error": str(e)})

    return {"response": reply, "cards": recommendation_cards(reply), "message": "Success"}
