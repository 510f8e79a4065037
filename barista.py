"""
Virtual barista: live inventory context, prompt template and the
{{REC:ImageURL|Name|Price}} recommendation tags the model is told to emit.
"""
import re
from datetime import datetime
from typing import List

from database import get_documents
from logger import get_logger

logger = get_logger(__name__)

NO_STOCK_NOTICE = "(No products currently in stock)"
CONTEXT_ERROR = "Error loading inventory."

REC_PATTERN = re.compile(r"({{REC:.*?}})")

PROMPT_TEMPLATE = """system: You are a Virtual Barista.
YOUR KNOWLEDGE BASE:
{context}

RULES:
1. Be helpful and concise.
2. CRITICAL: When you recommend a specific item, you MUST append a special tag at the end of the sentence containing the Image, Name, and Price.

FORMAT: {{{{REC:ImageURL|Name|Price}}}}

Example: "I highly recommend the Ethiopian Yirgacheffe, it has a lovely floral aroma. {{{{REC:https://example.com/coffee.jpg|Ethiopian Yirgacheffe|350}}}}"

3. Only use the image URLs and Prices provided in the knowledge base.

user: {message}
"""


def format_price(price) -> str:
    if isinstance(price, float) and price.is_integer():
        price = int(price)
    return f"₹{price}"


def _format_date(value) -> str:
    if isinstance(value, datetime):
        return value.strftime("%a %b %d %Y")
    return str(value or "")


def menu_line(item: dict) -> str:
    info = item.get("tasting_notes") or item.get("description") or ""
    return f"- {item.get('name')} ({item.get('category')}) | {format_price(item.get('price', 0))} | Info: {info} | Image: {item.get('image_url') or ''}"


def workshop_line(w: dict) -> str:
    return f"- {w.get('title')} | Date: {_format_date(w.get('date'))} | {format_price(w.get('price', 0))} | Image: {w.get('image_url') or ''}"


def artwork_line(a: dict) -> str:
    style = ", ".join(a.get("tags") or []) or a.get("medium") or ""
    return f"- \"{a.get('title')}\" by {a.get('artist_name') or 'Unknown artist'} | {format_price(a.get('price', 0))} | Style: {style} | Image: {a.get('image_url') or ''}"


def build_system_context() -> str:
    try:
        products = get_documents("menuitem", {"stock_status": "In Stock"})
        workshops = get_documents("workshop", {"status": "Approved", "is_active": True})
        artworks = get_documents("artwork", {"is_available": True})
    except Exception:
        logger.exception("Context error")
        return CONTEXT_ERROR

    logger.info("Live context loaded: %d products, %d workshops, %d artworks", len(products), len(workshops), len(artworks))

    context = "Here is the LIVE inventory from the database. Use ONLY this data.\n\n"

    if products:
        context += "=== CURRENT MENU (From Inventory) ===\n"
        context += "".join(menu_line(p) + "\n" for p in products)
    else:
        context += f"=== MENU ===\n{NO_STOCK_NOTICE}\n"

    if workshops:
        context += "\n=== WORKSHOPS ===\n"
        context += "".join(workshop_line(w) + "\n" for w in workshops)

    if artworks:
        context += "\n=== ART GALLERY ===\n"
        context += "".join(artwork_line(a) + "\n" for a in artworks)

    return context


def build_prompt(context: str, message: str) -> str:
    return PROMPT_TEMPLATE.format(context=context, message=message)


def parse_recommendations(text: str) -> List[dict]:
    """
    Split a reply into segments: {"type": "text", "text"} or
    {"type": "card", "image_url", "name", "price"}. A tag that does not hold
    exactly three fields is kept as plain text.
    """
    segments = []
    for part in REC_PATTERN.split(text or ""):
        if not part:
            continue
        if part.startswith("{{REC:") and part.endswith("}}"):
            fields = part[len("{{REC:"):-2].split("|")
            if len(fields) == 3:
                image_url, name, price = (f.strip() for f in fields)
                segments.append({"type": "card", "image_url": image_url, "name": name, "price": price})
                continue
        segments.append({"type": "text", "text": part})
    return segments


def recommendation_cards(text: str) -> List[dict]:
    return [s for s in parse_recommendations(text) if s["type"] == "card"]
