"""
Synesthesia pairing: one menu item and one artwork chosen for a mood.
"""
from typing import Optional

from database import get_document

DEFAULT_VIBE = "bold"

# Which stored tags answer which mood
VIBE_CONFIG = {
    "bold": {
        "menu_tags": ["bold", "strong", "robusta", "intense", "spicy", "dark"],
        "art_tags": ["abstract", "bold", "chaotic", "high_contrast", "urban"],
        "reasoning": "The intense profile of this selection mirrors the high-contrast, bold strokes of the artwork. A pairing for those who seek clarity in chaos.",
    },
    "smooth": {
        "menu_tags": ["smooth", "mild", "creamy", "sweet", "milk", "comfort"],
        "art_tags": ["minimalist", "soft", "calm", "pastel", "modern"],
        "reasoning": "Velvety textures on the palate complement the soft gradients on the canvas. A low-arousal pairing designed for contemplation and slow living.",
    },
    "earthy": {
        "menu_tags": ["earthy", "nutty", "herbal", "rustic", "traditional"],
        "art_tags": ["nature", "landscape", "organic", "green", "texture"],
        "reasoning": "Rooted flavors meet organic visuals. The earthy notes ground the sensory experience, echoing the natural elements in the art.",
    },
}

IN_STOCK = {"stock_status": "In Stock"}
AVAILABLE_ART = {"is_available": True}


def resolve_vibe(vibe: Optional[str]) -> str:
    key = (vibe or "").strip().lower()
    return key if key in VIBE_CONFIG else DEFAULT_VIBE


def _first_tagged_or_any(collection: str, base_filter: dict, tags: list) -> Optional[dict]:
    doc = get_document(collection, {**base_filter, "tags": {"$in": tags}})
    return doc or get_document(collection, base_filter)


def find_pairing(vibe: Optional[str]) -> dict:
    """
    Returns {"vibe", "coffee", "art", "reasoning"}. Either document may be None
    when the catalog has nothing in stock / available.
    """
    key = resolve_vibe(vibe)
    config = VIBE_CONFIG[key]
    return {
        "vibe": key,
        "coffee": _first_tagged_or_any("menuitem", IN_STOCK, config["menu_tags"]),
        "art": _first_tagged_or_any("artwork", AVAILABLE_ART, config["art_tags"]),
        "reasoning": config["reasoning"],
    }
