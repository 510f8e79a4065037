from typing import Optional

from fastapi import APIRouter, HTTPException

from pairing import find_pairing

router = APIRouter()


@router.get("/pair")
def get_pairing(vibe: Optional[str] = None):
    pairing = find_pairing(vibe)
    if not pairing["coffee"] or not pairing["art"]:
        raise HTTPException(404, "Not enough inventory to generate a pairing.")
    return pairing
