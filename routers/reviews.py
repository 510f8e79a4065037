from fastapi import APIRouter, HTTPException

from places import fetch_place_reviews, ReviewsError

router = APIRouter()


@router.get("")
def google_reviews():
    try:
        return fetch_place_reviews()
    except ReviewsError as e:
        raise HTTPException(500, str(e))
