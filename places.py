"""
Google Places reviews for the café listing.
"""
import requests

from config import Config
from logger import get_logger

logger = get_logger(__name__)

PLACES_DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"


class ReviewsError(Exception):
    pass


def fetch_place_reviews() -> dict:
    if not Config.GOOGLE_PLACE_ID or not Config.GOOGLE_API_KEY:
        raise ReviewsError("Missing GOOGLE_PLACE_ID or GOOGLE_API_KEY")

    try:
        response = requests.get(
            PLACES_DETAILS_URL,
            params={
                "place_id": Config.GOOGLE_PLACE_ID,
                "fields": "rating,reviews,user_ratings_total",
                "key": Config.GOOGLE_API_KEY,
            },
            timeout=15,
        )
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException as e:
        logger.error("Google Reviews request failed: %s", e)
        raise ReviewsError("Failed to fetch Google reviews") from e

    if data.get("status") != "OK":
        raise ReviewsError(data.get("error_message") or f"Google API error: {data.get('status')}")

    result = data.get("result") or {}
    return {
        "rating": result.get("rating"),
        "totalReviews": result.get("user_ratings_total") or 0,
        "reviews": result.get("reviews") or [],
    }
