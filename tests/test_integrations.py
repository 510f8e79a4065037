from unittest.mock import MagicMock, patch

import pytest
import requests

import places
import storage
from places import ReviewsError, fetch_place_reviews
from storage import StorageError, upload_image


@pytest.fixture
def place_config(monkeypatch):
    monkeypatch.setattr(places.Config, "GOOGLE_PLACE_ID", "place-1")
    monkeypatch.setattr(places.Config, "GOOGLE_API_KEY", "maps-key")


def _response(payload):
    response = MagicMock()
    response.json.return_value = payload
    return response


# ===================== Google reviews =====================
def test_fetch_place_reviews(place_config):
    payload = {"status": "OK", "result": {"rating": 4.7, "user_ratings_total": 212, "reviews": [{"author_name": "A", "rating": 5}]}}
    with patch("places.requests.get", return_value=_response(payload)) as get:
        result = fetch_place_reviews()
    assert result == {"rating": 4.7, "totalReviews": 212, "reviews": [{"author_name": "A", "rating": 5}]}
    assert get.call_args.kwargs["params"]["place_id"] == "place-1"


def test_fetch_place_reviews_api_error(place_config):
    with patch("places.requests.get", return_value=_response({"status": "REQUEST_DENIED", "error_message": "bad key"})):
        with pytest.raises(ReviewsError, match="bad key"):
            fetch_place_reviews()


def test_reviews_endpoint_without_config(client, monkeypatch):
    monkeypatch.setattr(places.Config, "GOOGLE_PLACE_ID", None)
    res = client.get("/api/google-reviews")
    assert res.status_code == 500
    assert res.json()["message"] == "Missing GOOGLE_PLACE_ID or GOOGLE_API_KEY"


def test_reviews_endpoint(client, place_config):
    with patch("places.requests.get", return_value=_response({"status": "OK", "result": {"rating": 4.2}})):
        res = client.get("/api/google-reviews")
    assert res.json() == {"rating": 4.2, "totalReviews": 0, "reviews": []}


# ===================== Image storage =====================
def test_upload_image(monkeypatch):
    monkeypatch.setattr(storage.Config, "IMAGEKIT_PRIVATE_KEY", "private_key")
    body = {"url": "https://ik.imagekit.io/robusta/a.jpg", "fileId": "f1", "name": "a.jpg"}
    with patch("storage.requests.post", return_value=_response(body)) as post:
        assert upload_image(b"abc", "a.jpg") == {"url": body["url"], "file_id": "f1", "name": "a.jpg"}
    assert post.call_args.kwargs["data"]["file"] == "YWJj"
    assert post.call_args.kwargs["auth"] == ("private_key", "")


def test_upload_image_failures(monkeypatch):
    monkeypatch.setattr(storage.Config, "IMAGEKIT_PRIVATE_KEY", None)
    with pytest.raises(StorageError):
        upload_image(b"abc", "a.jpg")

    monkeypatch.setattr(storage.Config, "IMAGEKIT_PRIVATE_KEY", "private_key")
    with patch("storage.requests.post", side_effect=requests.exceptions.Timeout("slow")):
        with pytest.raises(StorageError):
            upload_image(b"abc", "a.jpg")
