import pytest

from database import create_document
from pairing import find_pairing, resolve_vibe


@pytest.fixture
def catalog():
    create_document("menuitem", {"name": "Robusta Shot", "category": "coffee", "price": 180, "tags": ["bold", "dark"], "stock_status": "In Stock"})
    create_document("menuitem", {"name": "Honey Latte", "category": "coffee", "price": 260, "tags": ["smooth", "sweet"], "stock_status": "In Stock"})
    create_document("menuitem", {"name": "Herbal Cold Brew", "category": "coffee", "price": 240, "tags": ["herbal"], "stock_status": "Out of Stock"})
    create_document("artwork", {"title": "Static", "tags": ["chaotic"], "is_available": True})
    create_document("artwork", {"title": "Fog", "tags": ["calm"], "is_available": True})


@pytest.mark.parametrize("vibe,expected", [
    ("Smooth", "smooth"),
    (" earthy ", "earthy"),
    ("sleepy", "bold"),
    (None, "bold"),
])
def test_resolve_vibe(vibe, expected):
    assert resolve_vibe(vibe) == expected


def test_pairing_matches_vibe_tags(catalog):
    pairing = find_pairing("smooth")
    assert pairing["coffee"]["name"] == "Honey Latte"
    assert pairing["art"]["title"] == "Fog"
    assert pairing["reasoning"].startswith("Velvety")


def test_pairing_falls_back_to_any_in_stock_item(catalog):
    pairing = find_pairing("earthy")
    assert pairing["vibe"] == "earthy"
    assert pairing["coffee"]["name"] != "Herbal Cold Brew"
    assert pairing["coffee"]["stock_status"] == "In Stock"
    assert pairing["art"] is not None


def test_pair_endpoint_defaults_to_bold(client, catalog):
    res = client.get("/api/synesthesia/pair?vibe=unknown")
    assert res.status_code == 200
    body = res.json()
    assert body["vibe"] == "bold"
    assert body["coffee"]["name"] == "Robusta Shot"
    assert body["art"]["title"] == "Static"


def test_pair_endpoint_without_inventory(client):
    create_document("menuitem", {"name": "Robusta Shot", "category": "coffee", "price": 180, "tags": ["bold"], "stock_status": "In Stock"})
    res = client.get("/api/synesthesia/pair")
    assert res.status_code == 404
    assert res.json()["message"] == "Not enough inventory to generate a pairing."
