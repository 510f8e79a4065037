import pytest

import database
from pairing import find_pairing
from seed import ARTWORKS, MENU, seed


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_api_banner(client):
    assert client.get("/api").json()["status"] == "running"


def test_database_diagnostics(client):
    assert client.get("/test").json()["connection_status"] == "Connected"


def test_missing_database_answers_503(client, monkeypatch):
    monkeypatch.setattr(database, "db", None)
    res = client.get("/api/menu")
    assert res.status_code == 503
    assert res.json()["message"] == "Database not available"


def test_seed_resets_catalog(mock_db):
    mock_db["menuitem"].insert_one({"name": "Stale"})
    seed()
    seed()
    assert mock_db["menuitem"].count_documents({}) == len(MENU)
    assert mock_db["artwork"].count_documents({}) == len(ARTWORKS)
    assert mock_db["menuitem"].count_documents({"name": "Stale"}) == 0


@pytest.mark.parametrize("vibe", ["bold", "smooth", "earthy"])
def test_seeded_catalog_pairs_every_vibe(mock_db, vibe):
    seed()
    pairing = find_pairing(vibe)
    assert pairing["coffee"] and pairing["art"]


def test_production_hides_error_details(client, monkeypatch):
    monkeypatch.setattr("main.Config.ENVIRONMENT", "production")
    monkeypatch.setattr(database, "db", None)
    res = client.get("/api/menu")
    assert res.status_code == 503
    assert "error" not in res.json()
