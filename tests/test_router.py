"""
Tests router FastAPI — /blocks/*
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from block_composer.database import get_db, init_db
from block_composer.router import router


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def client():
    """Client de test avec DB SQLite en mémoire."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_db] = _get_db
    return TestClient(app)


def _blocks():
    return [
        {"id": "h", "type": "hero-contact", "order": 0, "config": {"titulo": "Salut"}},
        {"id": "g", "type": "gallery", "order": 1, "config": {"mode": "grid"}, "media": [
            {"id": "m0", "url": "https://cdn.test/0.jpg", "storage_size_bytes": 60, "display_order": 0},
            {"id": "m1", "file_url": "https://cdn.test/1.jpg", "storage_bytes": 20, "display_order": 1},
        ]},
    ]


# ── Catalogue / normalisation ───────────────────────────────────────────────

class TestCatalogNormalize:
    def test_catalog(self, client):
        r = client.get("/blocks/catalog")
        assert r.status_code == 200
        components = r.json()["components"]
        assert len(components) == 11
        slide = next(c for c in components if c["type"] == "gallery" and c["mode"] == "slide")
        assert slide["default_config"]["autoplay"] == 3000

    def test_normalize_legacy_hero(self, client):
        r = client.post("/blocks/normalize", json={
            "type": "hero-contact",
            "config": {"titulo": "Salut", "gradientFrom": "from-a", "gradientTo": "to-b"},
            "host": {"context": "post"},
        })
        cfg = r.json()["config"]
        assert cfg["title"] == "Salut"
        assert cfg["background_gradient"] == "from-a to-b"
        assert cfg["context"] == "post"

    def test_normalize_unknown_type(self, client):
        r = client.post("/blocks/normalize", json={"type": "widget", "config": {"x": 1}})
        assert r.status_code == 200
        assert r.json()["config"] == {}


# ── Validation / stockage ───────────────────────────────────────────────────

class TestValidateStorage:
    def test_valid_sequence(self, client):
        r = client.post("/blocks/validate", json={"blocks": _blocks()})
        assert r.json() == {"valid": True}

    def test_order_gap(self, client):
        blocks = _blocks()
        blocks[1]["order"] = 5
        body = client.post("/blocks/validate", json={"blocks": blocks}).json()
        assert body["valid"] is False
        assert "error" in body

    def test_bad_payload_is_422(self, client):
        r = client.post("/blocks/validate", json={"blocks": [{"id": "x"}]})
        assert r.status_code == 422

    def test_storage(self, client):
        body = client.post("/blocks/storage", json={"blocks": _blocks(), "limit": 100}).json()
        assert body["used"] == 80
        assert body["percentage"] == 80.0
        assert body["level"] == "warning"
        assert body["used_label"] == "80 B"


# ── Séquences ───────────────────────────────────────────────────────────────

class TestSequences:
    def test_put_then_get(self, client):
        r = client.put("/blocks/sequences/post-1", json={"blocks": _blocks(), "host": {"context": "post"}})
        assert r.status_code == 200
        assert r.json()["count"] == 2

        blocks = client.get("/blocks/sequences/post-1").json()["blocks"]
        assert [b["id"] for b in blocks] == ["h", "g"]
        assert blocks[0]["config"]["title"] == "Salut"
        assert blocks[0]["config"]["context"] == "post"
        assert [m["id"] for m in blocks[1]["media"]] == ["m0", "m1"]
        assert blocks[1]["media"][1]["storage_size_bytes"] == 20
        assert "status" not in blocks[0]

    def test_put_invalid_sequence(self, client):
        blocks = _blocks()
        blocks[1]["id"] = "h"
        r = client.put("/blocks/sequences/post-1", json={"blocks": blocks})
        assert r.status_code == 422

    def test_get_empty(self, client):
        assert client.get("/blocks/sequences/inconnu").json()["blocks"] == []
