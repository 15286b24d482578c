import pytest
from fastapi.testclient import TestClient

from config import settings
from services import db as db_module
from main import app


@pytest.fixture
def client(tmp_path, monkeypatch):
    """App bound to a throwaway SQLite file; tables are created by the lifespan hook."""
    monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(db_module, "_ENGINE", None)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def profile(client):
    body = {
        "id": 1,
        "name": "Sam",
        "sex": "male",
        "age": 30,
        "height_cm": 180,
        "weight_kg": 80,
        "activity_level": "moderate",
        "weight_goal": "maintain",
        "carb_percentage": 0.4,
        "protein_percentage": 0.3,
        "fat_percentage": 0.3,
    }
    r = client.post("/api/v1/users", json=body)
    assert r.status_code == 201, r.text
    return r.json()
