import os

# Test database setup: must happen before the app reads its settings
TEST_DB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".out")
TEST_DB_PATH = os.path.join(TEST_DB_DIR, "tests.db")
os.makedirs(TEST_DB_DIR, exist_ok=True)
for suffix in ("", "-wal", "-shm"):
    if os.path.exists(TEST_DB_PATH + suffix):
        os.remove(TEST_DB_PATH + suffix)

os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["ADMIN_TOKEN"] = ""
os.environ["DATABASE_BUSY_TIMEOUT_MS"] = "10000"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func

from room_reservations.main import app
from room_reservations.database import Base, SessionLocal, engine, init_database

API = "/api/v1"

# Create test tables
init_database()

client = TestClient(app)


# Fixtures
@pytest.fixture(autouse=True)
def clear_db():
    """Clear all data from all tables before each test"""
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def api():
    return client


@pytest.fixture
def test_db():
    """Provide a database session for testing"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def count_rows(model) -> int:
    """Row count seen by a fresh session, so no stale snapshot is reused."""
    with SessionLocal() as db:
        return db.query(func.count(model.id)).scalar()


@pytest.fixture
def room_data():
    return {"name": "Sala 101", "capacity": 30, "building": "Edificio 1"}


@pytest.fixture
def time_slot_data():
    return {"start": "08:00", "end": "09:30", "days": ["L", "M", "X", "J", "V"]}


@pytest.fixture
def room(room_data):
    response = client.post(f"{API}/rooms", json=room_data)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def other_room():
    response = client.post(
        f"{API}/rooms", json={"name": "Laboratorio A", "capacity": 20, "building": "Edificio 2"}
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def time_slot(time_slot_data):
    response = client.post(f"{API}/time-slots", json=time_slot_data)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def reservation_data(room, time_slot):
    return {
        "room_id": room["id"],
        "time_slot_id": time_slot["id"],
        "date": "2024-03-04",
        "user_id": "a@b.com",
        "purpose": "class",
    }
