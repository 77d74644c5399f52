import pytest
from fastapi.testclient import TestClient

from restaurant_site.config import Settings
from restaurant_site.database import Database
from restaurant_site.main import create_app
from restaurant_site.storage import Storage

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Passw0rd!"


def make_settings(**overrides) -> Settings:
    values = {"database_url": "sqlite://", "session_secret": "test-session-secret"}
    values.update(overrides)
    return Settings(**values)


def booking_payload(table_id, location_id=None, **overrides):
    payload = {
        "customerName": "Jane Doe",
        "customerEmail": "jane@example.com",
        "customerPhone": "555-0100",
        "date": "2025-06-01",
        "time": "19:00",
        "partySize": 2,
        "tableId": table_id,
    }
    if location_id:
        payload["locationId"] = location_id
    payload.update(overrides)
    return payload


# ---------------------------
# Storage level
# ---------------------------

@pytest.fixture
def db():
    """A session on a fresh in-memory database"""
    database = Database(make_settings())
    database.init_db()
    session = database.SessionLocal()
    yield session
    session.close()
    database.dispose()


@pytest.fixture
def storage(db):
    return Storage(db)


@pytest.fixture
def floor(storage):
    """One location with a 2-top, a 4-top and an inactive 6-top"""
    location = storage.create_restaurant_location({"name": "Main Dining", "display_order": 1})
    small = storage.create_table({
        "name": "T1", "capacity": 2, "location_id": location.id, "x_position": 10, "y_position": 10,
    })
    large = storage.create_table({
        "name": "T2", "capacity": 4, "location_id": location.id, "x_position": 100, "y_position": 10,
    })
    retired = storage.create_table({
        "name": "T3", "capacity": 6, "location_id": location.id, "x_position": 200, "y_position": 10,
        "is_active": False,
    })
    return {"location": location, "small": small, "large": large, "retired": retired}


# ---------------------------
# HTTP level
# ---------------------------

@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    response = client.post("/api/auth/register", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 201
    return client


@pytest.fixture
def app_floor(app):
    """Location and tables created straight through storage; returns their ids"""
    with app.state.database.SessionLocal() as session:
        storage = Storage(session)
        location = storage.create_restaurant_location({"name": "Main Dining", "display_order": 1})
        small = storage.create_table({
            "name": "T1", "capacity": 2, "location_id": location.id, "x_position": 10, "y_position": 10,
        })
        large = storage.create_table({
            "name": "T2", "capacity": 4, "location_id": location.id, "x_position": 100, "y_position": 10,
        })
        return {"location": location.id, "small": small.id, "large": large.id}
