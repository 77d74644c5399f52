"""
Double-booking behaviour under both booking conflict policies
"""
import pytest
from fastapi.testclient import TestClient

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, booking_payload, make_settings
from restaurant_site.main import create_app
from restaurant_site.storage import Storage


@pytest.fixture
def strict_client():
    app = create_app(make_settings(booking_conflict_policy="strict"))
    with TestClient(app) as client:
        client.post("/api/auth/register", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
        with app.state.database.SessionLocal() as session:
            storage = Storage(session)
            location = storage.create_restaurant_location({"name": "Main Dining"})
            table = storage.create_table({
                "name": "T1", "capacity": 2, "location_id": location.id, "x_position": 0, "y_position": 0,
            })
            table_id = table.id
        yield client, table_id


def test_oversized_party_is_accepted(client, app_floor):
    """A party of four on a two-top is only advisory"""
    response = client.post("/api/bookings", json=booking_payload(app_floor["small"], partySize=4))

    assert response.status_code == 201
    assert response.json()["status"] == "unconfirmed"
    assert response.json()["partySize"] == 4


def test_same_slot_can_be_confirmed_twice(admin_client, app_floor):
    """Two bookings for one table and time both end up confirmed"""
    first = admin_client.post("/api/bookings", json=booking_payload(app_floor["small"]))
    second = admin_client.post("/api/bookings", json=booking_payload(app_floor["small"], customerName="John Roe"))
    assert first.status_code == second.status_code == 201
    assert first.json()["status"] == second.json()["status"] == "unconfirmed"

    for booking in (first.json(), second.json()):
        response = admin_client.patch(f"/api/admin/bookings/{booking['id']}", json={"status": "confirmed"})
        assert response.status_code == 200
        assert response.json()["status"] == "confirmed"

    confirmed = admin_client.get("/api/bookings/date/2025-06-01").json()
    assert len(confirmed) == 2
    assert {b["tableId"] for b in confirmed} == {app_floor["small"]}


def test_strict_rejects_oversized_party(strict_client):
    client, table_id = strict_client
    response = client.post("/api/bookings", json=booking_payload(table_id, partySize=4))

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid booking data"
    assert response.json()["errors"][0]["path"] == "partySize"


def test_strict_rejects_second_confirmation(strict_client):
    client, table_id = strict_client
    first = client.post("/api/bookings", json=booking_payload(table_id)).json()
    second = client.post(
        "/api/bookings", json=booking_payload(table_id, customerName="John Roe")
    ).json()

    response = client.patch(f"/api/admin/bookings/{first['id']}", json={"status": "confirmed"})
    assert response.status_code == 200

    response = client.patch(f"/api/admin/bookings/{second['id']}", json={"status": "confirmed"})
    assert response.status_code == 409
    assert response.json() == {
        "message": "Table is already booked for this date and time",
        "bookingId": first["id"],
    }

    # a new request for the held slot is turned away too
    response = client.post("/api/bookings", json=booking_payload(table_id))
    assert response.status_code == 409

    confirmed = client.get("/api/bookings/date/2025-06-01").json()
    assert [b["id"] for b in confirmed] == [first["id"]]
