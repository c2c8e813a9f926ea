import random

import pytest
from fastapi.testclient import TestClient

from main import create_app
from mission_engine import MissionEngine
from mission_scheduler import MissionScheduler


@pytest.fixture
def engine():
    return MissionEngine(rng=random.Random(3))


@pytest.fixture
def client(engine):
    """API client over a private engine; the driver ticks too slowly to interfere."""
    scheduler = MissionScheduler(engine, interval=60)
    with TestClient(create_app(engine, scheduler)) as client:
        yield client


def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["cruise_speed_kmh"] == 42
    assert data["tick_interval"] == 60


def test_list_orders(client):
    response = client.get("/orders")
    assert response.status_code == 200
    orders = response.json()
    assert len(orders) == 6
    assert orders[0]["id"] == "ORD-4821"
    assert orders[0]["status"] == "Pending"


def test_create_order_without_id(client):
    response = client.post("/orders", json={
        "package_type": "Blood Units", "weight": "1.1 kg",
        "pickup": "Hospital B", "delivery": "Lab Center G",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["applied"] is True
    assert data["order"]["id"] == "ORD-4827"
    assert len(client.get("/orders").json()) == 7


def test_add_order_with_id(client):
    response = client.post("/orders", json={
        "id": "EXT-1", "package_type": "Keys", "weight": "0.1 kg",
        "pickup": "HQ Tower", "delivery": "Depot C", "status": "Approved",
    })
    assert response.json()["order"]["status"] == "Approved"
    assert client.get("/orders").json()[-1]["id"] == "EXT-1"


def test_add_order_bad_shape(client):
    response = client.post("/orders", json={"package_type": "Keys"})
    assert response.status_code == 422


def test_approve_and_reject(client):
    assert client.post("/orders/ORD-4822/approve").json()["applied"] is True
    assert client.post("/orders/ORD-4823/reject").json()["applied"] is True
    orders = {o["id"]: o for o in client.get("/orders").json()}
    assert orders["ORD-4822"]["status"] == "Approved"
    assert "ORD-4823" not in orders


def test_unknown_order_is_silent_noop(client):
    for action in ("approve", "reject", "start"):
        response = client.post(f"/orders/ORD-0000/{action}")
        assert response.status_code == 200
        assert response.json()["applied"] is False
    assert len(client.get("/orders").json()) == 6


def test_start_mission_flow(client, engine):
    assert client.post("/orders/ORD-4821/start").json()["applied"] is False
    client.post("/orders/ORD-4821/approve")

    response = client.post("/orders/ORD-4821/start")
    data = response.json()
    assert data["applied"] is True
    assert len(data["mission"]["route"]) == 51

    mission = client.get("/mission").json()
    assert mission["active_mission_order_id"] == "ORD-4821"
    assert client.get("/aircraft").json()["status"] == "In Flight"

    engine.advance()
    assert client.get("/mission").json()["mission"]["progress"] == 1.5


def test_mission_route(client):
    assert client.get("/mission/route").json()["features"] == []
    client.post("/orders/ORD-4821/approve")
    client.post("/orders/ORD-4821/start")

    features = client.get("/mission/route").json()["features"]
    assert features[0]["geometry"]["type"] == "LineString"
    assert features[1]["geometry"]["coordinates"] == [80.2707, 13.0827]


def test_emergency_stop(client):
    assert client.post("/mission/emergency-stop").json()["applied"] is False
    client.post("/orders/ORD-4821/approve")
    client.post("/orders/ORD-4821/start")

    assert client.post("/mission/emergency-stop").json()["applied"] is True
    state = client.get("/state").json()
    assert state["active_mission_order_id"] is None
    assert state["mission"]["route"] == []
    assert state["orders"][0]["status"] == "Pending"
    assert state["aircraft"]["payload_weight"] == 0


def test_return_home(client, engine):
    assert client.post("/mission/return-home").json()["applied"] is False
    client.post("/orders/ORD-4821/approve")
    client.post("/orders/ORD-4821/start")

    assert client.post("/mission/return-home").json()["applied"] is True
    assert client.get("/mission").json()["mission"]["progress"] == 95
    while engine.is_active:
        engine.advance()
    assert client.get("/orders").json()[0]["status"] == "Delivered"


def test_toggle_camera(client):
    response = client.post("/aircraft/camera")
    assert response.json() == {"applied": True, "camera_active": False}
    assert client.get("/aircraft").json()["camera_active"] is False


def test_locations(client):
    locations = client.get("/locations").json()
    assert len(locations) == 12
    assert locations["Warehouse A"] == {"lat": 13.0827, "lng": 80.2707}
