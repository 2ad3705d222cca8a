import uuid
from datetime import timedelta

from app.db.base import utcnow


def _create(client, **overrides):
    payload = {
        "apartment_number": "5",
        "category": "furniture",
        "type": "Sofa",
        "count": 1,
        "condition": "good",
        "brand": "Nordic",
        "purchase_price": 450,
    }
    payload.update(overrides)
    response = client.post("/api/inventory/", json=payload)
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def test_create_item(client):
    item = _create(client, purchase_date=(utcnow() - timedelta(days=9, hours=12)).isoformat())
    assert item["status"] == "available"
    assert item["age"] == 10
    assert item["warranty_expired"] is None
    assert item["maintenance_due"] is False


def test_count_bounds(client):
    for count in (0, 1001):
        response = client.post("/api/inventory/", json={
            "apartment_number": "5",
            "type": "Chair",
            "count": count,
        })
        assert response.status_code == 400
        assert any(e.startswith("count:") for e in response.json()["errors"])


def test_get_unknown_item_is_404(client):
    response = client.get(f"/api/inventory/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["message"] == "Inventory item not found"


def test_warranty_flag(client):
    item = _create(client, warranty_expiry=(utcnow() - timedelta(days=1)).isoformat())
    assert item["warranty_expired"] is True


def test_schedule_maintenance(client):
    item = _create(client)
    next_date = (utcnow() + timedelta(days=30)).isoformat()
    response = client.patch(f"/api/inventory/{item['id']}/maintenance", json={"next_maintenance_date": next_date})
    data = response.json()["data"]
    assert response.json()["message"] == "Maintenance schedule updated successfully"
    assert data["last_maintenance"] is not None
    assert data["next_maintenance"] is not None
    assert data["maintenance_due"] is False


def test_maintenance_due_excludes_retired(client):
    past = (utcnow() - timedelta(days=1)).isoformat()
    older = (utcnow() - timedelta(days=3)).isoformat()
    due = _create(client, type="Boiler", next_maintenance=past)
    overdue = _create(client, type="Washer", next_maintenance=older)
    _create(client, type="Heater", next_maintenance=past, status="retired")
    _create(client, type="Lamp", next_maintenance=(utcnow() + timedelta(days=3)).isoformat())

    data = client.get("/api/inventory/maintenance/due").json()["data"]
    assert [i["id"] for i in data] == [overdue["id"], due["id"]]
    assert all(i["maintenance_due"] for i in data)


def test_change_status_and_condition(client):
    item = _create(client)

    response = client.patch(f"/api/inventory/{item['id']}/status", json={"status": "in-use"})
    assert response.json()["data"]["status"] == "in-use"

    response = client.patch(f"/api/inventory/{item['id']}/condition", json={"condition": "damaged"})
    assert response.json()["data"]["condition"] == "damaged"

    response = client.patch(f"/api/inventory/{item['id']}/status", json={"status": "lost"})
    assert response.status_code == 400


def test_update_and_delete(client):
    item = _create(client)
    response = client.put(f"/api/inventory/{item['id']}", json={"count": 3, "location": "Living room"})
    assert response.json()["data"]["count"] == 3
    assert response.json()["data"]["location"] == "Living room"

    assert client.delete(f"/api/inventory/{item['id']}").status_code == 200
    assert client.get(f"/api/inventory/{item['id']}").status_code == 404


def test_by_category_and_apartment(client):
    _create(client, category="appliances", type="Fridge", apartment_number="7")
    _create(client, category="utensils", type="Pan", apartment_number="7")
    _create(client, category="utensils", type="Pot", apartment_number="8")

    body = client.get("/api/inventory/category/utensils").json()
    assert body["pagination"]["total_items"] == 2

    apartment = client.get("/api/inventory/apartment/7").json()["data"]
    assert [i["category"] for i in apartment] == ["appliances", "utensils"]

    assert client.get("/api/inventory/category/vehicles").status_code == 400


def test_search(client):
    _create(client, type="Microwave", brand="Acme")
    _create(client, type="Toaster", brand="Other")

    data = client.get("/api/inventory/search/acm").json()["data"]
    assert [i["type"] for i in data] == ["Microwave"]


def test_bulk_update_reports_each_entry(client):
    first = _create(client, type="Desk")
    second = _create(client, type="Bed")

    response = client.post("/api/inventory/bulk-update", json={"items": [
        {"id": first["id"], "updates": {"condition": "fair", "count": 2}},
        {"id": second["id"], "updates": {"count": 0}},
        {"id": str(uuid.uuid4()), "updates": {"count": 2}},
        {"id": "garbage", "updates": {}},
    ]})
    assert response.status_code == 200
    results = response.json()["data"]

    assert [r["success"] for r in results] == [True, False, False, False]
    assert results[0]["data"]["condition"] == "fair"
    assert any(e.startswith("count:") for e in results[1]["errors"])
    assert results[2]["errors"] == ["Inventory item not found"]
    assert results[3]["errors"] == ["Invalid item id"]

    # Failed entries leave their item untouched
    assert client.get(f"/api/inventory/{second['id']}").json()["data"]["count"] == 1


def test_stats_overview(client):
    _create(client, condition="excellent")
    _create(client, condition="poor", type="Chair")

    data = client.get("/api/inventory/stats/overview").json()["data"]
    assert data["category_stats"][0]["average_condition_score"] == 3.5
    assert data["total_stats"]["total_items"] == 2
    assert data["total_stats"]["total_value"] == 900
