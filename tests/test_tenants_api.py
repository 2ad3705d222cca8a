import uuid
from datetime import timedelta

from app.db.base import utcnow


def _payload(**overrides):
    payload = {
        "name": "Grace Hopper",
        "phone": "555-0199",
        "email": "Grace@Example.com",
        "apartment_number": "204",
        "checkin_date": (utcnow() - timedelta(days=1, hours=12)).isoformat(),
        "rental_basis": "monthly",
        "rent_amount": 1500,
    }
    payload.update(overrides)
    return payload


def _create(client, **overrides):
    response = client.post("/api/tenants/", json=_payload(**overrides))
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_create_tenant(client):
    tenant = _create(client)
    assert tenant["status"] == "active"
    assert tenant["email"] == "grace@example.com"
    assert tenant["total_rent"] == 1500
    assert tenant["rental_duration"] == 2


def test_create_tenant_with_utc_suffix(client):
    checkin = (utcnow() + timedelta(days=4)).replace(microsecond=0).isoformat() + "Z"
    tenant = _create(client, checkin_date=checkin)
    assert tenant["status"] == "pending"


def test_create_tenant_validation_errors(client):
    response = client.post("/api/tenants/", json=_payload(email="not-an-email", rent_amount=-5, rental_basis="weekly"))
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    assert any(e.startswith("email: Please enter a valid email") for e in body["errors"])
    assert any(e.startswith("rent_amount:") for e in body["errors"])
    assert any(e.startswith("rental_basis:") for e in body["errors"])


def test_create_tenant_missing_required(client):
    payload = _payload()
    del payload["checkin_date"]
    response = client.post("/api/tenants/", json=payload)
    assert response.status_code == 400
    assert any(e.startswith("checkin_date:") for e in response.json()["errors"])


def test_get_unknown_tenant_is_404(client):
    response = client.get(f"/api/tenants/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Tenant not found"}


def test_list_tenants_paginates(client):
    for i in range(3):
        _create(client, apartment_number=f"30{i}")

    response = client.get("/api/tenants/", params={"limit": 2})
    body = response.json()
    assert response.status_code == 200
    assert len(body["data"]) == 2
    assert body["pagination"] == {
        "current_page": 1,
        "total_pages": 2,
        "total_items": 3,
        "items_per_page": 2,
    }


def test_list_tenants_search_and_filter(client):
    _create(client, name="Alan Turing", apartment_number="1A")
    _create(client, name="Edsger Dijkstra", apartment_number="2B",
            checkin_date=(utcnow() + timedelta(days=3)).isoformat())

    found = client.get("/api/tenants/", params={"search": "turing"}).json()["data"]
    assert [t["name"] for t in found] == ["Alan Turing"]

    pending = client.get("/api/tenants/", params={"status": "pending"}).json()["data"]
    assert [t["name"] for t in pending] == ["Edsger Dijkstra"]


def test_search_route(client):
    _create(client, name="Barbara Liskov", apartment_number="7C")
    response = client.get("/api/tenants/search/LISKOV")
    assert [t["apartment_number"] for t in response.json()["data"]] == ["7C"]


def test_tenants_by_apartment(client):
    _create(client, apartment_number="9Z")
    _create(client, apartment_number="8Y")
    data = client.get("/api/tenants/apartment/9Z").json()["data"]
    assert len(data) == 1


def test_update_tenant_rederives_status(client):
    tenant = _create(client)
    response = client.put(
        f"/api/tenants/{tenant['id']}",
        json={"checkout_date": (utcnow() - timedelta(hours=1)).isoformat()},
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "inactive"


def test_update_rejects_null_required_field(client):
    tenant = _create(client)
    response = client.put(f"/api/tenants/{tenant['id']}", json={"name": None})
    assert response.status_code == 400
    assert "name: name is required" in response.json()["errors"]


def test_checkout_without_body(client):
    tenant = _create(client)
    response = client.patch(f"/api/tenants/{tenant['id']}/checkout")
    body = response.json()
    assert response.status_code == 200
    assert body["message"] == "Tenant checked out successfully"
    assert body["data"]["status"] == "inactive"
    assert body["data"]["checkout_date"] is not None


def test_checkout_in_the_future_stays_active(client):
    tenant = _create(client)
    response = client.patch(
        f"/api/tenants/{tenant['id']}/checkout",
        json={"checkout_date": (utcnow() + timedelta(days=3)).isoformat()},
    )
    assert response.json()["data"]["status"] == "active"


def test_delete_tenant(client):
    tenant = _create(client)
    response = client.delete(f"/api/tenants/{tenant['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Tenant deleted successfully"
    assert client.get(f"/api/tenants/{tenant['id']}").status_code == 404


def test_update_statuses_reports_changes(client, db):
    from app.models.tenant import Tenant

    tenant = _create(client)
    # Simulate a status that went stale while no writes happened
    row = db.get(Tenant, uuid.UUID(tenant["id"]))
    row.status = "pending"
    db.commit()

    response = client.patch("/api/tenants/update-statuses")
    body = response.json()
    assert response.status_code == 200
    assert body["data"] == {"updated": 1, "failed": []}
    assert body["message"] == "Updated 1 tenant statuses"

    again = client.patch("/api/tenants/update-statuses").json()
    assert again["data"]["updated"] == 0


def test_dashboard(client):
    _create(client, rent_amount=100, apartment_number="1")
    _create(client, rent_amount=200, apartment_number="2")
    _create(client, rent_amount=300, apartment_number="3",
            checkout_date=(utcnow() - timedelta(hours=1)).isoformat())

    data = client.get("/api/tenants/stats/dashboard").json()["data"]
    assert data["total_tenants"] == 3
    assert data["active_tenants"] == 2
    assert data["total_revenue"] == 600
    assert data["average_rent"] == 200
    assert len(data["recent_tenants"]) == 3


def test_invalid_id_is_validation_error(client):
    response = client.get("/api/tenants/not-a-uuid")
    assert response.status_code == 400


def test_unknown_route(client):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json()["message"] == "Route not found"


def _make_stale(db, tenant_id, status):
    from app.models.tenant import Tenant

    row = db.get(Tenant, uuid.UUID(tenant_id))
    row.status = status
    db.commit()


def test_reads_resync_stale_statuses(client, db):
    tenant = _create(client)
    _make_stale(db, tenant["id"], "inactive")

    listed = client.get("/api/tenants/").json()["data"]
    assert [t["status"] for t in listed] == ["active"]

    _make_stale(db, tenant["id"], "inactive")
    dashboard = client.get("/api/tenants/stats/dashboard").json()["data"]
    assert dashboard["active_tenants"] == 1
    assert dashboard["recent_tenants"][0]["status"] == "active"


def test_reads_keep_stale_statuses_when_sync_disabled(client, db, monkeypatch):
    from app.core.config import settings

    monkeypatch.setattr(settings, "SYNC_STATUSES_ON_READ", False)
    tenant = _create(client)
    _make_stale(db, tenant["id"], "inactive")

    listed = client.get("/api/tenants/").json()["data"]
    assert [t["status"] for t in listed] == ["inactive"]

    dashboard = client.get("/api/tenants/stats/dashboard").json()["data"]
    assert dashboard["active_tenants"] == 0


def test_list_survives_row_with_unknown_basis(client, db):
    from app.models.tenant import Tenant

    tenant = _create(client)
    row = db.get(Tenant, uuid.UUID(tenant["id"]))
    row.rental_basis = "weekly"
    row.status = "pending"
    db.commit()

    response = client.get("/api/tenants/")
    assert response.status_code == 200
    assert response.json()["data"][0]["rental_basis"] == "weekly"
