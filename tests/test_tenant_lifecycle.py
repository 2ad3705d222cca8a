from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError

from app.models.tenant import Tenant
from app.services import tenant_lifecycle
from app.services.tenant_status import TenantStatus


def _tenant_data(now, **overrides):
    data = {
        "name": "Ada Lovelace",
        "phone": "555-0100",
        "apartment_number": "101",
        "checkin_date": now - timedelta(days=3),
        "rental_basis": "monthly",
        "rent_amount": 1000.0,
    }
    data.update(overrides)
    return data


def test_create_derives_status_and_total(db, now):
    tenant = tenant_lifecycle.create_tenant(
        db, _tenant_data(now, rental_basis="daily", rent_amount=100.0), now=now
    )
    assert tenant.status == TenantStatus.ACTIVE.value
    assert tenant.total_rent == 300.0
    assert tenant.rental_period_start == tenant.checkin_date
    assert tenant.rental_period_end is None


def test_create_keeps_explicit_rental_period(db, now):
    start = now - timedelta(days=10)
    tenant = tenant_lifecycle.create_tenant(db, _tenant_data(now, rental_period_start=start), now=now)
    assert tenant.rental_period_start == start


def test_create_with_future_checkin_is_pending(db, now):
    tenant = tenant_lifecycle.create_tenant(db, _tenant_data(now, checkin_date=now + timedelta(days=1)), now=now)
    assert tenant.status == TenantStatus.PENDING.value


def test_update_rederives_status(db, now):
    tenant = tenant_lifecycle.create_tenant(db, _tenant_data(now), now=now)
    tenant = tenant_lifecycle.update_tenant(db, tenant, {"checkout_date": now - timedelta(hours=1)}, now=now)
    assert tenant.status == TenantStatus.INACTIVE.value


def test_checkout_defaults_to_now(db, now):
    tenant = tenant_lifecycle.create_tenant(db, _tenant_data(now), now=now)
    tenant = tenant_lifecycle.checkout_tenant(db, tenant, now=now)
    assert tenant.checkout_date == now
    assert tenant.status == TenantStatus.INACTIVE.value


def test_future_checkout_stays_active(db, now):
    tenant = tenant_lifecycle.create_tenant(db, _tenant_data(now), now=now)
    tenant = tenant_lifecycle.checkout_tenant(db, tenant, now + timedelta(days=2), now=now)
    assert tenant.status == TenantStatus.ACTIVE.value


def test_synchronize_updates_stale_statuses(db, now):
    pending = tenant_lifecycle.create_tenant(db, _tenant_data(now, checkin_date=now + timedelta(days=1)), now=now)
    leaving = tenant_lifecycle.create_tenant(
        db, _tenant_data(now, apartment_number="102", checkout_date=now + timedelta(days=1)), now=now
    )
    steady = tenant_lifecycle.create_tenant(db, _tenant_data(now, apartment_number="103"), now=now)

    later = now + timedelta(days=2)
    result = tenant_lifecycle.synchronize_all(db, now=later)

    assert result.updated == 2
    assert result.failed == []
    assert db.get(Tenant, pending.id).status == TenantStatus.ACTIVE.value
    assert db.get(Tenant, leaving.id).status == TenantStatus.INACTIVE.value
    assert db.get(Tenant, steady.id).status == TenantStatus.ACTIVE.value


def test_synchronize_is_idempotent(db, now):
    tenant_lifecycle.create_tenant(db, _tenant_data(now, checkin_date=now + timedelta(days=1)), now=now)
    tenant_lifecycle.create_tenant(
        db, _tenant_data(now, apartment_number="102", checkout_date=now + timedelta(hours=5)), now=now
    )

    later = now + timedelta(days=3)
    first = tenant_lifecycle.synchronize_all(db, now=later)
    second = tenant_lifecycle.synchronize_all(db, now=later)

    assert first.updated == 2
    assert second.updated == 0
    assert second.failed == []


def test_synchronize_on_empty_store(db, now):
    result = tenant_lifecycle.synchronize_all(db, now=now)
    assert result.as_dict() == {"updated": 0, "failed": []}


def test_synchronize_isolates_failures(db, now, monkeypatch):
    broken = tenant_lifecycle.create_tenant(db, _tenant_data(now, checkin_date=now + timedelta(days=1)), now=now)
    healthy = tenant_lifecycle.create_tenant(
        db, _tenant_data(now, apartment_number="102", checkin_date=now + timedelta(days=1)), now=now
    )
    broken_id = broken.id

    persist = tenant_lifecycle._persist_status

    def flaky_persist(session, tenant, status, at):
        if tenant.id == broken_id:
            raise OperationalError("UPDATE tenants", {}, Exception("disk I/O error"))
        persist(session, tenant, status, at)

    monkeypatch.setattr(tenant_lifecycle, "_persist_status", flaky_persist)

    result = tenant_lifecycle.synchronize_all(db, now=now + timedelta(days=2))

    assert result.updated == 1
    assert len(result.failed) == 1
    assert result.failed[0]["id"] == str(broken_id)
    assert "disk I/O error" in result.failed[0]["error"]
    assert db.get(Tenant, healthy.id).status == TenantStatus.ACTIVE.value
    assert db.get(Tenant, broken_id).status == TenantStatus.PENDING.value


def test_synchronize_refreshes_daily_total(db, now):
    tenant = tenant_lifecycle.create_tenant(
        db,
        _tenant_data(now, rental_basis="daily", rent_amount=50.0, checkout_date=now + timedelta(days=1)),
        now=now,
    )
    assert tenant.total_rent == 200.0

    tenant_lifecycle.synchronize_all(db, now=now + timedelta(days=5))
    # Stay ended at checkout: 3 days before now plus 1 after
    assert db.get(Tenant, tenant.id).total_rent == pytest.approx(200.0)


def test_synchronize_isolates_rows_with_bad_values(db, now):
    good = tenant_lifecycle.create_tenant(db, _tenant_data(now), now=now)
    bad = tenant_lifecycle.create_tenant(db, _tenant_data(now, apartment_number="102"), now=now)
    good.status = "pending"
    bad.status = "pending"
    # Written past the schemas, as another client of the table could
    bad.rental_basis = "weekly"
    db.commit()

    result = tenant_lifecycle.synchronize_all(db, now=now)

    assert result.updated == 1
    assert len(result.failed) == 1
    assert result.failed[0]["id"] == str(bad.id)
    assert "weekly" in result.failed[0]["error"]
    assert db.get(Tenant, good.id).status == TenantStatus.ACTIVE.value
    assert db.get(Tenant, bad.id).status == "pending"


def test_update_keeps_explicit_rental_period(db, now):
    start = now - timedelta(days=10)
    end = now + timedelta(days=20)
    tenant = tenant_lifecycle.create_tenant(
        db, _tenant_data(now, rental_period_start=start, rental_period_end=end), now=now
    )

    tenant = tenant_lifecycle.update_tenant(db, tenant, {"remarks": "Quiet floor"}, now=now)
    assert tenant.rental_period_start == start
    assert tenant.rental_period_end == end


def test_update_redefaults_period_when_stay_dates_change(db, now):
    tenant = tenant_lifecycle.create_tenant(
        db, _tenant_data(now, rental_period_start=now - timedelta(days=10)), now=now
    )
    checkin = now - timedelta(days=1)
    tenant = tenant_lifecycle.update_tenant(db, tenant, {"checkin_date": checkin}, now=now)
    assert tenant.rental_period_start == checkin


def test_partial_period_defaults_the_other_bound(db, now):
    checkout = now + timedelta(days=5)
    start = now - timedelta(days=10)
    tenant = tenant_lifecycle.create_tenant(
        db, _tenant_data(now, checkout_date=checkout, rental_period_start=start), now=now
    )
    assert tenant.rental_period_start == start
    assert tenant.rental_period_end == checkout


def test_checkout_moves_period_end(db, now):
    tenant = tenant_lifecycle.create_tenant(
        db, _tenant_data(now, rental_period_start=now - timedelta(days=10)), now=now
    )
    tenant = tenant_lifecycle.checkout_tenant(db, tenant, now=now)
    assert tenant.rental_period_end == now
    assert tenant.rental_period_start == now - timedelta(days=10)
