"""
Tenant Lifecycle Service

Responsibilities:
  • default_rental_period / apply_derived_fields - refresh period, status and total rent before a save
  • create_tenant / update_tenant / checkout_tenant - the tenant save paths
  • synchronize_all - batch recompute of stored statuses as time passes

Every save path derives status from the tenant's dates and `now`, so stored
and derived status agree right after each write. Between writes the stored
value goes stale as the clock moves; synchronize_all brings it back in line.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.db.base import utcnow
from app.models.tenant import Tenant
from app.services.tenant_status import calculate_status, calculate_total_rent

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    updated: int = 0
    failed: List[Dict[str, str]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {"updated": self.updated, "failed": self.failed}


# ── Derivation on save ────────────────────────────────────────────────────────

# Period bound -> stay date it defaults to
PERIOD_DEFAULTS = (
    ("rental_period_start", "checkin_date"),
    ("rental_period_end", "checkout_date"),
)


def default_rental_period(tenant: Tenant, data: Dict[str, Any], creating: bool = False) -> Tenant:
    """
    Fill period bounds that were not given from the matching stay date.

    A bound is only defaulted on create, when it is sent as null, or when its
    stay date changes; an explicit period survives unrelated updates.
    """
    for period_field, date_field in PERIOD_DEFAULTS:
        if data.get(period_field) is not None:
            continue
        if creating or period_field in data or date_field in data:
            setattr(tenant, period_field, getattr(tenant, date_field))
    return tenant


def apply_derived_fields(tenant: Tenant, now: datetime) -> Tenant:
    """Overwrite status and total rent from the tenant's current dates."""
    tenant.total_rent = calculate_total_rent(
        tenant.rental_basis,
        tenant.rent_amount,
        tenant.checkin_date,
        tenant.checkout_date,
        now,
    )
    tenant.status = calculate_status(tenant.checkin_date, tenant.checkout_date, now).value
    return tenant


def create_tenant(db: Session, data: Dict[str, Any], now: Optional[datetime] = None) -> Tenant:
    now = now or utcnow()
    tenant = Tenant(**data)
    default_rental_period(tenant, data, creating=True)
    apply_derived_fields(tenant, now)

    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    logger.info(f"[TENANT] Created {tenant.id} apt={tenant.apartment_number} status={tenant.status}")
    return tenant


def update_tenant(db: Session, tenant: Tenant, data: Dict[str, Any], now: Optional[datetime] = None) -> Tenant:
    now = now or utcnow()
    for key, value in data.items():
        setattr(tenant, key, value)
    default_rental_period(tenant, data)
    apply_derived_fields(tenant, now)

    db.commit()
    db.refresh(tenant)
    logger.info(f"[TENANT] Updated {tenant.id} status={tenant.status}")
    return tenant


def checkout_tenant(
    db: Session,
    tenant: Tenant,
    checkout_date: Optional[datetime] = None,
    now: Optional[datetime] = None,
) -> Tenant:
    """Record a check-out (defaults to now); a future date keeps the tenant active until it passes."""
    now = now or utcnow()
    tenant.checkout_date = checkout_date or now
    default_rental_period(tenant, {"checkout_date": tenant.checkout_date})
    apply_derived_fields(tenant, now)

    db.commit()
    db.refresh(tenant)
    logger.info(f"[TENANT] Checked out {tenant.id} on {tenant.checkout_date.isoformat()} status={tenant.status}")
    return tenant


# ── Batch synchronisation ─────────────────────────────────────────────────────

def _persist_status(db: Session, tenant: Tenant, status: str, now: datetime) -> None:
    tenant.status = status
    tenant.total_rent = tenant.calculated_total_rent(now)
    db.commit()


def synchronize_all(db: Session, now: Optional[datetime] = None) -> SyncResult:
    """
    Recompute status for every tenant and persist the ones that drifted.

    Each change is committed on its own; a failure is rolled back, logged and
    reported, and the pass continues with the next tenant.
    """
    now = now or utcnow()
    result = SyncResult()

    tenant_ids = [row[0] for row in db.query(Tenant.id).all()]
    for tenant_id in tenant_ids:
        tenant = db.get(Tenant, tenant_id)
        if tenant is None:
            # Deleted since the id list was read
            continue

        previous = tenant.status
        try:
            computed = calculate_status(tenant.checkin_date, tenant.checkout_date, now).value
            if previous == computed:
                continue
            _persist_status(db, tenant, computed, now)
        except Exception as exc:
            # A bad row must not stop the pass
            db.rollback()
            logger.error(f"[SYNC] Failed to update tenant {tenant_id}: {exc}", exc_info=True)
            result.failed.append({"id": str(tenant_id), "error": str(exc)})
            continue

        result.updated += 1
        logger.info(f"[SYNC] Tenant {tenant_id}: {previous} -> {computed}")

    if result.updated or result.failed:
        logger.info(f"[SYNC] Updated {result.updated} tenant statuses, {len(result.failed)} failed")
    return result
