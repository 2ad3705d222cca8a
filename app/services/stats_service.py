"""
Dashboard and reporting aggregates

  dashboard_stats    - tenant counts, revenue and average rent
  recent_tenants     - newest tenants for the dashboard
  maintenance_stats  - per-status / per-priority counts, cost, overdue count
  inventory_stats    - per-category totals and condition score, overall totals

All figures are computed in SQL over the current store contents.

Note the maintenance overview counts a request as overdue once it has been
open for a flat MAINTENANCE_OVERDUE_DAYS window, regardless of priority.
This differs from MaintenanceRequest.is_overdue_at, which uses per-priority
thresholds. Both definitions are kept as they are.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.core.config import settings
from app.db.base import utcnow
from app.models.inventory import CONDITION_SCORES, InventoryItem
from app.models.maintenance import (
    OPEN_STATUSES,
    MaintenancePriority,
    MaintenanceRequest,
    MaintenanceStatus,
)
from app.models.tenant import Tenant
from app.schemas.inventory import CategoryStats, InventoryStats, InventoryTotals
from app.schemas.maintenance import MaintenanceStats
from app.schemas.tenant import DashboardStats, TenantSummary
from app.services.tenant_status import TenantStatus, SECONDS_PER_DAY

logger = logging.getLogger(__name__)


def _count_where(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


# ── Tenants ───────────────────────────────────────────────────────────────────

def dashboard_stats(db: Session) -> DashboardStats:
    row = db.query(
        func.count(Tenant.id),
        _count_where(Tenant.status == TenantStatus.ACTIVE.value),
        func.coalesce(func.sum(Tenant.total_rent), 0.0),
        func.avg(Tenant.rent_amount),
    ).one()

    total, active, revenue, average = row
    return DashboardStats(
        total_tenants=total or 0,
        active_tenants=int(active or 0),
        total_revenue=float(revenue or 0.0),
        # No tenants means no average; report 0
        average_rent=float(average) if average is not None else 0.0,
    )


def recent_tenants(db: Session, limit: Optional[int] = None) -> List[dict]:
    tenants = db.query(Tenant)\
        .order_by(Tenant.created_at.desc())\
        .limit(limit or settings.RECENT_TENANTS_LIMIT)\
        .all()
    return [TenantSummary.model_validate(t).model_dump(mode="json") for t in tenants]


# ── Maintenance ───────────────────────────────────────────────────────────────

def maintenance_stats(db: Session, now: Optional[datetime] = None) -> MaintenanceStats:
    now = now or utcnow()
    overdue_cutoff = now - timedelta(days=settings.MAINTENANCE_OVERDUE_DAYS)

    row = db.query(
        func.count(MaintenanceRequest.id),
        _count_where(MaintenanceRequest.status == MaintenanceStatus.PENDING.value),
        _count_where(MaintenanceRequest.status == MaintenanceStatus.IN_PROGRESS.value),
        _count_where(MaintenanceRequest.status == MaintenanceStatus.COMPLETED.value),
        _count_where(MaintenanceRequest.priority == MaintenancePriority.URGENT.value),
        func.coalesce(func.sum(MaintenanceRequest.actual_cost), 0.0),
    ).one()

    overdue = db.query(func.count(MaintenanceRequest.id))\
        .filter(
            MaintenanceRequest.status.in_(OPEN_STATUSES),
            MaintenanceRequest.reported_date <= overdue_cutoff,
        ).scalar() or 0

    total, pending, in_progress, completed, urgent, cost = row
    return MaintenanceStats(
        total_requests=total or 0,
        pending_requests=int(pending),
        in_progress_requests=int(in_progress),
        completed_requests=int(completed),
        urgent_requests=int(urgent),
        total_cost=float(cost or 0.0),
        overdue_requests=overdue,
    )


# ── Inventory ─────────────────────────────────────────────────────────────────

def _condition_score():
    # Unknown conditions score as damaged
    return case(
        *[(InventoryItem.condition == name, score) for name, score in CONDITION_SCORES.items()],
        else_=1,
    )


def inventory_stats(db: Session, now: Optional[datetime] = None) -> InventoryStats:
    now = now or utcnow()

    rows = db.query(
        InventoryItem.category,
        func.coalesce(func.sum(InventoryItem.count), 0),
        func.coalesce(func.sum(InventoryItem.purchase_price * InventoryItem.count), 0.0),
        func.avg(_condition_score()),
    ).group_by(InventoryItem.category)\
        .order_by(InventoryItem.category)\
        .all()

    category_stats = [
        CategoryStats(
            category=category,
            total_items=int(items),
            total_value=float(value),
            average_condition_score=round(float(score), 2) if score is not None else 0.0,
        )
        for category, items, value, score in rows
    ]

    total_items, total_value = db.query(
        func.coalesce(func.sum(InventoryItem.count), 0),
        func.coalesce(func.sum(InventoryItem.purchase_price * InventoryItem.count), 0.0),
    ).one()

    # Date arithmetic differs per backend, so ages are averaged here
    purchase_dates = [
        d for (d,) in db.query(InventoryItem.purchase_date)
        .filter(InventoryItem.purchase_date.isnot(None))
        .all()
    ]
    average_age = None
    if purchase_dates:
        seconds = sum((now - d).total_seconds() for d in purchase_dates) / len(purchase_dates)
        average_age = round(seconds / SECONDS_PER_DAY, 2)

    return InventoryStats(
        category_stats=category_stats,
        total_stats=InventoryTotals(
            total_items=int(total_items),
            total_value=float(total_value),
            average_age_days=average_age,
        ),
    )
