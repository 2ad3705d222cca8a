"""
Tenant Routes
CRUD, check-out, status synchronisation and dashboard statistics
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
import logging

from app.core.config import settings
from app.database import get_db
from app.db.base import utcnow
from app.models.tenant import Tenant
from app.schemas.common import Pagination, paginate, success_response
from app.schemas.tenant import (
    CheckoutRequest,
    TenantCreate,
    TenantResponse,
    TenantUpdate,
)
from app.services import stats_service, tenant_lifecycle

router = APIRouter(tags=["tenants"])
logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "created_at": Tenant.created_at,
    "name": Tenant.name,
    "apartment_number": Tenant.apartment_number,
    "checkin_date": Tenant.checkin_date,
    "checkout_date": Tenant.checkout_date,
    "rent_amount": Tenant.rent_amount,
    "status": Tenant.status,
}


def _search_filter(query: str):
    needle = query.lower()
    return or_(
        func.lower(Tenant.name).contains(needle, autoescape=True),
        func.lower(Tenant.apartment_number).contains(needle, autoescape=True),
        func.lower(Tenant.phone).contains(needle, autoescape=True),
        func.lower(Tenant.email).contains(needle, autoescape=True),
    )


def _get_tenant_or_404(db: Session, tenant_id: UUID) -> Tenant:
    tenant = db.get(Tenant, tenant_id)
    if not tenant:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")
    return tenant


def _sync_before_read(db: Session) -> None:
    if settings.SYNC_STATUSES_ON_READ:
        tenant_lifecycle.synchronize_all(db)


# ==================== COLLECTION ====================

@router.get("/")
def list_tenants(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    search: str = "",
    status_filter: Optional[str] = Query(None, alias="status"),
    sort_by: str = "created_at",
    sort_order: str = "desc",
    db: Session = Depends(get_db),
):
    """List tenants with search, status filter, sorting and pagination"""
    _sync_before_read(db)

    query = db.query(Tenant)
    if search:
        query = query.filter(_search_filter(search))
    if status_filter:
        query = query.filter(Tenant.status == status_filter)

    column = SORTABLE_FIELDS.get(sort_by, Tenant.created_at)
    query = query.order_by(column.asc() if sort_order == "asc" else column.desc())

    page, limit, offset = paginate(page, limit, settings.MAX_PAGE_SIZE)
    total = query.count()
    tenants = query.offset(offset).limit(limit).all()

    now = utcnow()
    return success_response(
        [TenantResponse.serialize(t, now) for t in tenants],
        pagination=Pagination.build(page, limit, total).model_dump(),
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_tenant(tenant_in: TenantCreate, db: Session = Depends(get_db)):
    """Create a tenant; status and total rent are derived before saving"""
    tenant = tenant_lifecycle.create_tenant(db, tenant_in.model_dump())
    return success_response(TenantResponse.serialize(tenant), "Tenant created successfully")


@router.patch("/update-statuses")
def update_statuses(db: Session = Depends(get_db)):
    """Recompute every tenant's status from its dates"""
    result = tenant_lifecycle.synchronize_all(db)
    return success_response(result.as_dict(), f"Updated {result.updated} tenant statuses")


@router.get("/stats/dashboard")
def dashboard(db: Session = Depends(get_db)):
    """Dashboard totals plus the most recently added tenants"""
    _sync_before_read(db)

    stats = stats_service.dashboard_stats(db).model_dump()
    stats["recent_tenants"] = stats_service.recent_tenants(db)
    return success_response(stats)


@router.get("/apartment/{apartment_number}")
def tenants_by_apartment(apartment_number: str, db: Session = Depends(get_db)):
    tenants = db.query(Tenant)\
        .filter(Tenant.apartment_number == apartment_number)\
        .order_by(Tenant.checkin_date.desc())\
        .all()
    now = utcnow()
    return success_response([TenantResponse.serialize(t, now) for t in tenants])


@router.get("/search/{query}")
def search_tenants(query: str, db: Session = Depends(get_db)):
    tenants = db.query(Tenant)\
        .filter(_search_filter(query))\
        .limit(settings.SEARCH_RESULT_LIMIT)\
        .all()
    now = utcnow()
    return success_response([TenantResponse.serialize(t, now) for t in tenants])


# ==================== SINGLE TENANT ====================

@router.get("/{tenant_id}")
def get_tenant(tenant_id: UUID, db: Session = Depends(get_db)):
    tenant = _get_tenant_or_404(db, tenant_id)
    return success_response(TenantResponse.serialize(tenant))


@router.put("/{tenant_id}")
def update_tenant(tenant_id: UUID, tenant_update: TenantUpdate, db: Session = Depends(get_db)):
    """Apply the sent fields; status and total rent are re-derived"""
    tenant = _get_tenant_or_404(db, tenant_id)
    tenant = tenant_lifecycle.update_tenant(db, tenant, tenant_update.model_dump(exclude_unset=True))
    return success_response(TenantResponse.serialize(tenant), "Tenant updated successfully")


@router.delete("/{tenant_id}")
def delete_tenant(tenant_id: UUID, db: Session = Depends(get_db)):
    tenant = _get_tenant_or_404(db, tenant_id)
    db.delete(tenant)
    db.commit()
    logger.info(f"[TENANT] Deleted {tenant_id}")
    return success_response(message="Tenant deleted successfully")


@router.patch("/{tenant_id}/checkout")
def checkout(tenant_id: UUID, checkout_in: Optional[CheckoutRequest] = None, db: Session = Depends(get_db)):
    tenant = _get_tenant_or_404(db, tenant_id)
    checkout_date = checkout_in.checkout_date if checkout_in else None
    tenant = tenant_lifecycle.checkout_tenant(db, tenant, checkout_date)
    return success_response(TenantResponse.serialize(tenant), "Tenant checked out successfully")
