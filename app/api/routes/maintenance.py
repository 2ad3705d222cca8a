"""
Maintenance Request Routes
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import case
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
import logging

from app.core.config import settings
from app.database import get_db
from app.db.base import utcnow
from app.models.maintenance import (
    PRIORITY_RANK,
    MaintenancePriority,
    MaintenanceRequest,
    MaintenanceStatus,
)
from app.schemas.common import Pagination, paginate, success_response
from app.schemas.maintenance import (
    AssignRequest,
    CompleteRequest,
    MaintenanceRequestCreate,
    MaintenanceRequestResponse,
    MaintenanceRequestUpdate,
)
from app.services import maintenance_service, stats_service

router = APIRouter(tags=["maintenance"])
logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "reported_date": MaintenanceRequest.reported_date,
    "completed_date": MaintenanceRequest.completed_date,
    "created_at": MaintenanceRequest.created_at,
    "apartment_number": MaintenanceRequest.apartment_number,
    "priority": MaintenanceRequest.priority,
    "status": MaintenanceRequest.status,
    "estimated_cost": MaintenanceRequest.estimated_cost,
    "actual_cost": MaintenanceRequest.actual_cost,
}


def _priority_rank():
    return case(
        *[(MaintenanceRequest.priority == name, rank) for name, rank in PRIORITY_RANK.items()],
        else_=len(PRIORITY_RANK),
    )


def _get_request_or_404(db: Session, request_id: UUID) -> MaintenanceRequest:
    request = db.get(MaintenanceRequest, request_id)
    if not request:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Maintenance request not found")
    return request


def _serialize_all(requests):
    now = utcnow()
    return [MaintenanceRequestResponse.serialize(r, now) for r in requests]


# ==================== COLLECTION ====================

@router.get("/")
def list_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    status_filter: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = None,
    type: Optional[str] = None,
    apartment_number: Optional[str] = None,
    sort_by: str = "reported_date",
    sort_order: str = "desc",
    db: Session = Depends(get_db),
):
    """List maintenance requests with filters, sorting and pagination"""
    query = db.query(MaintenanceRequest)
    if status_filter:
        query = query.filter(MaintenanceRequest.status == status_filter)
    if priority:
        query = query.filter(MaintenanceRequest.priority == priority)
    if type:
        query = query.filter(MaintenanceRequest.type == type)
    if apartment_number:
        query = query.filter(MaintenanceRequest.apartment_number == apartment_number)

    column = SORTABLE_FIELDS.get(sort_by, MaintenanceRequest.reported_date)
    query = query.order_by(column.asc() if sort_order == "asc" else column.desc())

    page, limit, offset = paginate(page, limit, settings.MAX_PAGE_SIZE)
    total = query.count()
    requests = query.offset(offset).limit(limit).all()

    return success_response(
        _serialize_all(requests),
        pagination=Pagination.build(page, limit, total).model_dump(),
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_request(request_in: MaintenanceRequestCreate, db: Session = Depends(get_db)):
    data = request_in.model_dump()
    if data.get("reported_date") is None:
        # Column default stamps the creation time
        data.pop("reported_date", None)

    request = MaintenanceRequest(**data)
    db.add(request)
    db.commit()
    db.refresh(request)
    logger.info(f"[MAINTENANCE] Created {request.id} apt={request.apartment_number} priority={request.priority}")

    return success_response(
        MaintenanceRequestResponse.serialize(request),
        "Maintenance request created successfully",
    )


@router.get("/stats/overview")
def stats_overview(db: Session = Depends(get_db)):
    return success_response(stats_service.maintenance_stats(db).model_dump())


@router.get("/apartment/{apartment_number}")
def requests_by_apartment(apartment_number: str, db: Session = Depends(get_db)):
    requests = db.query(MaintenanceRequest)\
        .filter(MaintenanceRequest.apartment_number == apartment_number)\
        .order_by(MaintenanceRequest.reported_date.desc())\
        .all()
    return success_response(_serialize_all(requests))


@router.get("/status/pending")
def pending_requests(db: Session = Depends(get_db)):
    """Pending requests, most pressing first, then oldest first"""
    requests = db.query(MaintenanceRequest)\
        .filter(MaintenanceRequest.status == MaintenanceStatus.PENDING.value)\
        .order_by(_priority_rank(), MaintenanceRequest.reported_date.asc())\
        .all()
    return success_response(_serialize_all(requests))


@router.get("/status/completed")
def completed_requests(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    db: Session = Depends(get_db),
):
    query = db.query(MaintenanceRequest)\
        .filter(MaintenanceRequest.status == MaintenanceStatus.COMPLETED.value)

    page, limit, offset = paginate(page, limit, settings.MAX_PAGE_SIZE)
    total = query.count()
    requests = query.order_by(MaintenanceRequest.completed_date.desc())\
        .offset(offset)\
        .limit(limit)\
        .all()

    return success_response(
        _serialize_all(requests),
        pagination=Pagination.build(page, limit, total).model_dump(),
    )


@router.get("/priority/urgent")
def urgent_requests(db: Session = Depends(get_db)):
    requests = db.query(MaintenanceRequest)\
        .filter(
            MaintenanceRequest.priority == MaintenancePriority.URGENT.value,
            MaintenanceRequest.status != MaintenanceStatus.COMPLETED.value,
        )\
        .order_by(MaintenanceRequest.reported_date.asc())\
        .all()
    return success_response(_serialize_all(requests))


# ==================== SINGLE REQUEST ====================

@router.get("/{request_id}")
def get_request(request_id: UUID, db: Session = Depends(get_db)):
    request = _get_request_or_404(db, request_id)
    return success_response(MaintenanceRequestResponse.serialize(request))


@router.put("/{request_id}")
def update_request(request_id: UUID, request_update: MaintenanceRequestUpdate, db: Session = Depends(get_db)):
    request = _get_request_or_404(db, request_id)

    for key, value in request_update.model_dump(exclude_unset=True).items():
        setattr(request, key, value)

    db.commit()
    db.refresh(request)
    return success_response(
        MaintenanceRequestResponse.serialize(request),
        "Maintenance request updated successfully",
    )


@router.delete("/{request_id}")
def delete_request(request_id: UUID, db: Session = Depends(get_db)):
    request = _get_request_or_404(db, request_id)
    db.delete(request)
    db.commit()
    logger.info(f"[MAINTENANCE] Deleted {request_id}")
    return success_response(message="Maintenance request deleted successfully")


@router.patch("/{request_id}/complete")
def complete_request(
    request_id: UUID,
    complete_in: Optional[CompleteRequest] = None,
    db: Session = Depends(get_db),
):
    request = _get_request_or_404(db, request_id)
    complete_in = complete_in or CompleteRequest()
    request = maintenance_service.complete_request(
        db,
        request,
        completed_date=complete_in.completed_date,
        actual_cost=complete_in.actual_cost,
        notes=complete_in.notes,
    )
    return success_response(
        MaintenanceRequestResponse.serialize(request),
        "Maintenance request marked as completed",
    )


@router.patch("/{request_id}/assign")
def assign_request(request_id: UUID, assign_in: AssignRequest, db: Session = Depends(get_db)):
    request = _get_request_or_404(db, request_id)
    request = maintenance_service.assign_request(db, request, assign_in.assigned_to)
    return success_response(
        MaintenanceRequestResponse.serialize(request),
        "Maintenance request assigned successfully",
    )


@router.patch("/{request_id}/cancel")
def cancel_request(request_id: UUID, db: Session = Depends(get_db)):
    request = _get_request_or_404(db, request_id)
    request = maintenance_service.cancel_request(db, request)
    return success_response(
        MaintenanceRequestResponse.serialize(request),
        "Maintenance request cancelled",
    )
