"""
Inventory Routes
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
from app.models.inventory import InventoryCategory, InventoryItem, ItemStatus
from app.schemas.common import Pagination, paginate, success_response
from app.schemas.inventory import (
    BulkUpdateRequest,
    ConditionChangeRequest,
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    MaintenanceScheduleRequest,
    StatusChangeRequest,
)
from app.services import inventory_service, stats_service

router = APIRouter(tags=["inventory"])
logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "created_at": InventoryItem.created_at,
    "apartment_number": InventoryItem.apartment_number,
    "category": InventoryItem.category,
    "type": InventoryItem.type,
    "count": InventoryItem.count,
    "condition": InventoryItem.condition,
    "status": InventoryItem.status,
    "purchase_date": InventoryItem.purchase_date,
    "purchase_price": InventoryItem.purchase_price,
    "next_maintenance": InventoryItem.next_maintenance,
}


def _get_item_or_404(db: Session, item_id: UUID) -> InventoryItem:
    item = db.get(InventoryItem, item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventory item not found")
    return item


def _serialize_all(items):
    now = utcnow()
    return [InventoryItemResponse.serialize(i, now) for i in items]


# ==================== COLLECTION ====================

@router.get("/")
def list_items(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    category: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    condition: Optional[str] = None,
    apartment_number: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    db: Session = Depends(get_db),
):
    """List inventory with filters, sorting and pagination"""
    query = db.query(InventoryItem)
    if category:
        query = query.filter(InventoryItem.category == category)
    if status_filter:
        query = query.filter(InventoryItem.status == status_filter)
    if condition:
        query = query.filter(InventoryItem.condition == condition)
    if apartment_number:
        query = query.filter(InventoryItem.apartment_number == apartment_number)

    column = SORTABLE_FIELDS.get(sort_by, InventoryItem.created_at)
    query = query.order_by(column.asc() if sort_order == "asc" else column.desc())

    page, limit, offset = paginate(page, limit, settings.MAX_PAGE_SIZE)
    total = query.count()
    items = query.offset(offset).limit(limit).all()

    return success_response(
        _serialize_all(items),
        pagination=Pagination.build(page, limit, total).model_dump(),
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
def create_item(item_in: InventoryItemCreate, db: Session = Depends(get_db)):
    item = InventoryItem(**item_in.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info(f"[INVENTORY] Created {item.id} {item.category}/{item.type} x{item.count} apt={item.apartment_number}")
    return success_response(InventoryItemResponse.serialize(item), "Inventory item created successfully")


@router.get("/stats/overview")
def stats_overview(db: Session = Depends(get_db)):
    return success_response(stats_service.inventory_stats(db).model_dump())


@router.get("/category/{category}")
def items_by_category(
    category: InventoryCategory,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    db: Session = Depends(get_db),
):
    query = db.query(InventoryItem).filter(InventoryItem.category == category.value)

    page, limit, offset = paginate(page, limit, settings.MAX_PAGE_SIZE)
    total = query.count()
    items = query.order_by(InventoryItem.created_at.desc())\
        .offset(offset)\
        .limit(limit)\
        .all()

    return success_response(
        _serialize_all(items),
        pagination=Pagination.build(page, limit, total).model_dump(),
    )


@router.get("/apartment/{apartment_number}")
def items_by_apartment(apartment_number: str, db: Session = Depends(get_db)):
    items = db.query(InventoryItem)\
        .filter(InventoryItem.apartment_number == apartment_number)\
        .order_by(InventoryItem.category.asc(), InventoryItem.type.asc())\
        .all()
    return success_response(_serialize_all(items))


@router.get("/maintenance/due")
def maintenance_due(db: Session = Depends(get_db)):
    """Items whose next maintenance has arrived, soonest first; retired items excluded"""
    items = db.query(InventoryItem)\
        .filter(
            InventoryItem.next_maintenance <= utcnow(),
            InventoryItem.status != ItemStatus.RETIRED.value,
        )\
        .order_by(InventoryItem.next_maintenance.asc())\
        .all()
    return success_response(_serialize_all(items))


@router.get("/search/{query}")
def search_items(query: str, db: Session = Depends(get_db)):
    needle = query.lower()
    items = db.query(InventoryItem)\
        .filter(or_(
            func.lower(InventoryItem.type).contains(needle, autoescape=True),
            func.lower(InventoryItem.brand).contains(needle, autoescape=True),
            func.lower(InventoryItem.model).contains(needle, autoescape=True),
            func.lower(InventoryItem.apartment_number).contains(needle, autoescape=True),
        ))\
        .limit(settings.SEARCH_RESULT_LIMIT)\
        .all()
    return success_response(_serialize_all(items))


@router.post("/bulk-update")
def bulk_update(bulk_in: BulkUpdateRequest, db: Session = Depends(get_db)):
    results = inventory_service.bulk_update(db, [entry.model_dump() for entry in bulk_in.items])
    return success_response(results, "Bulk update completed")


# ==================== SINGLE ITEM ====================

@router.get("/{item_id}")
def get_item(item_id: UUID, db: Session = Depends(get_db)):
    item = _get_item_or_404(db, item_id)
    return success_response(InventoryItemResponse.serialize(item))


@router.put("/{item_id}")
def update_item(item_id: UUID, item_update: InventoryItemUpdate, db: Session = Depends(get_db)):
    item = _get_item_or_404(db, item_id)
    item = inventory_service.apply_updates(db, item, item_update.model_dump(exclude_unset=True))
    return success_response(InventoryItemResponse.serialize(item), "Inventory item updated successfully")


@router.delete("/{item_id}")
def delete_item(item_id: UUID, db: Session = Depends(get_db)):
    item = _get_item_or_404(db, item_id)
    db.delete(item)
    db.commit()
    logger.info(f"[INVENTORY] Deleted {item_id}")
    return success_response(message="Inventory item deleted successfully")


@router.patch("/{item_id}/maintenance")
def schedule_maintenance(item_id: UUID, schedule_in: MaintenanceScheduleRequest, db: Session = Depends(get_db)):
    item = _get_item_or_404(db, item_id)
    item = inventory_service.update_maintenance(db, item, schedule_in.next_maintenance_date)
    return success_response(InventoryItemResponse.serialize(item), "Maintenance schedule updated successfully")


@router.patch("/{item_id}/status")
def change_status(item_id: UUID, status_in: StatusChangeRequest, db: Session = Depends(get_db)):
    item = _get_item_or_404(db, item_id)
    item = inventory_service.change_status(db, item, status_in.status)
    return success_response(InventoryItemResponse.serialize(item), "Item status updated successfully")


@router.patch("/{item_id}/condition")
def change_condition(item_id: UUID, condition_in: ConditionChangeRequest, db: Session = Depends(get_db)):
    item = _get_item_or_404(db, item_id)
    item = inventory_service.update_condition(db, item, condition_in.condition)
    return success_response(InventoryItemResponse.serialize(item), "Item condition updated successfully")
