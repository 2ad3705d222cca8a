"""
Inventory item mutations and bulk updates
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.base import utcnow
from app.models.inventory import InventoryItem
from app.schemas.common import validate_payload
from app.schemas.inventory import InventoryItemResponse, InventoryItemUpdate

logger = logging.getLogger(__name__)


def update_maintenance(
    db: Session,
    item: InventoryItem,
    next_maintenance: Optional[datetime],
    now: Optional[datetime] = None,
) -> InventoryItem:
    """Record maintenance done now and schedule the next one."""
    item.last_maintenance = now or utcnow()
    item.next_maintenance = next_maintenance

    db.commit()
    db.refresh(item)
    logger.info(f"[INVENTORY] {item.id} maintained, next due {next_maintenance}")
    return item


def change_status(db: Session, item: InventoryItem, status: str) -> InventoryItem:
    item.status = status
    db.commit()
    db.refresh(item)
    return item


def update_condition(db: Session, item: InventoryItem, condition: str) -> InventoryItem:
    item.condition = condition
    db.commit()
    db.refresh(item)
    return item


def apply_updates(db: Session, item: InventoryItem, data: Dict[str, Any]) -> InventoryItem:
    for key, value in data.items():
        setattr(item, key, value)
    db.commit()
    db.refresh(item)
    return item


def _parse_id(raw: Any) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(raw))
    except (ValueError, TypeError, AttributeError):
        return None


def bulk_update(db: Session, items: List[Dict[str, Any]], now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """
    Apply `{id, updates}` entries one by one.
    Each entry succeeds or fails on its own; the result keeps input order.
    """
    results = []
    for entry in items:
        raw_id = entry.get("id")
        item_id = _parse_id(raw_id)
        if item_id is None:
            results.append({"id": raw_id, "success": False, "errors": ["Invalid item id"]})
            continue

        item = db.get(InventoryItem, item_id)
        if item is None:
            results.append({"id": raw_id, "success": False, "errors": ["Inventory item not found"]})
            continue

        updates, errors = validate_payload(InventoryItemUpdate, entry.get("updates") or {})
        if errors:
            results.append({"id": raw_id, "success": False, "errors": errors})
            continue

        try:
            apply_updates(db, item, updates.model_dump(exclude_unset=True))
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"[INVENTORY] Bulk update failed for {raw_id}: {exc}")
            results.append({"id": raw_id, "success": False, "errors": [str(exc)]})
            continue

        results.append({"id": raw_id, "success": True, "data": InventoryItemResponse.serialize(item, now)})

    logger.info(f"[INVENTORY] Bulk update: {sum(1 for r in results if r['success'])}/{len(results)} applied")
    return results
