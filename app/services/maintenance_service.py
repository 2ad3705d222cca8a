"""
Maintenance request transitions: assign, complete, cancel.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.db.base import utcnow
from app.models.maintenance import MaintenanceRequest, MaintenanceStatus

logger = logging.getLogger(__name__)


def assign_request(db: Session, request: MaintenanceRequest, assigned_to: str) -> MaintenanceRequest:
    request.assigned_to = assigned_to
    request.status = MaintenanceStatus.IN_PROGRESS.value

    db.commit()
    db.refresh(request)
    logger.info(f"[MAINTENANCE] {request.id} assigned to {assigned_to!r}")
    return request


def complete_request(
    db: Session,
    request: MaintenanceRequest,
    completed_date: Optional[datetime] = None,
    actual_cost: float = 0.0,
    notes: str = "",
) -> MaintenanceRequest:
    request.status = MaintenanceStatus.COMPLETED.value
    request.completed_date = completed_date or utcnow()
    request.actual_cost = actual_cost or 0.0
    if notes:
        request.notes = notes

    db.commit()
    db.refresh(request)
    logger.info(f"[MAINTENANCE] {request.id} completed, cost={request.actual_cost}")
    return request


def cancel_request(db: Session, request: MaintenanceRequest) -> MaintenanceRequest:
    request.status = MaintenanceStatus.CANCELLED.value

    db.commit()
    db.refresh(request)
    logger.info(f"[MAINTENANCE] {request.id} cancelled")
    return request
