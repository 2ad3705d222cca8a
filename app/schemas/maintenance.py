"""
Maintenance Request Schemas
"""
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.maintenance import MaintenancePriority, MaintenanceStatus, MaintenanceType
from app.schemas.common import parse_datetime, strip_text, to_naive_utc


class MaintenanceFields(BaseModel):
    model_config = {"use_enum_values": True}

    @field_validator("apartment_number", "description", "assigned_to", mode="before", check_fields=False)
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator("reported_date", "completed_date", mode="before", check_fields=False)
    @classmethod
    def _parse_dates(cls, v: Any) -> Any:
        return parse_datetime(v)

    @field_validator("reported_date", "completed_date", check_fields=False)
    @classmethod
    def _naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class MaintenanceRequestCreate(MaintenanceFields):
    model_config = {"validate_default": True}

    apartment_number: str = Field(..., min_length=1, max_length=20)
    type: MaintenanceType = MaintenanceType.OTHER
    description: str = Field(..., min_length=1, max_length=1000)
    priority: MaintenancePriority = MaintenancePriority.MEDIUM
    status: MaintenanceStatus = MaintenanceStatus.PENDING
    reported_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    assigned_to: str = Field("", max_length=100)
    estimated_cost: float = Field(0.0, ge=0)
    actual_cost: float = Field(0.0, ge=0)
    previous_condition: str = Field("", max_length=500)
    post_departure_condition: str = Field("", max_length=500)
    damages: str = Field("", max_length=500)
    deposit_deductions: float = Field(0.0, ge=0)
    notes: str = Field("", max_length=1000)


class MaintenanceRequestUpdate(MaintenanceFields):
    apartment_number: Optional[str] = Field(None, min_length=1, max_length=20)
    type: Optional[MaintenanceType] = None
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    priority: Optional[MaintenancePriority] = None
    status: Optional[MaintenanceStatus] = None
    reported_date: Optional[datetime] = None
    completed_date: Optional[datetime] = None
    assigned_to: Optional[str] = Field(None, max_length=100)
    estimated_cost: Optional[float] = Field(None, ge=0)
    actual_cost: Optional[float] = Field(None, ge=0)
    previous_condition: Optional[str] = Field(None, max_length=500)
    post_departure_condition: Optional[str] = Field(None, max_length=500)
    damages: Optional[str] = Field(None, max_length=500)
    deposit_deductions: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("apartment_number", "description", "type", "priority", "status", "reported_date")
    @classmethod
    def _not_null(cls, v: Any, info: Any) -> Any:
        if v is None:
            raise ValueError(f"{info.field_name} is required")
        return v


class AssignRequest(BaseModel):
    assigned_to: str = Field(..., min_length=1, max_length=100)

    @field_validator("assigned_to", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return strip_text(v)


class CompleteRequest(BaseModel):
    completed_date: Optional[datetime] = None
    actual_cost: float = Field(0.0, ge=0)
    notes: str = Field("", max_length=1000)

    @field_validator("completed_date", mode="before")
    @classmethod
    def _parse(cls, v: Any) -> Any:
        return parse_datetime(v)

    @field_validator("completed_date")
    @classmethod
    def _naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class MaintenanceRequestResponse(BaseModel):
    id: UUID
    apartment_number: str
    type: str
    description: str
    priority: str
    status: str
    reported_date: datetime
    completed_date: Optional[datetime] = None
    assigned_to: str
    estimated_cost: float
    actual_cost: float
    previous_condition: str
    post_departure_condition: str
    damages: str
    deposit_deductions: float
    notes: str
    resolution_time: Optional[int] = None
    is_overdue: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def serialize(cls, request, now: Optional[datetime] = None) -> dict:
        out = cls.model_validate(request)
        out.is_overdue = request.is_overdue_at(now)
        return out.model_dump(mode="json")


class MaintenanceStats(BaseModel):
    total_requests: int = 0
    pending_requests: int = 0
    in_progress_requests: int = 0
    completed_requests: int = 0
    urgent_requests: int = 0
    total_cost: float = 0.0
    overdue_requests: int = 0
