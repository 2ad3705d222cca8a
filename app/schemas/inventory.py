"""
Inventory Item Schemas
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.inventory import InventoryCategory, ItemCondition, ItemStatus
from app.schemas.common import parse_datetime, strip_text, to_naive_utc

DATE_FIELDS = (
    "purchase_date",
    "warranty_expiry",
    "last_maintenance",
    "next_maintenance",
)


class InventoryFields(BaseModel):
    model_config = {"use_enum_values": True}

    @field_validator("apartment_number", "type", "brand", "model", "location", mode="before", check_fields=False)
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator(*DATE_FIELDS, mode="before", check_fields=False)
    @classmethod
    def _parse_dates(cls, v: Any) -> Any:
        return parse_datetime(v)

    @field_validator(*DATE_FIELDS, check_fields=False)
    @classmethod
    def _naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class InventoryItemCreate(InventoryFields):
    model_config = {"validate_default": True, "protected_namespaces": ()}

    apartment_number: str = Field(..., min_length=1, max_length=20)
    category: InventoryCategory = InventoryCategory.FURNITURE
    type: str = Field(..., min_length=1, max_length=100)
    count: int = Field(..., ge=1, le=1000)
    condition: ItemCondition = ItemCondition.GOOD
    brand: str = Field("", max_length=100)
    model: str = Field("", max_length=100)
    purchase_date: Optional[datetime] = None
    purchase_price: float = Field(0.0, ge=0)
    warranty_expiry: Optional[datetime] = None
    location: str = Field("", max_length=200)
    notes: str = Field("", max_length=1000)
    status: ItemStatus = ItemStatus.AVAILABLE
    last_maintenance: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None


class InventoryItemUpdate(InventoryFields):
    model_config = {"protected_namespaces": ()}

    apartment_number: Optional[str] = Field(None, min_length=1, max_length=20)
    category: Optional[InventoryCategory] = None
    type: Optional[str] = Field(None, min_length=1, max_length=100)
    count: Optional[int] = Field(None, ge=1, le=1000)
    condition: Optional[ItemCondition] = None
    brand: Optional[str] = Field(None, max_length=100)
    model: Optional[str] = Field(None, max_length=100)
    purchase_date: Optional[datetime] = None
    purchase_price: Optional[float] = Field(None, ge=0)
    warranty_expiry: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=200)
    notes: Optional[str] = Field(None, max_length=1000)
    status: Optional[ItemStatus] = None
    last_maintenance: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None

    @field_validator("apartment_number", "category", "type", "count", "condition", "status")
    @classmethod
    def _not_null(cls, v: Any, info: Any) -> Any:
        if v is None:
            raise ValueError(f"{info.field_name} is required")
        return v


class MaintenanceScheduleRequest(BaseModel):
    next_maintenance_date: Optional[datetime] = None

    @field_validator("next_maintenance_date", mode="before")
    @classmethod
    def _parse(cls, v: Any) -> Any:
        return parse_datetime(v)

    @field_validator("next_maintenance_date")
    @classmethod
    def _naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class StatusChangeRequest(BaseModel):
    model_config = {"use_enum_values": True}

    status: ItemStatus


class ConditionChangeRequest(BaseModel):
    model_config = {"use_enum_values": True}

    condition: ItemCondition


class BulkUpdateEntry(BaseModel):
    # Updates are validated per entry so one bad entry doesn't reject the batch
    id: Any
    updates: Dict[str, Any] = {}


class BulkUpdateRequest(BaseModel):
    items: List[BulkUpdateEntry]


class InventoryItemResponse(BaseModel):
    id: UUID
    apartment_number: str
    category: str
    type: str
    count: int
    condition: str
    brand: str
    model: str
    purchase_date: Optional[datetime] = None
    purchase_price: float
    warranty_expiry: Optional[datetime] = None
    location: str
    notes: str
    status: str
    last_maintenance: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None
    age: Optional[int] = None
    warranty_expired: Optional[bool] = None
    maintenance_due: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True, "protected_namespaces": ()}

    @classmethod
    def serialize(cls, item, now: Optional[datetime] = None) -> dict:
        out = cls.model_validate(item)
        out.age = item.age_at(now)
        out.warranty_expired = item.warranty_expired_at(now)
        out.maintenance_due = item.maintenance_due_at(now)
        return out.model_dump(mode="json")


class CategoryStats(BaseModel):
    category: str
    total_items: int = 0
    total_value: float = 0.0
    average_condition_score: float = 0.0


class InventoryTotals(BaseModel):
    total_items: int = 0
    total_value: float = 0.0
    average_age_days: Optional[float] = None


class InventoryStats(BaseModel):
    category_stats: List[CategoryStats] = []
    total_stats: InventoryTotals = InventoryTotals()
