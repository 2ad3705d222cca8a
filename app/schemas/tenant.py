"""
Tenant Pydantic Schemas - API Request/Response Models
"""
import re
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.models.tenant import BookingSource, IdVerification
from app.schemas.common import parse_datetime, strip_text, to_naive_utc
from app.services.tenant_status import RentalBasis, TenantStatus

EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")

DATE_FIELDS = (
    "checkin_date",
    "checkout_date",
    "rental_period_start",
    "rental_period_end",
)


class TenantFields(BaseModel):
    """Validators shared by create and update payloads."""

    model_config = {"use_enum_values": True}

    @field_validator("name", "phone", "apartment_number", mode="before", check_fields=False)
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return strip_text(v)

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def _blank_email(cls, v: Any) -> Any:
        v = strip_text(v)
        return None if v == "" else v

    @field_validator("email", check_fields=False)
    @classmethod
    def _valid_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Please enter a valid email")
        return v

    @field_validator(*DATE_FIELDS, mode="before", check_fields=False)
    @classmethod
    def _parse_dates(cls, v: Any) -> Any:
        return parse_datetime(v)

    @field_validator(*DATE_FIELDS, check_fields=False)
    @classmethod
    def _naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class TenantCreate(TenantFields):
    model_config = {"validate_default": True}

    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    apartment_number: str = Field(..., min_length=1, max_length=20)
    checkin_date: datetime
    checkout_date: Optional[datetime] = None
    rental_basis: RentalBasis = RentalBasis.MONTHLY
    rent_amount: float = Field(..., ge=0)
    deposit: float = Field(0.0, ge=0)
    booking_source: BookingSource = BookingSource.NONE
    special_requests: str = Field("", max_length=500)
    remarks: str = Field("", max_length=1000)
    id_verification: IdVerification = IdVerification.PENDING
    rental_period_start: Optional[datetime] = None
    rental_period_end: Optional[datetime] = None


class TenantUpdate(TenantFields):
    """Partial update; only the fields sent are applied."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, min_length=1, max_length=20)
    email: Optional[str] = Field(None, max_length=100)
    apartment_number: Optional[str] = Field(None, min_length=1, max_length=20)
    checkin_date: Optional[datetime] = None
    checkout_date: Optional[datetime] = None
    rental_basis: Optional[RentalBasis] = None
    rent_amount: Optional[float] = Field(None, ge=0)
    deposit: Optional[float] = Field(None, ge=0)
    booking_source: Optional[BookingSource] = None
    special_requests: Optional[str] = Field(None, max_length=500)
    remarks: Optional[str] = Field(None, max_length=1000)
    id_verification: Optional[IdVerification] = None
    rental_period_start: Optional[datetime] = None
    rental_period_end: Optional[datetime] = None

    @field_validator("name", "phone", "apartment_number", "checkin_date", "rental_basis", "rent_amount")
    @classmethod
    def _not_null(cls, v: Any, info: Any) -> Any:
        if v is None:
            raise ValueError(f"{info.field_name} is required")
        return v


class CheckoutRequest(BaseModel):
    checkout_date: Optional[datetime] = None

    @field_validator("checkout_date", mode="before")
    @classmethod
    def _parse(cls, v: Any) -> Any:
        return parse_datetime(v)

    @field_validator("checkout_date")
    @classmethod
    def _naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)


class TenantResponse(BaseModel):
    id: UUID
    name: str
    phone: str
    email: Optional[str] = None
    apartment_number: str
    checkin_date: datetime
    checkout_date: Optional[datetime] = None
    rental_basis: str
    rent_amount: float
    deposit: float
    booking_source: str
    special_requests: str
    remarks: str
    id_verification: str
    rental_period_start: Optional[datetime] = None
    rental_period_end: Optional[datetime] = None
    status: TenantStatus
    total_rent: float
    rental_duration: int = 0
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

    @classmethod
    def serialize(cls, tenant, now: Optional[datetime] = None) -> dict:
        out = cls.model_validate(tenant)
        out.rental_duration = tenant.rental_duration_days(now)
        return out.model_dump(mode="json")


class TenantSummary(BaseModel):
    """Row in the dashboard's recent-tenants list."""
    id: UUID
    name: str
    apartment_number: str
    checkin_date: datetime
    status: TenantStatus

    model_config = {"from_attributes": True}


class DashboardStats(BaseModel):
    total_tenants: int = 0
    active_tenants: int = 0
    total_revenue: float = 0.0
    average_rent: float = 0.0
