"""
Tenant Model - Apartment occupancy and rent
"""
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

from sqlalchemy import String, DateTime, Float, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base, TimestampMixin, utcnow
from app.services.tenant_status import (
    RentalBasis,
    TenantStatus,
    calculate_total_rent,
    rental_duration_days,
)


class BookingSource(str, Enum):
    ONLINE = "online"
    IN_PERSON = "in-person"
    CALL = "call"
    TRAVEL_AGENT = "travel-agent"
    OTHER = "other"
    NONE = ""


class IdVerification(str, Enum):
    VERIFIED = "verified"
    PENDING = "pending"
    NOT_VERIFIED = "not-verified"


class Tenant(Base, TimestampMixin):
    """
    Tenant occupying an apartment.
    `status` and `total_rent` are derived and refreshed on every save.
    """
    __tablename__ = "tenants"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Contact details
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Stay
    apartment_number: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    checkin_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    checkout_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    rental_period_start: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    rental_period_end: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # Billing
    rental_basis: Mapped[str] = mapped_column(String(10), nullable=False, default=RentalBasis.MONTHLY.value)
    rent_amount: Mapped[float] = mapped_column(Float, nullable=False)
    deposit: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_rent: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    booking_source: Mapped[str] = mapped_column(String(20), nullable=False, default=BookingSource.NONE.value)
    special_requests: Mapped[str] = mapped_column(Text, nullable=False, default="")
    remarks: Mapped[str] = mapped_column(Text, nullable=False, default="")
    id_verification: Mapped[str] = mapped_column(String(20), nullable=False, default=IdVerification.PENDING.value)

    # Status
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=TenantStatus.ACTIVE.value, index=True)

    def rental_duration_days(self, now: Optional[datetime] = None) -> int:
        return rental_duration_days(self.checkin_date, self.checkout_date, now or utcnow())

    def calculated_total_rent(self, now: Optional[datetime] = None) -> float:
        return calculate_total_rent(
            self.rental_basis,
            self.rent_amount,
            self.checkin_date,
            self.checkout_date,
            now or utcnow(),
        )

    def __repr__(self) -> str:
        return f"<Tenant {self.name} apt={self.apartment_number} status={self.status}>"
