from sqlalchemy import Column, String, Text, Float, DateTime, Uuid
from app.db.base import Base, TimestampMixin, utcnow
from app.services.tenant_status import ceil_days
from enum import Enum
import uuid


class MaintenanceType(str, Enum):
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    APPLIANCE = "appliance"
    STRUCTURAL = "structural"
    OTHER = "other"


class MaintenanceStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MaintenancePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# Days a request may stay open before it is overdue, per priority
OVERDUE_THRESHOLDS = {
    MaintenancePriority.URGENT.value: 1,
    MaintenancePriority.HIGH.value: 3,
    MaintenancePriority.MEDIUM.value: 7,
    MaintenancePriority.LOW.value: 14,
}
DEFAULT_OVERDUE_THRESHOLD = 7

OPEN_STATUSES = (MaintenanceStatus.PENDING.value, MaintenanceStatus.IN_PROGRESS.value)

# Sort rank, most pressing first
PRIORITY_RANK = {
    MaintenancePriority.URGENT.value: 0,
    MaintenancePriority.HIGH.value: 1,
    MaintenancePriority.MEDIUM.value: 2,
    MaintenancePriority.LOW.value: 3,
}


class MaintenanceRequest(Base, TimestampMixin):
    __tablename__ = "maintenance_requests"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    apartment_number = Column(String(20), nullable=False, index=True)
    type = Column(String(20), nullable=False, default=MaintenanceType.OTHER.value, index=True)
    description = Column(Text, nullable=False)
    priority = Column(String(10), nullable=False, default=MaintenancePriority.MEDIUM.value, index=True)
    status = Column(String(20), nullable=False, default=MaintenanceStatus.PENDING.value, index=True)
    reported_date = Column(DateTime, nullable=False, default=utcnow, index=True)
    completed_date = Column(DateTime, nullable=True)
    assigned_to = Column(String(100), nullable=False, default="")
    estimated_cost = Column(Float, nullable=False, default=0.0)
    actual_cost = Column(Float, nullable=False, default=0.0)
    previous_condition = Column(String(500), nullable=False, default="")
    post_departure_condition = Column(String(500), nullable=False, default="")
    damages = Column(String(500), nullable=False, default="")
    deposit_deductions = Column(Float, nullable=False, default=0.0)
    notes = Column(Text, nullable=False, default="")

    @property
    def resolution_time(self):
        """Days from report to completion, None while unresolved."""
        if not self.completed_date or not self.reported_date:
            return None
        return ceil_days(self.reported_date, self.completed_date)

    def is_overdue_at(self, now=None) -> bool:
        """Open longer than the priority's threshold allows."""
        if self.status not in OPEN_STATUSES:
            return False
        age = ceil_days(self.reported_date, now or utcnow())
        return age > OVERDUE_THRESHOLDS.get(self.priority, DEFAULT_OVERDUE_THRESHOLD)
