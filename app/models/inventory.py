from sqlalchemy import Column, String, Text, Float, Integer, DateTime, Uuid
from app.db.base import Base, TimestampMixin, utcnow
from app.services.tenant_status import ceil_days
from enum import Enum
import uuid


class InventoryCategory(str, Enum):
    FURNITURE = "furniture"
    APPLIANCES = "appliances"
    UTENSILS = "utensils"


class ItemCondition(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    DAMAGED = "damaged"


class ItemStatus(str, Enum):
    AVAILABLE = "available"
    IN_USE = "in-use"
    MAINTENANCE = "maintenance"
    RETIRED = "retired"


# Ordinal scale used when averaging condition
CONDITION_SCORES = {
    ItemCondition.EXCELLENT.value: 5,
    ItemCondition.GOOD.value: 4,
    ItemCondition.FAIR.value: 3,
    ItemCondition.POOR.value: 2,
    ItemCondition.DAMAGED.value: 1,
}


class InventoryItem(Base, TimestampMixin):
    __tablename__ = "inventory_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    apartment_number = Column(String(20), nullable=False, index=True)
    category = Column(String(20), nullable=False, default=InventoryCategory.FURNITURE.value, index=True)
    type = Column(String(100), nullable=False, index=True)
    count = Column(Integer, nullable=False, default=1)
    condition = Column(String(20), nullable=False, default=ItemCondition.GOOD.value, index=True)
    brand = Column(String(100), nullable=False, default="")
    model = Column(String(100), nullable=False, default="")
    purchase_date = Column(DateTime, nullable=True)
    purchase_price = Column(Float, nullable=False, default=0.0)
    warranty_expiry = Column(DateTime, nullable=True)
    location = Column(String(200), nullable=False, default="")
    notes = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default=ItemStatus.AVAILABLE.value, index=True)
    last_maintenance = Column(DateTime, nullable=True)
    next_maintenance = Column(DateTime, nullable=True)

    def age_at(self, now=None):
        """Days since purchase, None without a purchase date."""
        if not self.purchase_date:
            return None
        return ceil_days(self.purchase_date, now or utcnow())

    def warranty_expired_at(self, now=None):
        if not self.warranty_expiry:
            return None
        return (now or utcnow()) > self.warranty_expiry

    def maintenance_due_at(self, now=None) -> bool:
        if not self.next_maintenance:
            return False
        return (now or utcnow()) >= self.next_maintenance
