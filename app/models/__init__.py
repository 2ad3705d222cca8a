# Import all models so they're registered with Base.metadata
from app.models.tenant import Tenant, BookingSource, IdVerification
from app.models.maintenance import (
    MaintenanceRequest,
    MaintenanceType,
    MaintenanceStatus,
    MaintenancePriority,
)
from app.models.inventory import (
    InventoryItem,
    InventoryCategory,
    ItemCondition,
    ItemStatus,
)

__all__ = [
    "Tenant",
    "BookingSource",
    "IdVerification",
    "MaintenanceRequest",
    "MaintenanceType",
    "MaintenanceStatus",
    "MaintenancePriority",
    "InventoryItem",
    "InventoryCategory",
    "ItemCondition",
    "ItemStatus",
]
