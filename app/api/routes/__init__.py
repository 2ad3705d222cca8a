from app.api.routes.tenants import router as tenants_router
from app.api.routes.maintenance import router as maintenance_router
from app.api.routes.inventory import router as inventory_router

__all__ = [
    "tenants_router",
    "maintenance_router",
    "inventory_router",
]
