"""
Health check endpoint
"""
from fastapi import APIRouter, Depends
from datetime import datetime, timezone

from order_management.config import settings
from order_management.dependencies import get_order_service
from order_management.services.order_service import OrderService

router = APIRouter(tags=["health"])


def _mode(live: bool) -> str:
    return "live" if live else "mock"


@router.get("/health")
async def health_check(service: OrderService = Depends(get_order_service)):
    """
    Health check endpoint

    Checks:
    - Service status
    - Order store connectivity
    - Which collaborators are mocked
    """
    try:
        order_count = service.repository.count()
        store_status = "healthy"
    except Exception as e:
        order_count = None
        store_status = f"unhealthy: {str(e)}"

    return {
        "service": settings.SERVICE_NAME,
        "status": "healthy" if store_status == "healthy" else "unhealthy",
        "order_store": {
            "backend": settings.ORDER_STORE_BACKEND,
            "status": store_status,
            "orders": order_count
        },
        "collaborators": {
            "customer_service": _mode(settings.USE_REAL_CUSTOMER_API),
            "inventory_service": _mode(settings.USE_REAL_INVENTORY_API),
            "message_broker": _mode(settings.USE_REAL_MESSAGE_BROKER)
        },
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/")
def root():
    """Root endpoint"""
    return {
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "docs": "/docs"
    }
