"""
Schemas package
"""
from order_management.schemas.order import (
    OrderStatus,
    ShippingCompany,
    OrderItem,
    ShippingInfo,
    Order,
    OrderItemInput,
    OrderCreate,
    OrderUpdate,
    ShippingUpdate,
    OrderStatusUpdate,
    ApiResponse
)
from order_management.schemas.event import OrderEvent, EventEnvelope
from order_management.schemas.external import Customer, Product

__all__ = [
    "OrderStatus",
    "ShippingCompany",
    "OrderItem",
    "ShippingInfo",
    "Order",
    "OrderItemInput",
    "OrderCreate",
    "OrderUpdate",
    "ShippingUpdate",
    "OrderStatusUpdate",
    "ApiResponse",
    "OrderEvent",
    "EventEnvelope",
    "Customer",
    "Product"
]
