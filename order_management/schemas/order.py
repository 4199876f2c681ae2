"""
Pydantic schemas for orders and request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Generic, List, Optional, TypeVar
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID


class OrderStatus(str, Enum):
    """Order lifecycle status"""
    CREATED = "created"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELED = "canceled"


class ShippingCompany(str, Enum):
    """Supported shipping carriers"""
    UPS = "UPS"
    FEDEX = "FedEx"
    DHL = "DHL"
    USPS = "USPS"
    OTHER = "Other"


class OrderItem(BaseModel):
    """Line item owned by an order"""
    id: str
    product_id: str
    quantity: int = Field(..., ge=1)

    model_config = ConfigDict(from_attributes=True)


class ShippingInfo(BaseModel):
    """Shipping details attached to an order"""
    tracking_number: str = Field(..., min_length=1, max_length=100, description="Shipping tracking number")
    tracking_company: ShippingCompany = Field(..., description="Shipping company")
    estimated_delivery: Optional[str] = Field(None, description="Estimated delivery date")
    shipping_notes: Optional[str] = Field(None, max_length=500, description="Additional shipping details")


class Order(BaseModel):
    """Order aggregate"""
    id: str
    customer_id: str
    items: List[OrderItem]
    total_price: float = Field(..., ge=0)
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    shipping_info: Optional[ShippingInfo] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderItemInput(BaseModel):
    """Requested product and quantity"""
    product_id: UUID = Field(..., description="Product ID")
    quantity: int = Field(..., ge=1, description="Quantity of the product")


class OrderCreate(BaseModel):
    """Schema for creating a new order"""
    customer_id: UUID = Field(..., description="Customer ID")
    items: List[OrderItemInput] = Field(..., min_length=1, description="Order items")


class OrderUpdate(BaseModel):
    """Schema for updating an order (all fields optional)"""
    customer_id: Optional[UUID] = Field(None, description="Customer ID")
    items: Optional[List[OrderItemInput]] = Field(None, min_length=1, description="Replacement order items")
    notes: Optional[str] = Field(None, max_length=500, description="Additional notes for the order")


class ShippingUpdate(ShippingInfo):
    """Schema for updating shipping information"""
    pass


class OrderStatusUpdate(BaseModel):
    """Schema for updating order status"""
    status: OrderStatus = Field(..., description="Order status")
    status_reason: Optional[str] = Field(None, max_length=500, description="Reason for status change")


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for every API response"""
    success: bool
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: Optional[T] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: Optional[T] = None, message: Optional[str] = None) -> "ApiResponse[T]":
        return cls(success=True, data=data, message=message)
