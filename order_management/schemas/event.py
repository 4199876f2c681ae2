"""
Schemas for domain events published to the message broker
"""
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from enum import Enum
import uuid


class OrderEvent(str, Enum):
    """Routing keys of every event the service publishes"""
    ORDER_CREATED = "order.created"
    ORDER_UPDATED = "order.updated"
    ORDER_SHIPPED = "order.shipped"
    ORDER_DELIVERED = "order.delivered"
    ORDER_CANCELED = "order.canceled"
    INVENTORY_RESERVED = "inventory.reserved"
    INVENTORY_RELEASED = "inventory.released"


class EventEnvelope(BaseModel):
    """Envelope wrapped around every published payload"""
    event_type: str
    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    event_version: str = "1.0"
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    source: str = "order-management-service"
    data: dict
