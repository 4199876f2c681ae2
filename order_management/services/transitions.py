"""
Allowed order status transitions
"""
from typing import Dict, FrozenSet

from order_management.exceptions import ValidationError
from order_management.schemas.event import OrderEvent
from order_management.schemas.order import OrderStatus

ORDER_STATUS_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.CREATED: frozenset({OrderStatus.PROCESSING}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELED}),
    OrderStatus.DELIVERED: frozenset(),  # terminal
    OrderStatus.CANCELED: frozenset({OrderStatus.PROCESSING}),  # reactivation
}

# Statuses in which items and notes can no longer change
LOCKED_STATUSES: FrozenSet[OrderStatus] = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELED})

_STATUS_EVENTS: Dict[OrderStatus, OrderEvent] = {
    OrderStatus.CREATED: OrderEvent.ORDER_CREATED,
    OrderStatus.SHIPPED: OrderEvent.ORDER_SHIPPED,
    OrderStatus.DELIVERED: OrderEvent.ORDER_DELIVERED,
    OrderStatus.CANCELED: OrderEvent.ORDER_CANCELED,
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new in ORDER_STATUS_TRANSITIONS[current]


def validate_status_transition(current: OrderStatus, new: OrderStatus) -> None:
    """Raise ValidationError unless current -> new is an allowed transition"""
    if not can_transition(current, new):
        raise ValidationError(f"Invalid status transition from {current.value} to {new.value}")


def event_for_status(status: OrderStatus) -> OrderEvent:
    """Order event published when an order reaches the given status"""
    return _STATUS_EVENTS.get(status, OrderEvent.ORDER_UPDATED)
