"""
Order Repository - Data Access Layer
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from order_management.logger import get_logger
from order_management.models.order import OrderModel, OrderItemModel
from order_management.schemas.order import Order, OrderItem, OrderStatus, ShippingInfo

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderRepository(ABC):
    """Order store contract used by the order service"""

    @abstractmethod
    def find_all(self) -> List[Order]:
        """Get all orders"""

    @abstractmethod
    def find_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID"""

    @abstractmethod
    def create(self, order: Order) -> Order:
        """Store an order, replacing any existing entry with the same ID"""

    @abstractmethod
    def update(self, order_id: str, fields: Dict[str, Any]) -> Optional[Order]:
        """
        Merge fields into an existing order

        Args:
            order_id: Order ID
            fields: Order attributes to overwrite

        Returns:
            Updated order with a refreshed updated_at, or None if not found
        """

    @abstractmethod
    def delete(self, order_id: str) -> bool:
        """Delete order, returning False if it did not exist"""

    @abstractmethod
    def count(self) -> int:
        """Get total count of orders"""


class InMemoryOrderRepository(OrderRepository):
    """Volatile order store backed by a dict keyed by order ID"""

    def __init__(self):
        self._orders: Dict[str, Order] = {}

    def find_all(self) -> List[Order]:
        return [order.model_copy(deep=True) for order in self._orders.values()]

    def find_by_id(self, order_id: str) -> Optional[Order]:
        order = self._orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    def create(self, order: Order) -> Order:
        self._orders[order.id] = order.model_copy(deep=True)
        logger.info("order_stored", order_id=order.id)
        return order.model_copy(deep=True)

    def update(self, order_id: str, fields: Dict[str, Any]) -> Optional[Order]:
        existing = self._orders.get(order_id)
        if not existing:
            return None

        updated = existing.model_copy(update={**fields, "updated_at": _utcnow()}, deep=True)
        self._orders[order_id] = updated
        logger.info("order_updated", order_id=order_id, fields=sorted(fields))
        return updated.model_copy(deep=True)

    def delete(self, order_id: str) -> bool:
        if self._orders.pop(order_id, None) is None:
            return False
        logger.info("order_deleted", order_id=order_id)
        return True

    def count(self) -> int:
        return len(self._orders)


class SqlAlchemyOrderRepository(OrderRepository):
    """Durable order store using SQLAlchemy"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def find_all(self) -> List[Order]:
        with self.session_factory() as db:
            models = db.scalars(select(OrderModel).order_by(OrderModel.created_at)).all()
            return [_to_domain(m) for m in models]

    def find_by_id(self, order_id: str) -> Optional[Order]:
        with self.session_factory() as db:
            model = db.get(OrderModel, order_id)
            return _to_domain(model) if model else None

    def create(self, order: Order) -> Order:
        with self.session_factory() as db:
            existing = db.get(OrderModel, order.id)
            if existing:
                db.delete(existing)
                db.flush()

            model = OrderModel(id=order.id)
            _apply(model, order.model_dump(exclude={"id"}))
            db.add(model)
            db.commit()
            db.refresh(model)
            logger.info("order_stored", order_id=order.id)
            return _to_domain(model)

    def update(self, order_id: str, fields: Dict[str, Any]) -> Optional[Order]:
        with self.session_factory() as db:
            model = db.get(OrderModel, order_id)
            if not model:
                return None

            _apply(model, {**fields, "updated_at": _utcnow()})
            db.commit()
            db.refresh(model)
            logger.info("order_updated", order_id=order_id, fields=sorted(fields))
            return _to_domain(model)

    def delete(self, order_id: str) -> bool:
        with self.session_factory() as db:
            model = db.get(OrderModel, order_id)
            if not model:
                return False

            db.delete(model)
            db.commit()
            logger.info("order_deleted", order_id=order_id)
            return True

    def count(self) -> int:
        with self.session_factory() as db:
            return db.query(OrderModel).count()


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo; everything is stored as UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _apply(model: OrderModel, fields: Dict[str, Any]) -> None:
    """Copy domain field values onto an ORM row"""
    for field, value in fields.items():
        if field == "items":
            model.items = [
                OrderItemModel(
                    id=item["id"] if isinstance(item, dict) else item.id,
                    product_id=item["product_id"] if isinstance(item, dict) else item.product_id,
                    quantity=item["quantity"] if isinstance(item, dict) else item.quantity,
                    position=position,
                )
                for position, item in enumerate(value)
            ]
        elif field == "shipping_info":
            if value is not None:
                value = ShippingInfo.model_validate(value).model_dump(mode="json")
            model.shipping_info = value
        elif field == "status":
            model.status = OrderStatus(value).value
        else:
            setattr(model, field, value)


def _to_domain(model: OrderModel) -> Order:
    return Order(
        id=model.id,
        customer_id=model.customer_id,
        items=[
            OrderItem(id=item.id, product_id=item.product_id, quantity=item.quantity)
            for item in model.items
        ],
        total_price=model.total_price,
        status=OrderStatus(model.status),
        created_at=_aware(model.created_at),
        updated_at=_aware(model.updated_at),
        shipping_info=ShippingInfo.model_validate(model.shipping_info) if model.shipping_info else None,
        notes=model.notes,
    )
