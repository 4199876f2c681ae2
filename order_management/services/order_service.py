"""
Order Service - Business Logic Layer
"""
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from order_management.exceptions import NotFoundError, OrderServiceError, ValidationError
from order_management.logger import get_logger
from order_management.publishers.event_publisher import EventPublisher
from order_management.repositories.order_repository import OrderRepository
from order_management.schemas.event import OrderEvent
from order_management.schemas.order import (
    Order,
    OrderCreate,
    OrderItem,
    OrderItemInput,
    OrderStatus,
    OrderStatusUpdate,
    OrderUpdate,
    ShippingInfo,
    ShippingUpdate
)
from order_management.services.customer_client import CustomerClient
from order_management.services.inventory_client import InventoryClient
from order_management.services.locks import OrderLocks
from order_management.services.transitions import (
    LOCKED_STATUSES,
    event_for_status,
    validate_status_transition
)

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_items(items: List[OrderItemInput]) -> List[OrderItem]:
    """Build order items, each with a fresh ID"""
    return [
        OrderItem(id=str(uuid.uuid4()), product_id=str(item.product_id), quantity=item.quantity)
        for item in items
    ]


class OrderService:
    """
    Order lifecycle: validates operations against the status machine,
    keeps inventory reservations in step with order status and publishes
    a domain event for every change.

    Steps of one operation run sequentially. Once inventory has been
    reserved or released, a later failure in the same operation does not
    undo it. Mutations of the same order are serialised per order ID.
    """

    def __init__(
        self,
        repository: OrderRepository,
        customer_client: CustomerClient,
        inventory_client: InventoryClient,
        event_publisher: EventPublisher,
        locks: Optional[OrderLocks] = None
    ):
        self.repository = repository
        self.customer_client = customer_client
        self.inventory_client = inventory_client
        self.event_publisher = event_publisher
        self.locks = locks if locks is not None else OrderLocks()

    async def list_orders(
        self,
        customer_id: Optional[str] = None,
        status: Optional[OrderStatus] = None
    ) -> List[Order]:
        """Get all orders, optionally filtered by customer and status"""
        orders = self.repository.find_all()

        if customer_id:
            orders = [o for o in orders if o.customer_id == customer_id]

        if status:
            orders = [o for o in orders if o.status == status]

        return orders

    async def get_order(self, order_id: str) -> Optional[Order]:
        """Get order by ID"""
        return self.repository.find_by_id(order_id)

    async def create_order(self, order_data: OrderCreate) -> Order:
        """
        Create new order

        Steps:
        1. Check the customer exists
        2. Check every product exists and has enough stock
        3. Calculate total price
        4. Reserve inventory for every item
        5. Save order
        6. Publish order.created event

        Args:
            order_data: Order creation data

        Returns:
            Created order

        Raises:
            ValidationError: Unknown customer or product, insufficient stock
            CollaboratorError: If the customer or inventory service fails
        """
        customer_id = str(order_data.customer_id)
        try:
            customer = await self.customer_client.get_customer(customer_id)
            if not customer:
                raise ValidationError(f"Customer with ID {customer_id} not found")

            # Lines naming the same product are checked against stock together
            requested: Dict[str, int] = {}
            for item in order_data.items:
                product_id = str(item.product_id)
                requested[product_id] = requested.get(product_id, 0) + item.quantity

            prices: Dict[str, float] = {}
            for product_id, quantity in requested.items():
                product = await self.inventory_client.get_product(product_id)
                if not product:
                    raise ValidationError(f"Product with ID {product_id} not found")

                available = await self.inventory_client.get_inventory(product_id)
                if available < quantity:
                    raise ValidationError(
                        f"Insufficient inventory for product {product_id}. "
                        f"Requested: {quantity}, Available: {available}"
                    )

                prices[product_id] = product.price

            total_price = sum(prices[str(item.product_id)] * item.quantity for item in order_data.items)

            now = _utcnow()
            order = Order(
                id=str(uuid.uuid4()),
                customer_id=customer_id,
                items=_new_items(order_data.items),
                total_price=round(total_price, 2),
                status=OrderStatus.PROCESSING,
                created_at=now,
                updated_at=now,
                shipping_info=None
            )

            # Reservations already made stay in place if a later one fails
            for item in order.items:
                reserved = await self.inventory_client.reserve_inventory(item.product_id, item.quantity)
                if not reserved:
                    raise ValidationError(f"Unable to reserve inventory for product {item.product_id}")

            saved = self.repository.create(order)
        except OrderServiceError as e:
            logger.warning("order_create_failed", customer_id=customer_id, error=e.message)
            raise

        logger.info("order_created", order_id=saved.id, customer_id=customer_id,
                    total_price=saved.total_price)
        self._publish_order_event(OrderStatus.CREATED, saved)
        return saved

    async def update_order(self, order_id: str, order_data: OrderUpdate) -> Order:
        """
        Update customer, items or notes of an order

        Supplied items replace the existing ones wholesale. Stock and
        total price are not re-evaluated.

        Raises:
            NotFoundError: If the order does not exist
            ValidationError: If the order is delivered or canceled
        """
        async with self.locks.hold(order_id):
            existing = self._get_existing(order_id)

            if existing.status in LOCKED_STATUSES:
                raise ValidationError(f"Cannot update order with status {existing.status.value}")

            fields: Dict = {"updated_at": _utcnow()}
            provided = order_data.model_fields_set
            if "customer_id" in provided and order_data.customer_id is not None:
                fields["customer_id"] = str(order_data.customer_id)
            if "items" in provided and order_data.items is not None:
                fields["items"] = _new_items(order_data.items)
            if "notes" in provided:
                fields["notes"] = order_data.notes

            updated = self._save(order_id, fields)
            self._publish(OrderEvent.ORDER_UPDATED, {"order": updated.model_dump(mode="json")})
            logger.info("order_event_published", event_type=OrderEvent.ORDER_UPDATED.value, order_id=order_id)
            return updated

    async def update_shipping(self, order_id: str, shipping_data: ShippingUpdate) -> Order:
        """
        Replace shipping information and publish order.shipped

        The order status is left as it is.

        Raises:
            NotFoundError: If the order does not exist
            ValidationError: If the order is canceled
        """
        async with self.locks.hold(order_id):
            existing = self._get_existing(order_id)

            if existing.status == OrderStatus.CANCELED:
                raise ValidationError("Cannot update shipping for a canceled order")

            updated = self._save(order_id, {
                "shipping_info": ShippingInfo(**shipping_data.model_dump()),
                "updated_at": _utcnow()
            })
            self._publish_order_event(OrderStatus.SHIPPED, updated)
            return updated

    async def update_status(self, order_id: str, status_data: OrderStatusUpdate) -> Order:
        """
        Move an order to a new status

        Canceling releases inventory for every item. Reactivating a
        canceled order (canceled -> processing) first checks stock for
        every item and only then reserves it.

        Raises:
            NotFoundError: If the order does not exist
            ValidationError: Transition not allowed, or not enough stock to reactivate
        """
        async with self.locks.hold(order_id):
            existing = self._get_existing(order_id)
            current_status = existing.status
            new_status = status_data.status

            validate_status_transition(current_status, new_status)
            reactivating = current_status == OrderStatus.CANCELED and new_status == OrderStatus.PROCESSING

            if new_status == OrderStatus.CANCELED:
                await self._release_items(existing.items)
            elif reactivating:
                for item in existing.items:
                    available = await self.inventory_client.get_inventory(item.product_id)
                    if available < item.quantity:
                        raise ValidationError(
                            f"Cannot reactivate order. Insufficient inventory for product {item.product_id}. "
                            f"Requested: {item.quantity}, Available: {available}"
                        )
                for item in existing.items:
                    reserved = await self.inventory_client.reserve_inventory(item.product_id, item.quantity)
                    if not reserved:
                        raise ValidationError(
                            f"Cannot reactivate order. Unable to reserve inventory for product {item.product_id}"
                        )

            updated = self._save(order_id, {"status": new_status, "updated_at": _utcnow()})
            logger.info("order_status_changed", order_id=order_id, old_status=current_status.value,
                        new_status=new_status.value, reason=status_data.status_reason)

            self._publish_order_event(new_status, updated, status_reason=status_data.status_reason)

            if new_status == OrderStatus.CANCELED:
                for item in updated.items:
                    self._publish_inventory_event(OrderEvent.INVENTORY_RELEASED, item)
            elif reactivating:
                for item in updated.items:
                    self._publish_inventory_event(OrderEvent.INVENTORY_RESERVED, item)

            return updated

    async def delete_order(self, order_id: str) -> bool:
        """
        Delete an order

        A canceled order has its inventory released before removal. After
        removal an order.canceled event is published with the order marked
        canceled, whatever its status was.

        Returns:
            True if deleted, False if the order does not exist
        """
        async with self.locks.hold(order_id):
            order = self.repository.find_by_id(order_id)
            if not order:
                return False

            if order.status == OrderStatus.CANCELED:
                for item in order.items:
                    await self._release_item(item)
                    self._publish_inventory_event(OrderEvent.INVENTORY_RELEASED, item)

            deleted = self.repository.delete(order_id)
            if deleted:
                removed = order.model_copy(update={"status": OrderStatus.CANCELED, "updated_at": _utcnow()})
                self._publish_order_event(OrderStatus.CANCELED, removed)

        return deleted

    def _get_existing(self, order_id: str) -> Order:
        order = self.repository.find_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order with ID {order_id} not found")
        return order

    def _save(self, order_id: str, fields: Dict) -> Order:
        updated = self.repository.update(order_id, fields)
        if not updated:
            raise NotFoundError(f"Order with ID {order_id} not found")
        return updated

    async def _release_items(self, items: List[OrderItem]) -> None:
        for item in items:
            await self._release_item(item)

    async def _release_item(self, item: OrderItem) -> None:
        released = await self.inventory_client.release_inventory(item.product_id, item.quantity)
        if not released:
            logger.warning("inventory_release_failed", product_id=item.product_id, quantity=item.quantity)

    def _publish_order_event(self, status: OrderStatus, order: Order, status_reason: Optional[str] = None) -> None:
        event = event_for_status(status)
        data = {"order": order.model_dump(mode="json")}
        if status_reason:
            data["status_reason"] = status_reason

        self._publish(event, data)
        logger.info("order_event_published", event_type=event.value, order_id=order.id)

    def _publish_inventory_event(self, event: OrderEvent, item: OrderItem) -> None:
        self._publish(event, {"product_id": item.product_id, "quantity": item.quantity})
        logger.info("inventory_event_published", event_type=event.value, product_id=item.product_id,
                    quantity=item.quantity)

    def _publish(self, event: OrderEvent, data: Dict) -> None:
        # Delivery is best effort: a failed publish never fails the operation
        try:
            published = self.event_publisher.publish(event, data)
        except Exception as e:
            logger.warning("event_publish_failed", event_type=event.value, error=str(e))
            return

        if not published:
            logger.warning("event_publish_failed", event_type=event.value)
