"""Order store contract, run against the in-memory and the SQLAlchemy implementation."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from order_management.database import create_session_factory, init_db
from order_management.repositories.order_repository import InMemoryOrderRepository, SqlAlchemyOrderRepository
from order_management.schemas.order import Order, OrderItem, OrderStatus, ShippingCompany, ShippingInfo


@pytest.fixture(params=["memory", "sql"])
def store(request):
    if request.param == "memory":
        yield InMemoryOrderRepository()
        return

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield SqlAlchemyOrderRepository(create_session_factory(engine))
    engine.dispose()


def _order(order_id="order-1", customer_id="cust-1", status=OrderStatus.PROCESSING):
    created = datetime(2024, 4, 10, 14, 30, tzinfo=timezone.utc)
    return Order(
        id=order_id,
        customer_id=customer_id,
        items=[
            OrderItem(id=f"{order_id}-item-1", product_id="prod-1", quantity=2),
            OrderItem(id=f"{order_id}-item-2", product_id="prod-2", quantity=1),
        ],
        total_price=59.98,
        status=status,
        created_at=created,
        updated_at=created,
    )


def test_create_and_find_by_id(store):
    order = _order()
    assert store.create(order) == order
    assert store.find_by_id("order-1") == order


def test_find_unknown_returns_none(store):
    assert store.find_by_id("missing") is None


def test_find_all_and_count(store):
    store.create(_order("order-1"))
    store.create(_order("order-2"))
    assert {o.id for o in store.find_all()} == {"order-1", "order-2"}
    assert store.count() == 2


def test_create_overwrites_existing_entry(store):
    store.create(_order())
    replacement = _order().model_copy(update={"customer_id": "cust-2", "items": [
        OrderItem(id="new-item", product_id="prod-9", quantity=5),
    ]})

    store.create(replacement)

    assert store.count() == 1
    assert store.find_by_id("order-1") == replacement


def test_update_merges_fields_and_refreshes_updated_at(store):
    order = store.create(_order())
    shipping = ShippingInfo(tracking_number="1Z999", tracking_company=ShippingCompany.FEDEX)

    updated = store.update("order-1", {"status": OrderStatus.SHIPPED, "shipping_info": shipping, "notes": "fragile"})

    assert updated.status == OrderStatus.SHIPPED
    assert updated.shipping_info == shipping
    assert updated.notes == "fragile"
    assert updated.items == order.items
    assert updated.created_at == order.created_at
    assert updated.updated_at > order.updated_at
    assert store.find_by_id("order-1") == updated


def test_update_replaces_items_in_order(store):
    store.create(_order())
    items = [
        OrderItem(id="a", product_id="prod-3", quantity=1),
        OrderItem(id="b", product_id="prod-4", quantity=7),
    ]

    updated = store.update("order-1", {"items": items})

    assert updated.items == items
    assert store.find_by_id("order-1").items == items


def test_update_unknown_returns_none(store):
    assert store.update("missing", {"notes": "x"}) is None


def test_delete(store):
    store.create(_order())
    assert store.delete("order-1") is True
    assert store.find_by_id("order-1") is None
    assert store.delete("order-1") is False
    assert store.count() == 0


def test_returned_orders_are_copies(store):
    store.create(_order())
    fetched = store.find_by_id("order-1")
    fetched.items.append(OrderItem(id="x", product_id="prod-x", quantity=1))
    fetched.updated_at += timedelta(days=1)

    assert len(store.find_by_id("order-1").items) == 2
