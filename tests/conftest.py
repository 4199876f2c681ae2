"""Shared fixtures: an OrderService wired with in-process collaborators."""

import pytest
from fastapi.testclient import TestClient

from order_management.dependencies import get_order_service
from order_management.main import app
from order_management.publishers.event_publisher import InMemoryEventPublisher
from order_management.repositories.order_repository import InMemoryOrderRepository
from order_management.schemas.order import OrderCreate
from order_management.services.customer_client import MockCustomerClient
from order_management.services.inventory_client import MockInventoryClient
from order_management.services.order_service import OrderService

CUSTOMER_ID = "123e4567-e89b-12d3-a456-426614174001"
UNKNOWN_CUSTOMER_ID = "00000000-0000-0000-0000-000000000000"
PRODUCT_A = "123e4567-e89b-12d3-a456-426614174003"
PRODUCT_B = "223e4567-e89b-12d3-a456-426614174001"
UNKNOWN_PRODUCT = "999e4567-e89b-12d3-a456-426614174999"


@pytest.fixture()
def repository():
    return InMemoryOrderRepository()


@pytest.fixture()
def inventory():
    return MockInventoryClient(catalogue=[
        (PRODUCT_A, "Product A", 10.00, 5),
        (PRODUCT_B, "Product B", 2.50, 10),
    ])


@pytest.fixture()
def customers():
    return MockCustomerClient()


@pytest.fixture()
def publisher():
    return InMemoryEventPublisher()


@pytest.fixture()
def service(repository, customers, inventory, publisher):
    return OrderService(
        repository=repository,
        customer_client=customers,
        inventory_client=inventory,
        event_publisher=publisher,
    )


@pytest.fixture()
def client(service):
    app.dependency_overrides[get_order_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_create(*items, customer_id=CUSTOMER_ID):
    """Helper: build an OrderCreate from (product_id, quantity) pairs."""
    return OrderCreate(
        customer_id=customer_id,
        items=[{"product_id": product_id, "quantity": quantity} for product_id, quantity in items],
    )
