"""Tests for collaborator wiring from settings"""

import pytest

from order_management.config import Settings
from order_management.dependencies import (
    build_customer_client,
    build_event_publisher,
    build_inventory_client,
    build_order_service,
    build_repository,
)
from order_management.publishers.event_publisher import InMemoryEventPublisher, RabbitMQEventPublisher
from order_management.repositories.order_repository import InMemoryOrderRepository, SqlAlchemyOrderRepository
from order_management.services.customer_client import HttpCustomerClient, MockCustomerClient
from order_management.services.inventory_client import HttpInventoryClient, MockInventoryClient


def test_defaults_use_mocks():
    service = build_order_service(Settings())

    assert isinstance(service.repository, InMemoryOrderRepository)
    assert isinstance(service.customer_client, MockCustomerClient)
    assert isinstance(service.inventory_client, MockInventoryClient)
    assert isinstance(service.event_publisher, InMemoryEventPublisher)


def test_live_collaborators():
    config = Settings(
        USE_REAL_CUSTOMER_API=True,
        USE_REAL_INVENTORY_API=True,
        USE_REAL_MESSAGE_BROKER=True,
        CUSTOMER_SERVICE_URL="http://customers:3001/",
        INVENTORY_SERVICE_URL="http://inventory:3002",
        HTTP_TIMEOUT=2.5,
        RABBITMQ_EXCHANGE="orders",
    )

    customers = build_customer_client(config)
    inventory = build_inventory_client(config)
    publisher = build_event_publisher(config)

    assert isinstance(customers, HttpCustomerClient)
    assert customers.base_url == "http://customers:3001"
    assert customers.timeout == 2.5
    assert isinstance(inventory, HttpInventoryClient)
    assert inventory.base_url == "http://inventory:3002"
    assert isinstance(publisher, RabbitMQEventPublisher)
    assert publisher.exchange == "orders"
    assert publisher.source == config.SERVICE_NAME


def test_sql_store(tmp_path):
    repository = build_repository(Settings(
        ORDER_STORE_BACKEND="sql",
        DATABASE_URL=f"sqlite:///{tmp_path / 'orders.db'}",
    ))

    assert isinstance(repository, SqlAlchemyOrderRepository)
    assert repository.count() == 0


def test_unknown_store_backend():
    with pytest.raises(ValueError, match="Unknown ORDER_STORE_BACKEND"):
        build_repository(Settings(ORDER_STORE_BACKEND="redis"))
