"""
Composition root: picks mock or live collaborators from settings
"""
from functools import lru_cache

from order_management.config import Settings, settings
from order_management.database import create_db_engine, create_session_factory, init_db
from order_management.logger import get_logger
from order_management.publishers.event_publisher import (
    EventPublisher,
    InMemoryEventPublisher,
    RabbitMQEventPublisher
)
from order_management.repositories.order_repository import (
    InMemoryOrderRepository,
    OrderRepository,
    SqlAlchemyOrderRepository
)
from order_management.services.customer_client import CustomerClient, HttpCustomerClient, MockCustomerClient
from order_management.services.inventory_client import HttpInventoryClient, InventoryClient, MockInventoryClient
from order_management.services.order_service import OrderService

logger = get_logger(__name__)


def build_repository(config: Settings) -> OrderRepository:
    if config.ORDER_STORE_BACKEND == "sql":
        engine = create_db_engine(config.DATABASE_URL)
        init_db(engine)
        return SqlAlchemyOrderRepository(create_session_factory(engine))
    if config.ORDER_STORE_BACKEND != "memory":
        raise ValueError(f"Unknown ORDER_STORE_BACKEND: {config.ORDER_STORE_BACKEND}")
    return InMemoryOrderRepository()


def build_customer_client(config: Settings) -> CustomerClient:
    if config.USE_REAL_CUSTOMER_API:
        return HttpCustomerClient(config.CUSTOMER_SERVICE_URL, timeout=config.HTTP_TIMEOUT)
    return MockCustomerClient()


def build_inventory_client(config: Settings) -> InventoryClient:
    if config.USE_REAL_INVENTORY_API:
        return HttpInventoryClient(config.INVENTORY_SERVICE_URL, timeout=config.HTTP_TIMEOUT)
    return MockInventoryClient()


def build_event_publisher(config: Settings) -> EventPublisher:
    if config.USE_REAL_MESSAGE_BROKER:
        return RabbitMQEventPublisher(config.RABBITMQ_URL, config.RABBITMQ_EXCHANGE, source=config.SERVICE_NAME)
    return InMemoryEventPublisher(source=config.SERVICE_NAME)


def build_order_service(config: Settings) -> OrderService:
    """Wire an OrderService with the collaborators selected by config"""
    logger.info(
        "order_service_wired",
        store=config.ORDER_STORE_BACKEND,
        customer_api="live" if config.USE_REAL_CUSTOMER_API else "mock",
        inventory_api="live" if config.USE_REAL_INVENTORY_API else "mock",
        message_broker="live" if config.USE_REAL_MESSAGE_BROKER else "mock",
    )
    return OrderService(
        repository=build_repository(config),
        customer_client=build_customer_client(config),
        inventory_client=build_inventory_client(config),
        event_publisher=build_event_publisher(config),
    )


@lru_cache
def get_order_service() -> OrderService:
    """Dependency returning the process-wide OrderService"""
    return build_order_service(settings)
