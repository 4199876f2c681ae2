"""
Repositories package
"""
from order_management.repositories.order_repository import (
    OrderRepository,
    InMemoryOrderRepository,
    SqlAlchemyOrderRepository
)

__all__ = ["OrderRepository", "InMemoryOrderRepository", "SqlAlchemyOrderRepository"]
