"""
Services package
"""
from order_management.services.order_service import OrderService
from order_management.services.customer_client import CustomerClient, MockCustomerClient, HttpCustomerClient
from order_management.services.inventory_client import InventoryClient, MockInventoryClient, HttpInventoryClient

__all__ = [
    "OrderService",
    "CustomerClient",
    "MockCustomerClient",
    "HttpCustomerClient",
    "InventoryClient",
    "MockInventoryClient",
    "HttpInventoryClient"
]
