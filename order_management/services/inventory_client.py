"""
Clients for the Inventory Service
"""
import httpx
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional, Tuple

from order_management.exceptions import CollaboratorError
from order_management.logger import get_logger
from order_management.schemas.external import Dimensions, Product

logger = get_logger(__name__)


class InventoryClient(ABC):
    """Inventory operations used by the order service"""

    @abstractmethod
    async def get_product(self, product_id: str) -> Optional[Product]:
        """Get product by ID, or None if it does not exist"""

    @abstractmethod
    async def get_inventory(self, product_id: str) -> int:
        """Get available quantity of a product (0 if unknown)"""

    @abstractmethod
    async def reserve_inventory(self, product_id: str, quantity: int) -> bool:
        """
        Reserve quantity units of a product

        Returns:
            True if reserved, False if there was not enough stock
        """

    @abstractmethod
    async def release_inventory(self, product_id: str, quantity: int) -> bool:
        """Return quantity units of a product to available stock"""


# (product_id, name, price, stock)
DEMO_CATALOGUE: Tuple[Tuple[str, str, float, int], ...] = (
    ("123e4567-e89b-12d3-a456-426614174003", "Test Product 123e45", 49.99, 20),
    ("123e4567-e89b-12d3-a456-426614174000", "Wireless Headphones", 129.99, 50),
    ("223e4567-e89b-12d3-a456-426614174001", "USB-C Charger", 24.99, 80),
    ("323e4567-e89b-12d3-a456-426614174002", "Mechanical Keyboard", 89.99, 35),
    ("523e4567-e89b-12d3-a456-426614174004", "Laptop Stand", 39.99, 60),
    ("923e4567-e89b-12d3-a456-426614174005", "Webcam", 59.99, 25),
    ("923e4567-e89b-12d3-a456-426614174006", "Desk Lamp", 34.99, 40),
    ("823e4567-e89b-12d3-a456-426614174007", "Monitor Arm", 74.99, 15),
    ("923e4567-e89b-12d3-a456-426614174008", "Wireless Mouse", 29.99, 90),
    ("a23e4567-e89b-12d3-a456-426614174009", "HDMI Cable", 9.99, 100),
    ("b23e4567-e89b-12d3-a456-426614174010", "External SSD", 119.99, 30),
    ("c23e4567-e89b-12d3-a456-426614174011", "Bluetooth Speaker", 69.99, 45),
    ("d23e4567-e89b-12d3-a456-426614174012", "Phone Case", 14.99, 70),
    # limited inventory
    ("623e4567-e89b-12d3-a456-426614174005", "Limited Edition Watch", 249.99, 3),
    # out of stock
    ("723e4567-e89b-12d3-a456-426614174006", "Sold Out Sneakers", 99.99, 0),
)


class MockInventoryClient(InventoryClient):
    """In-process stand-in for the Inventory Service"""

    def __init__(self, catalogue: Optional[Iterable[Tuple[str, str, float, int]]] = None):
        self.products: Dict[str, Product] = {}
        self.stock: Dict[str, int] = {}
        for product_id, name, price, stock in (DEMO_CATALOGUE if catalogue is None else catalogue):
            self.add_product(product_id, name, price, stock)

    def add_product(self, product_id: str, name: str, price: float, stock: int) -> Product:
        """Register a product and set its available stock"""
        product = Product(
            id=product_id,
            name=name,
            price=price,
            description=f"This is a description for product {product_id[:6]}",
            weight=1.5,
            dimensions=Dimensions(length=10, width=5, height=2),
            sku=f"SKU-{product_id[:6]}",
            category="Electronics",
        )
        self.products[product_id] = product
        self.stock[product_id] = stock
        return product

    async def get_product(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    async def get_inventory(self, product_id: str) -> int:
        return self.stock.get(product_id, 0)

    async def reserve_inventory(self, product_id: str, quantity: int) -> bool:
        current = self.stock.get(product_id, 0)
        if current < quantity:
            logger.warning("inventory_reserve_rejected", product_id=product_id,
                           requested=quantity, available=current)
            return False

        self.stock[product_id] = current - quantity
        logger.info("inventory_reserved", product_id=product_id, quantity=quantity,
                    available=self.stock[product_id])
        return True

    async def release_inventory(self, product_id: str, quantity: int) -> bool:
        self.stock[product_id] = self.stock.get(product_id, 0) + quantity
        logger.info("inventory_released", product_id=product_id, quantity=quantity,
                    available=self.stock[product_id])
        return True


class HttpInventoryClient(InventoryClient):
    """Client for communicating with the Inventory Service over HTTP"""

    def __init__(self, base_url: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                return await client.request(method, f"{self.base_url}{path}", **kwargs)
        except httpx.HTTPError as e:
            logger.error("inventory_service_unavailable", method=method, path=path, error=str(e))
            raise CollaboratorError(f"Inventory Service unavailable: {e}") from e

    @staticmethod
    def _unexpected(response: httpx.Response, product_id: str) -> CollaboratorError:
        logger.error("inventory_service_error", product_id=product_id, status_code=response.status_code)
        return CollaboratorError(f"Unexpected status code from Inventory Service: {response.status_code}")

    async def get_product(self, product_id: str) -> Optional[Product]:
        response = await self._request("GET", f"/products/{product_id}")
        if response.status_code == 200:
            return Product.model_validate(response.json())
        if response.status_code == 404:
            logger.warning("product_not_found", product_id=product_id)
            return None
        raise self._unexpected(response, product_id)

    async def get_inventory(self, product_id: str) -> int:
        response = await self._request("GET", f"/inventory/{product_id}")
        if response.status_code == 200:
            return int(response.json().get("quantity", 0))
        if response.status_code == 404:
            logger.warning("inventory_not_found", product_id=product_id)
            return 0
        raise self._unexpected(response, product_id)

    async def reserve_inventory(self, product_id: str, quantity: int) -> bool:
        response = await self._request("POST", f"/inventory/{product_id}/reserve", json={"quantity": quantity})
        if response.status_code == 200:
            return bool(response.json().get("success", False))
        if response.status_code == 400:
            logger.warning("inventory_reserve_rejected", product_id=product_id, requested=quantity)
            return False
        raise self._unexpected(response, product_id)

    async def release_inventory(self, product_id: str, quantity: int) -> bool:
        response = await self._request("POST", f"/inventory/{product_id}/release", json={"quantity": quantity})
        if response.status_code == 200:
            return bool(response.json().get("success", False))
        raise self._unexpected(response, product_id)
