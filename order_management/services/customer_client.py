"""
Clients for the Customer Service
"""
import httpx
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from order_management.exceptions import CollaboratorError
from order_management.logger import get_logger
from order_management.schemas.external import Address, Customer

logger = get_logger(__name__)

# Customer ID the mock service reports as unknown
UNKNOWN_CUSTOMER_ID = "00000000-0000-0000-0000-000000000000"


class CustomerClient(ABC):
    """Customer lookup used by the order service"""

    @abstractmethod
    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        """
        Get customer by ID

        Returns:
            Customer data, or None if the customer does not exist

        Raises:
            CollaboratorError: If the lookup itself fails
        """


class MockCustomerClient(CustomerClient):
    """In-process stand-in for the Customer Service"""

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        logger.debug("mock_customer_lookup", customer_id=customer_id)
        if customer_id == UNKNOWN_CUSTOMER_ID:
            return None

        short_id = customer_id[:6]
        return Customer(
            id=customer_id,
            name=f"Customer {short_id}",
            email=f"customer-{short_id}@example.com",
            address=Address(
                street="123 Main St",
                city="Anytown",
                state="CA",
                zip_code="90210",
                country="USA",
            ),
            phone="+1-555-123-4567",
            created_at=datetime.now(timezone.utc).isoformat(),
        )


class HttpCustomerClient(CustomerClient):
    """Client for communicating with the Customer Service over HTTP"""

    def __init__(self, base_url: str, timeout: float = 5.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(f"{self.base_url}/customers/{customer_id}")
        except httpx.HTTPError as e:
            logger.error("customer_service_unavailable", customer_id=customer_id, error=str(e))
            raise CollaboratorError(f"Customer Service unavailable: {e}") from e

        if response.status_code == 200:
            return Customer.model_validate(response.json())
        if response.status_code == 404:
            logger.warning("customer_not_found", customer_id=customer_id)
            return None

        logger.error("customer_service_error", customer_id=customer_id, status_code=response.status_code)
        raise CollaboratorError(f"Unexpected status code from Customer Service: {response.status_code}")
