"""
Order API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional

from order_management.dependencies import get_order_service
from order_management.logger import get_logger
from order_management.services.order_service import OrderService
from order_management.schemas.order import (
    ApiResponse,
    Order,
    OrderCreate,
    OrderStatus,
    OrderStatusUpdate,
    OrderUpdate,
    ShippingUpdate
)

router = APIRouter(prefix="/orders", tags=["orders"])

logger = get_logger(__name__)


def _not_found(order_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Order with ID {order_id} not found"
    )


@router.get("", response_model=ApiResponse[List[Order]], summary="Get all orders")
async def get_orders(
    customer_id: Optional[str] = Query(None, description="Only orders of this customer"),
    order_status: Optional[OrderStatus] = Query(None, alias="status", description="Only orders in this status"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve all orders

    - **customer_id**: Filter by customer ID (optional)
    - **status**: Filter by order status (optional)
    """
    orders = await service.list_orders(customer_id=customer_id, status=order_status)
    return ApiResponse[List[Order]].ok(orders, "Orders retrieved successfully")


@router.get("/{order_id}", response_model=ApiResponse[Order], summary="Get order by ID")
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve a specific order by ID

    - **order_id**: Order ID
    """
    order = await service.get_order(order_id)
    if not order:
        raise _not_found(order_id)
    return ApiResponse[Order].ok(order, "Order retrieved successfully")


@router.post("", response_model=ApiResponse[Order], status_code=status.HTTP_201_CREATED, summary="Create order")
async def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
):
    """
    Create a new order

    Process:
    1. Validate customer exists (call Customer Service)
    2. Validate products exist and check stock (call Inventory Service)
    3. Calculate total price
    4. Reserve inventory
    5. Save order
    6. Publish order.created event

    - **customer_id**: Customer ID (required)
    - **items**: Products and quantities (required, at least one)
    """
    logger.info("create_order_requested", customer_id=str(order_data.customer_id))
    order = await service.create_order(order_data)
    return ApiResponse[Order].ok(order, "Order created successfully")


@router.put("/{order_id}", response_model=ApiResponse[Order], summary="Update order")
async def update_order(
    order_id: str,
    order_data: OrderUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Update customer, items or notes of an order

    Supplied items replace the current ones. Delivered and canceled
    orders cannot be updated.

    - **order_id**: Order ID
    """
    order = await service.update_order(order_id, order_data)
    return ApiResponse[Order].ok(order, "Order updated successfully")


@router.put("/{order_id}/shipping", response_model=ApiResponse[Order], summary="Update shipping information")
async def update_shipping(
    order_id: str,
    shipping_data: ShippingUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Replace the shipping information of an order

    - **order_id**: Order ID
    - **tracking_number**: Tracking number (required)
    - **tracking_company**: UPS, FedEx, DHL, USPS or Other (required)
    """
    order = await service.update_shipping(order_id, shipping_data)
    return ApiResponse[Order].ok(order, "Shipping information updated successfully")


@router.put("/{order_id}/status", response_model=ApiResponse[Order], summary="Update order status")
async def update_order_status(
    order_id: str,
    status_data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service)
):
    """
    Update order status

    - **order_id**: Order ID
    - **status**: New status (created, processing, shipped, delivered, canceled)
    - **status_reason**: Reason for the change (optional)
    """
    logger.info("update_status_requested", order_id=order_id, status=status_data.status.value)
    order = await service.update_status(order_id, status_data)
    return ApiResponse[Order].ok(order, "Order status updated successfully")


@router.delete("/{order_id}", response_model=ApiResponse, summary="Delete order")
async def delete_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
):
    """
    Delete an order

    - **order_id**: Order ID
    """
    deleted = await service.delete_order(order_id)
    if not deleted:
        raise _not_found(order_id)
    return ApiResponse.ok(None, "Order deleted successfully")
