"""
SQLAlchemy Order models
"""
from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, JSON, Text, CheckConstraint
from sqlalchemy.orm import relationship

from order_management.database import Base


class OrderModel(Base):
    """Order database model"""

    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, index=True)
    customer_id = Column(String(36), nullable=False, index=True)
    total_price = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, index=True)
    shipping_info = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint('total_price >= 0', name='check_total_price_non_negative'),
        CheckConstraint(
            "status IN ('created', 'processing', 'shipped', 'delivered', 'canceled')",
            name='check_status_valid'
        ),
    )

    def __repr__(self):
        return f"<Order(id={self.id}, customer_id={self.customer_id}, status='{self.status}')>"


class OrderItemModel(Base):
    """Order line item database model"""

    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(36), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    order = relationship("OrderModel", back_populates="items")

    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
    )

    def __repr__(self):
        return f"<OrderItem(id={self.id}, product_id={self.product_id}, quantity={self.quantity})>"
