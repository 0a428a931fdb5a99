"""
SQLAlchemy ORM models for the Orders service.

Defines the database schema for order-related tables.
"""
from sqlalchemy import Column, Integer, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship, reconstructor
from .database import Base


class Order(Base):
    """
    Order model representing a customer order in the system.

    Attributes:
        id (int): Primary key, assigned by the database
        user_id (int): ID of the user in the Users service who placed the order
        total_amount (Decimal): Sum of the product prices at creation time
        order_date (datetime): Timestamp when the order was created
        order_items (list): Order line items, one per ordered product

    ``user_name`` and ``product_names`` are display-only values filled in while
    the order is being placed; they are not persisted.
    """
    __tablename__ = "Orders"

    id = Column("Id", Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column("UserId", Integer, nullable=False)
    total_amount = Column("TotalAmount", Numeric(10, 2), nullable=False, default=0)
    order_date = Column("OrderDate", DateTime(timezone=True), nullable=False)

    order_items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_display_fields()

    @reconstructor
    def _init_display_fields(self):
        self.user_name = None
        self.product_names = []

    @property
    def product_ids(self):
        return [item.product_id for item in self.order_items]


class OrderItem(Base):
    """
    A single product line of an order.

    Attributes:
        id (int): Primary key, auto-incrementing item ID
        product_id (int): ID of the product in the Products service
        order_id (int): Foreign key to the owning order
    """
    __tablename__ = "OrderItems"

    id = Column("Id", Integer, primary_key=True, index=True, autoincrement=True)
    product_id = Column("ProductId", Integer, nullable=False)
    order_id = Column("OrderId", Integer, ForeignKey("Orders.Id"), nullable=False, index=True)

    order = relationship("Order", back_populates="order_items")
