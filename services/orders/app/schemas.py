"""
Pydantic schemas for request/response validation in the Orders service.

These schemas define the structure of data for API requests and responses.
JSON payloads use camelCase keys (``userId``, ``productIds``) to match the
other services in the demo.
"""
from datetime import datetime
from typing import Annotated, Optional, List
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator
from pydantic.alias_generators import to_camel

# Totals travel as JSON numbers, not strings
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    """Base schema that reads and writes camelCase JSON keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderCreate(CamelModel):
    """Schema for creating a new order."""
    user_id: int
    product_ids: List[int] = Field(default_factory=list, description="IDs of the ordered products")


class OrderItem(CamelModel):
    """Schema for an order line item. The parent order is referenced by ID only."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    order_id: int


class Order(CamelModel):
    """
    Schema for order responses.

    Attributes:
        id (int): Order's unique identifier
        user_id (int): ID of the user who placed the order
        total_amount (Decimal): Total amount of the order
        order_date (datetime): When the order was created
        order_items (List[OrderItem]): Order line items
        user_name (str): Name of the user, only set on a freshly placed order
        product_names (List[str]): Product names, only set on a freshly placed order
        product_ids (List[int]): Product IDs derived from the order items
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    total_amount: Money
    order_date: datetime
    order_items: List[OrderItem] = Field(default_factory=list)
    user_name: Optional[str] = None
    product_names: List[str] = Field(default_factory=list)
    product_ids: List[int] = Field(default_factory=list)


class UserRecord(BaseModel):
    """User data returned by the Users service. Unknown fields are ignored."""
    id: Optional[int] = None
    name: str


class ProductRecord(BaseModel):
    """Product data returned by the Products service. Unknown fields are ignored."""
    name: str
    price: Decimal = Field(..., ge=0)

    @field_validator("price", mode="before")
    @classmethod
    def price_from_text(cls, v):
        # JSON floats go through str() so 9.99 stays Decimal("9.99")
        if isinstance(v, float):
            return str(v)
        return v


class ErrorMessage(BaseModel):
    """Body of a 4xx/5xx response raised by the order workflow."""
    message: str
