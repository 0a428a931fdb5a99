"""
Validation utilities for the Orders service.

Business rules checked before any sibling service is contacted.
"""
from typing import Tuple
from . import schemas


def validate_order_request(order: schemas.OrderCreate) -> Tuple[bool, str]:
    """
    Validate an order request for business rules.

    Args:
        order: Incoming order request

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not order.product_ids:
        return False, "Order request is invalid or has no products."

    return True, ""
