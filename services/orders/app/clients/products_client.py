"""
HTTP client for communicating with the Products service.

Used to validate the products of an order and to look up their names and prices.
"""
import logging
import httpx
from typing import Optional
from pydantic import ValidationError

from ..config import settings
from ..schemas import ProductRecord

logger = logging.getLogger(__name__)


def product_url(product_id: int) -> str:
    return f"{settings.product_service_url.rstrip('/')}/api/products/{product_id}"


async def fetch_product(client: httpx.AsyncClient, product_id: int) -> Optional[ProductRecord]:
    """
    Retrieve a product from the Products service.

    Args:
        client: Shared HTTP client
        product_id: The ID of the product to retrieve

    Returns:
        Product record (name and price) if the service answered with a 2xx status
        and a readable body, None otherwise

    Raises:
        httpx.HTTPError: If there's a network error or the service is unavailable
    """
    response = await client.get(product_url(product_id))
    if not response.is_success:
        logger.warning(f"Products service returned {response.status_code} for product {product_id}")
        return None

    try:
        return ProductRecord.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        logger.warning(f"Unreadable product payload for product {product_id}: {e}")
        return None
