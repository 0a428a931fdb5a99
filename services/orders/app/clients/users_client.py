"""
HTTP client for communicating with the Users service.

This module provides functions to validate user existence and retrieve user data
from the Users microservice.
"""
import logging
import httpx
from typing import Optional
from pydantic import ValidationError

from ..config import settings
from ..schemas import UserRecord

logger = logging.getLogger(__name__)


def user_url(user_id: int) -> str:
    return f"{settings.user_service_url.rstrip('/')}/api/users/{user_id}"


async def fetch_user(client: httpx.AsyncClient, user_id: int) -> Optional[UserRecord]:
    """
    Retrieve user data from the Users service.

    Args:
        client: Shared HTTP client
        user_id: The ID of the user to retrieve

    Returns:
        User record if the service answered with a 2xx status and a readable body,
        None otherwise

    Raises:
        httpx.HTTPError: If there's a network error or the service is unavailable
    """
    response = await client.get(user_url(user_id))
    if not response.is_success:
        logger.warning(f"Users service returned {response.status_code} for user {user_id}")
        return None

    try:
        return UserRecord.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        logger.warning(f"Unreadable user payload for user {user_id}: {e}")
        return None

