"""
Database operations and the order placement workflow for the Orders service.

Orders are only ever created, never updated or deleted: an order and its items
are written together in one transaction.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
import httpx
import logging
from . import models, schemas, validators
from .clients import users_client, products_client
from .exceptions import OrderValidationError, UpstreamUnavailableError

# Set up logging
logger = logging.getLogger(__name__)

def _orders_query(db: Session):
    return db.query(models.Order).options(selectinload(models.Order.order_items))

def get_order(db: Session, order_id: int) -> Optional[models.Order]:
    """
    Retrieve a single order by ID, together with its items.

    Args:
        db: Database session
        order_id: ID of the order to retrieve

    Returns:
        Order object or None if not found
    """
    return _orders_query(db).filter(models.Order.id == order_id).first()

def get_orders(db: Session) -> List[models.Order]:
    """
    Retrieve all orders with their items, in storage order.

    Args:
        db: Database session

    Returns:
        List of Order objects
    """
    return _orders_query(db).order_by(models.Order.id).all()

def get_orders_by_user(db: Session, user_id: int) -> List[models.Order]:
    """
    Retrieve all orders placed by one user.

    Args:
        db: Database session
        user_id: ID of the user in the Users service

    Returns:
        List of Order objects (empty if the user has no orders)
    """
    return _orders_query(db).filter(models.Order.user_id == user_id).order_by(models.Order.id).all()

def create_order(db: Session, order: models.Order) -> models.Order:
    """
    Persist a fully built order and its items in a single transaction.

    Args:
        db: Database session
        order: Order aggregate, items already attached

    Returns:
        The stored Order with database-assigned IDs

    Raises:
        SQLAlchemyError: If the write fails; nothing is persisted
    """
    try:
        db.add(order)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create order for user {order.user_id}: {e}")
        raise
    db.refresh(order)
    return order


async def place_order(db: Session, request: schemas.OrderCreate, client: httpx.AsyncClient) -> models.Order:
    """
    Validate, price and persist a new order.

    The user is checked first, then every product in request order. The first
    failure aborts the whole operation before anything is written.

    Args:
        db: Database session
        request: Incoming order request
        client: Shared HTTP client for the sibling services

    Returns:
        The stored Order, with display-only user and product names filled in

    Raises:
        OrderValidationError: No products, or an unknown user or product
        UpstreamUnavailableError: A sibling service could not be reached
    """
    is_valid, error_message = validators.validate_order_request(request)
    if not is_valid:
        raise OrderValidationError(error_message)

    try:
        user = await users_client.fetch_user(client, request.user_id)
        if user is None:
            raise OrderValidationError(
                f"User with ID {request.user_id} not found or UserService error."
            )

        total_amount = Decimal("0")
        product_names = []
        for product_id in request.product_ids:
            product = await products_client.fetch_product(client, product_id)
            if product is None:
                raise OrderValidationError(
                    f"Product with ID {product_id} not found or ProductService error."
                )
            product_names.append(product.name)
            total_amount += product.price
    except httpx.HTTPError as e:
        logger.error(f"Service communication error while placing order: {e}")
        raise UpstreamUnavailableError(f"Service communication error: {str(e)}")

    logger.info(f"Validated user {request.user_id} and {len(request.product_ids)} products, total {total_amount}")

    db_order = models.Order(
        user_id=request.user_id,
        total_amount=total_amount,
        order_date=datetime.now(timezone.utc),
        order_items=[models.OrderItem(product_id=product_id) for product_id in request.product_ids],
    )
    db_order = create_order(db, db_order)

    db_order.user_name = user.name
    db_order.product_names = product_names
    logger.info(f"Created order {db_order.id} with {len(db_order.order_items)} items")
    return db_order
