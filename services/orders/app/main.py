"""
Orders Service API

This module implements a FastAPI-based microservice for placing and reading orders.
New orders are validated against the Users and Products services, priced from the
product data, and stored in PostgreSQL together with their line items.

The service is designed to be part of a microservices architecture and includes
standard endpoints for service discovery and health monitoring.

Endpoints:
    GET /orders: List all orders
    GET /orders/{order_id}: Get a single order by ID
    GET /orders/user/{user_id}: List the orders of one user
    POST /orders: Place a new order
    GET /healthz: Health check endpoint for orchestration systems

Attributes:
    app (FastAPI): The FastAPI application instance configured with the title "orders-service"
"""
from contextlib import asynccontextmanager
from typing import List
import logging
import httpx
from fastapi import FastAPI, Depends, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from . import crud, models, schemas
from .config import settings
from .database import engine, get_db
from .exceptions import OrdersServiceError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Create database tables
models.Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = httpx.AsyncClient()
    logger.info(
        f"orders-service starting (users: {settings.user_service_url}, "
        f"products: {settings.product_service_url})"
    )
    try:
        yield
    finally:
        await app.state.http_client.aclose()


app = FastAPI(title="orders-service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_http_client(request: Request) -> httpx.AsyncClient:
    """
    Dependency function that provides the shared HTTP client for sibling services.
    """
    return request.app.state.http_client


@app.exception_handler(OrdersServiceError)
async def orders_service_error_handler(request: Request, exc: OrdersServiceError):
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # A non-integer id in the path matches no order
    if any(error["loc"] and error["loc"][0] == "path" for error in exc.errors()):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Not Found"})

    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": f"Invalid request: {errors}"},
    )


@app.get("/healthz", response_model=dict)
def health():
    """
    Health check endpoint for the orders service.

    This endpoint is used by orchestration systems (like Kubernetes) to verify
    that the service is running and able to respond to requests.

    Returns:
        dict: A dictionary containing the health status of the service.
            - status (str): Always returns "healthy" when the service is operational.

    Example:
        GET /healthz
        Response: {"status": "healthy"}
    """
    return {"status": "healthy"}

@app.get("/orders", response_model=List[schemas.Order])
def list_orders(db: Session = Depends(get_db)):
    """
    List all orders with their items.

    Args:
        db: Database session (injected)

    Returns:
        List of order objects (empty if there are none)
    """
    return crud.get_orders(db)

@app.get("/orders/user/{user_id}", response_model=List[schemas.Order])
def list_user_orders(user_id: int, db: Session = Depends(get_db)):
    """
    List the orders placed by one user.

    Args:
        user_id: ID of the user in the Users service
        db: Database session (injected)

    Returns:
        List of order objects (empty if the user has no orders)
    """
    return crud.get_orders_by_user(db, user_id=user_id)

@app.get("/orders/{order_id}", response_model=schemas.Order)
def get_order(order_id: int, db: Session = Depends(get_db)):
    """
    Get a single order by ID.

    Args:
        order_id: ID of the order to retrieve
        db: Database session (injected)

    Returns:
        Order object

    Raises:
        HTTPException: 404 if order not found
    """
    db_order = crud.get_order(db, order_id=order_id)
    if db_order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return db_order

@app.post(
    "/orders",
    response_model=schemas.Order,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": schemas.ErrorMessage}, 503: {"model": schemas.ErrorMessage}},
)
async def create_order(
    order: schemas.OrderCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Place a new order.

    This endpoint:
    - Rejects orders without products
    - Validates the user exists in the Users service
    - Looks up every product in the Products service and sums their prices
    - Stores the order and its items in one transaction

    Args:
        order: Order request (user ID and product IDs)
        request: Incoming request, used to build the Location header
        response: Outgoing response (injected)
        db: Database session (injected)
        client: Shared HTTP client (injected)

    Returns:
        Created order object

    Raises:
        OrderValidationError: 400 if there are no products or the user/a product is unknown
        UpstreamUnavailableError: 503 if a dependent service is unreachable
    """
    db_order = await crud.place_order(db, order, client)
    response.headers["Location"] = str(request.url_for("get_order", order_id=db_order.id))
    return db_order
