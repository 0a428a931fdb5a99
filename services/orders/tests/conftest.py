"""
Shared fixtures for the Orders service tests.

The database is an in-memory SQLite instance and the Users/Products services
are replaced by an ``httpx.MockTransport`` that records every request.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["USER_SERVICE_URL"] = "http://users.test"
os.environ["PRODUCT_SERVICE_URL"] = "http://products.test"

import anyio
import httpx
import pytest
from fastapi.testclient import TestClient

from app import models
from app.database import engine, SessionLocal
from app.main import app, get_http_client


class FakeUpstream:
    """In-memory Users and Products services."""

    def __init__(self):
        self.users = {1: {"id": 1, "name": "Alice", "email": "alice@example.com"}}
        self.products = {
            10: {"id": 10, "name": "Widget", "price": 9.99},
            20: {"id": 20, "name": "Gadget", "price": 5.00},
            30: {"id": 30, "name": "Gizmo", "price": 12.50},
        }
        self.calls = []
        self.raw_bodies = {}
        self.unreachable = False

    @property
    def user_calls(self):
        return [path for path in self.calls if path.startswith("/api/users/")]

    @property
    def product_calls(self):
        return [path for path in self.calls if path.startswith("/api/products/")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append(path)
        if self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if path in self.raw_bodies:
            return httpx.Response(200, content=self.raw_bodies[path])

        kind, _, raw_id = path.rpartition("/")
        table = {"/api/users": self.users, "/api/products": self.products}.get(kind)
        if table is None or not raw_id.isdigit() or int(raw_id) not in table:
            return httpx.Response(404, json={"detail": "Not found"})
        return httpx.Response(200, json=table[int(raw_id)])

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture(autouse=True)
def database():
    models.Base.metadata.create_all(bind=engine)
    yield
    models.Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def client(upstream):
    http_client = upstream.client()
    app.dependency_overrides[get_http_client] = lambda: http_client
    yield TestClient(app)
    app.dependency_overrides.clear()
    anyio.run(http_client.aclose)


@pytest.fixture
def anyio_backend():
    return "asyncio"
