"""
Customer API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── memory_store:   InMemoryCustomerStore (dict-backed CustomerStore double)
    ├── mock_store:     AsyncMock with the CustomerStore interface
    ├── test_client:    HTTPX AsyncClient bound to an app serving memory_store
    └── mock_client:    HTTPX AsyncClient bound to an app serving mock_store
"""

import copy
import os
from typing import Dict, List
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["DB_HOST"] = "mongodb://localhost:27017"
os.environ["DB_NAME"] = "customers_test"
os.environ["LOG_LEVEL"] = "WARNING"

from customer_api.exceptions import NotFoundError, StorageError  # noqa: E402
from customer_api.main import create_app  # noqa: E402
from customer_api.schemas.customer import Customer  # noqa: E402
from customer_api.services.customer_store import CustomerStore  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Store Double
# ══════════════════════════════════════════════════════════════════════════

class InMemoryCustomerStore(CustomerStore):
    """
    Dict-backed CustomerStore with the same observable semantics as MongoDB:
    duplicate ids fail, missing ids raise NotFoundError on get, update of a
    missing id is a silent no-op. Records are copied in and out so callers
    cannot mutate stored state.
    """

    def __init__(self):
        self.records: Dict[str, Customer] = {}
        self.reachable = True

    def _check(self, operation: str) -> None:
        if not self.reachable:
            raise StorageError(context={"operation": operation, "error": "store offline"})

    async def get(self, customer_id: str) -> Customer:
        self._check("get")
        if customer_id not in self.records:
            raise NotFoundError(resource="Customer", resource_id=customer_id)
        return self.records[customer_id].model_copy(deep=True)

    async def get_all(self) -> List[Customer]:
        self._check("get_all")
        return [c.model_copy(deep=True) for c in self.records.values()]

    async def create(self, customer: Customer) -> None:
        self._check("create")
        if customer.id in self.records:
            raise StorageError(context={"operation": "create", "error": "duplicate key"})
        self.records[customer.id] = customer.model_copy(deep=True)

    async def update(self, customer_id: str, customer: Customer) -> None:
        self._check("update")
        if customer_id in self.records:
            self.records[customer_id] = customer.model_copy(deep=True)

    async def ping(self) -> None:
        self._check("ping")


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_store():
    return InMemoryCustomerStore()


@pytest.fixture
def mock_store():
    """
    Provides a mocked CustomerStore.

    Usage:
        async def test_get(mock_store, mock_client):
            mock_store.get.return_value = Customer(id="123", name="John")
    """
    return AsyncMock(spec=CustomerStore)


@pytest.fixture
def sample_customer_data():
    return {
        "id": "123",
        "name": "John",
        "phones": [{"type": "mobile", "number": "555-0100"}],
    }


@pytest.fixture
def customer_payload(sample_customer_data):
    """A fresh copy per test so tests may mutate it."""
    return copy.deepcopy(sample_customer_data)


async def _client_for(store: CustomerStore):
    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    Provides an async HTTP client talking to an app backed by memory_store.

    ASGITransport does not run the lifespan, so no MongoDB connection is attempted.
    """
    async for client in _client_for(memory_store):
        yield client


@pytest_asyncio.fixture
async def mock_client(mock_store):
    """Provides an async HTTP client talking to an app backed by mock_store."""
    async for client in _client_for(mock_store):
        yield client
