"""
Customer API — Abstract Customer Store Interface
=================================================

What:  Abstract base class defining the data-access contract for customers.
Why:   Route handlers depend on this interface only, so the storage backend
       (MongoDB today) can be swapped or replaced by an in-memory double in tests.
How:   Concrete implementations inherit from CustomerStore and implement every
       abstract coroutine below.
Who:   Injected into route handlers via FastAPI's Depends().

Contract:
    - Implementations never recover from errors locally; they raise
      NotFoundError or StorageError and let the handler decide the response
    - No field validation happens here (the name rule belongs to the handler)
"""

from abc import ABC, abstractmethod
from typing import List

from customer_api.schemas.customer import Customer


class CustomerStore(ABC):
    """
    Abstract capability set {get, get_all, create, update} over Customer records.

    Implementations:
        - MongoCustomerStore: MongoDB collection with a unique index on `id`
        - InMemoryCustomerStore (tests/conftest.py): dict-backed test double
    """

    @abstractmethod
    async def get(self, customer_id: str) -> Customer:
        """
        Fetch the single customer whose identifier equals `customer_id`.

        Raises:
            NotFoundError: No record matches.
            StorageError:  Underlying I/O failure.
        """
        ...

    @abstractmethod
    async def get_all(self) -> List[Customer]:
        """
        Fetch every customer. Order is whatever the backend returns.

        An empty store yields an empty list, never an error.

        Raises:
            StorageError: Underlying I/O failure.
        """
        ...

    @abstractmethod
    async def create(self, customer: Customer) -> None:
        """
        Insert a new customer.

        Raises:
            StorageError: Duplicate identifier or any other I/O failure.
        """
        ...

    @abstractmethod
    async def update(self, customer_id: str, customer: Customer) -> None:
        """
        Replace every field of the record matched by `customer_id`.

        Matching nothing is a silent no-op; callers that need "not found"
        semantics must call get() first.

        Raises:
            StorageError: Underlying I/O failure.
        """
        ...

    @abstractmethod
    async def ping(self) -> None:
        """
        Check that the backend is reachable. Used by GET /health.

        Raises:
            StorageError: Backend unreachable.
        """
        ...

    async def close(self) -> None:
        """Release long-lived resources. Backends without any can rely on this no-op."""
        return None
