"""
Customer API — Store Lifecycle & Dependency
============================================

What:  Opens the customer store for the process and hands it to route handlers.
Why:   No process-wide store singleton: the store lives on `app.state` and is
       injected per request, so tests can build an app around any CustomerStore.
How:   open_customer_store() is awaited by the lifespan on startup;
       get_customer_store() is the FastAPI dependency used by every route.
"""

from fastapi import Request

from customer_api.config import Settings
from customer_api.services.customer_store import CustomerStore
from customer_api.services.mongo_store import MongoCustomerStore


async def open_customer_store(config: Settings) -> CustomerStore:
    """
    Connect the MongoDB-backed store described by `config`.

    Raises:
        StorageError: Store unreachable or index setup failed (fatal at startup).
    """
    return await MongoCustomerStore.connect(
        host=config.db_host,
        db_name=config.db_name,
        collection_name=config.db_collection,
        timeout_ms=config.db_timeout_ms,
    )


def get_customer_store(request: Request) -> CustomerStore:
    """
    FastAPI dependency returning the store attached to the running app.

    Example usage in a route:
        @router.get("/customers")
        async def list_customers(store: CustomerStore = Depends(get_customer_store)):
            return await store.get_all()
    """
    return request.app.state.customer_store
