"""
Customer API — MongoDB Customer Store
======================================

What:  CustomerStore implementation backed by a MongoDB collection.
Why:   Customers are small self-contained documents addressed by a
       caller-assigned id, which maps directly onto a document collection.
How:   One long-lived AsyncMongoClient is opened by connect(); every operation
       runs inside its own client session which is released when the
       operation finishes, whether it succeeded or raised.
Who:   Created by the application lifespan; injected into route handlers.

Connection Lifecycle:
    connect()
      1. Open AsyncMongoClient(DB_HOST) — pooled, shared by all requests
      2. Ping the server (fail fast when unreachable)
      3. Ensure unique sparse index on `id` (idempotent)
      Any failure → StorageError → lifespan aborts → process exits
    close()
      Closes the client and every pooled connection

Error Translation:
    pymongo.errors.PyMongoError (including DuplicateKeyError) → StorageError
    find_one() returning None                                 → NotFoundError
    stored document failing Customer validation               → StorageError
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List

from pydantic import ValidationError as DocumentValidationError
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.client_session import AsyncClientSession
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from customer_api.exceptions import NotFoundError, StorageError
from customer_api.schemas.customer import Customer
from customer_api.services.customer_store import CustomerStore

logger = logging.getLogger(__name__)

# The store's own primary key never leaves the database
_PROJECTION: Dict[str, Any] = {"_id": False}

ID_INDEX_NAME = "customer_id_unique"


def _to_customer(document: Dict[str, Any], operation: str) -> Customer:
    """Decode a stored document; one that no longer fits the schema is a storage failure."""
    try:
        return Customer.model_validate(document)
    except DocumentValidationError as exc:
        logger.error("MongoDB %s returned an invalid document: %s", operation, exc)
        raise StorageError(
            context={"operation": operation, "error": str(exc)},
        ) from exc


class MongoCustomerStore(CustomerStore):
    """
    Customer data access over a single MongoDB collection.

    Query Patterns:
        - get:     find_one({"id": id})        → unique index lookup
        - get_all: find({})                    → collection scan, store order
        - create:  insert_one(document)        → unique index rejects duplicates
        - update:  replace_one({"id": id}, d)  → full replace, no upsert
    """

    def __init__(self, client: AsyncMongoClient, collection: AsyncCollection):
        self._client = client
        self._collection = collection

    # ── Lifecycle ─────────────────────────────────────────────────────────

    @classmethod
    async def connect(
        cls,
        host: str,
        db_name: str,
        collection_name: str = "customers",
        timeout_ms: int = 5000,
    ) -> "MongoCustomerStore":
        """
        Open the client, verify connectivity and ensure the unique id index.

        Raises:
            StorageError: Server unreachable or index creation failed. Callers
                treat this as fatal; there is no retry.
        """
        client: AsyncMongoClient = AsyncMongoClient(
            host,
            serverSelectionTimeoutMS=timeout_ms,
        )
        collection = client[db_name][collection_name]

        try:
            await client.admin.command("ping")
            await collection.create_index(
                [("id", ASCENDING)],
                name=ID_INDEX_NAME,
                unique=True,
                sparse=True,
                background=True,
            )
        except PyMongoError as exc:
            await client.close()
            raise StorageError(
                message="Could not initialise customer store",
                context={"host": host, "database": db_name, "error": str(exc)},
            ) from exc

        logger.info(
            "Connected to MongoDB %s/%s.%s (unique index '%s' ensured)",
            host, db_name, collection_name, ID_INDEX_NAME,
        )
        return cls(client, collection)

    async def close(self) -> None:
        await self._client.close()
        logger.info("MongoDB client closed")

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncClientSession, None]:
        """
        Scoped session for one operation; driver errors become StorageError.

        The session is ended on exit even when the body raises.
        """
        try:
            async with self._client.start_session() as session:
                yield session
        except PyMongoError as exc:
            logger.error("MongoDB %s failed: %s", operation, exc)
            raise StorageError(
                context={"operation": operation, "error": str(exc)},
            ) from exc

    # ── Operations ────────────────────────────────────────────────────────

    async def get(self, customer_id: str) -> Customer:
        async with self._session("get") as session:
            document = await self._collection.find_one(
                {"id": customer_id}, _PROJECTION, session=session
            )
        if document is None:
            raise NotFoundError(resource="Customer", resource_id=customer_id)
        return _to_customer(document, "get")

    async def get_all(self) -> List[Customer]:
        async with self._session("get_all") as session:
            cursor = self._collection.find({}, _PROJECTION, session=session)
            documents = await cursor.to_list(None)
        return [_to_customer(document, "get_all") for document in documents]

    async def create(self, customer: Customer) -> None:
        async with self._session("create") as session:
            # insert_one adds _id to the dict it is given; pass a throwaway copy
            await self._collection.insert_one(customer.model_dump(), session=session)

    async def update(self, customer_id: str, customer: Customer) -> None:
        async with self._session("update") as session:
            result = await self._collection.replace_one(
                {"id": customer_id}, customer.model_dump(), session=session
            )
        if result.matched_count == 0:
            logger.debug("Update for customer '%s' matched no document", customer_id)

    async def ping(self) -> None:
        async with self._session("ping") as session:
            await self._client.admin.command("ping", session=session)
