"""
Customer API — Customer Route Handlers
=======================================

What:  The four HTTP operations over the customer resource.
How:   Each handler makes one store call (update makes two: an existence check
       and the replace) and translates store failures into the operation's
       message and status code by re-raising a CustomerAPIError. The global
       handler in main.py renders that as {"error": message}.

Failure mapping:
    GET  /customers        store error              → 500 "Could not get Customers list"
    GET  /customers/{id}   missing or store error   → 404 "Customer not found"
    POST /customers        empty name (no store call) → 422 "Customer name could not be empty"
                           store error (dup id)     → 500 "Could not create customer (<name>)"
    PUT  /customers/{id}   missing or store error   → 404 "Customer not found"
                           path id != body id       → 422 "Could not update customer (Invalid ID)"
                           store error              → 422 "Could not update customer"
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from customer_api.database import get_customer_store
from customer_api.exceptions import (
    CustomerAPIError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from customer_api.schemas.customer import Customer, CustomerEnvelope, ErrorResponse
from customer_api.services.customer_store import CustomerStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get(
    "",
    response_model=List[Customer],
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="List all customers",
)
async def list_customers(
    store: CustomerStore = Depends(get_customer_store),
) -> List[Customer]:
    try:
        return await store.get_all()
    except CustomerAPIError as exc:
        raise StorageError(message="Could not get Customers list", context=exc.context) from exc


@router.get(
    "/{customer_id}",
    response_model=Customer,
    responses={404: {"description": "Customer not found", "model": ErrorResponse}},
    summary="Get a single customer by ID",
)
async def get_customer(
    customer_id: str,
    store: CustomerStore = Depends(get_customer_store),
) -> Customer:
    """
    Any store failure is reported as 404: the handler does not distinguish
    a missing record from an unreachable store.
    """
    try:
        return await store.get(customer_id)
    except CustomerAPIError as exc:
        raise NotFoundError(
            resource_id=customer_id, message="Customer not found", context=exc.context
        ) from exc


@router.post(
    "",
    response_model=CustomerEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={
        422: {"description": "Empty customer name", "model": ErrorResponse},
        500: {"description": "Store failure or duplicate id", "model": ErrorResponse},
    },
    summary="Create a customer",
)
async def create_customer(
    customer: Customer,
    store: CustomerStore = Depends(get_customer_store),
) -> CustomerEnvelope:
    """
    Create a customer with a caller-assigned id.

    The name rule is checked before the store is touched; duplicate ids are
    rejected by the store's unique index and surface as a generic 500.
    """
    if customer.name == "":
        raise ValidationError(message="Customer name could not be empty", field="name")

    try:
        await store.create(customer)
    except CustomerAPIError as exc:
        raise StorageError(
            message=f"Could not create customer ({customer.name})", context=exc.context
        ) from exc

    logger.info("Created customer '%s'", customer.id)
    return CustomerEnvelope(success=customer)


@router.put(
    "/{customer_id}",
    response_model=CustomerEnvelope,
    responses={
        404: {"description": "Customer not found", "model": ErrorResponse},
        422: {"description": "Invalid ID or store failure", "model": ErrorResponse},
    },
    summary="Replace a customer",
)
async def update_customer(
    customer_id: str,
    customer: Customer,
    store: CustomerStore = Depends(get_customer_store),
) -> CustomerEnvelope:
    """
    Replace every mutable field of an existing customer.

    The identifier is immutable: a body id that differs from the path id is
    rejected and the stored record is left untouched.
    """
    try:
        existing = await store.get(customer_id)
    except CustomerAPIError as exc:
        raise NotFoundError(
            resource_id=customer_id, message="Customer not found", context=exc.context
        ) from exc
    if existing.id == "":
        raise NotFoundError(resource_id=customer_id, message="Customer not found")

    if customer.id != customer_id:
        raise ValidationError(message="Could not update customer (Invalid ID)", field="id")

    try:
        await store.update(existing.id, customer)
    except CustomerAPIError as exc:
        raise StorageError(
            message="Could not update customer",
            status_code=422,
            context=exc.context,
        ) from exc

    logger.info("Updated customer '%s'", customer_id)
    return CustomerEnvelope(success=customer)
