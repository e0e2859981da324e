"""
Customer API — Health Check Route
==================================

What:  Health check endpoint for container orchestration and monitoring.
How:   Pings the customer store and reports connectivity plus uptime.

Status levels:
    - healthy:   Store reachable (HTTP 200)
    - unhealthy: Store unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from customer_api import __version__
from customer_api.database import get_customer_store
from customer_api.exceptions import StorageError
from customer_api.schemas.customer import HealthResponse
from customer_api.services.customer_store import CustomerStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(store: CustomerStore = Depends(get_customer_store)):
    """Ping the store; a failed ping turns the whole service unhealthy."""
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except StorageError as exc:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: store unreachable: %s", exc.context)

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall == "unhealthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
