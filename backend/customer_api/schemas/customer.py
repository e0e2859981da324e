"""
Customer API — Pydantic Customer Schemas
=========================================

What:  Pydantic models for the customer record and the API envelopes.
Why:   The same Customer model is the API contract and the stored document
       shape, so a record round-trips between HTTP and MongoDB unchanged.
How:   FastAPI validates request bodies against Customer and serializes
       responses through the envelope models below.

Document shape in MongoDB:
    {"id": "123", "name": "John", "phones": [{"type": "mobile", "number": "555"}]}
    The store-generated `_id` is projected away and never reaches these models.
"""

from typing import Any, List

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Records
# ══════════════════════════════════════════════════════════════════════════


class Phone(BaseModel):
    """A single phone entry. Both fields are free-form."""

    type: str = Field(default="", description="Phone kind, e.g. 'mobile'")
    number: str = Field(default="", description="Phone number (format not validated)")


class Customer(BaseModel):
    """
    What:  A customer record addressed by a caller-assigned identifier.

    Decoding rules:
        - Missing string fields decode to "" (the name check lives in the route,
          so an absent name is reported as "could not be empty", not as a
          schema error)
        - Missing or null phones decode to []
        - Unknown keys are ignored
    """

    id: str = Field(default="", description="Caller-assigned unique identifier")
    name: str = Field(default="", description="Display name (required on create)")
    phones: List[Phone] = Field(default_factory=list, description="Ordered phone list")

    @field_validator("phones", mode="before")
    @classmethod
    def null_phones_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v


# ══════════════════════════════════════════════════════════════════════════
# Response Envelopes
# ══════════════════════════════════════════════════════════════════════════


class CustomerEnvelope(BaseModel):
    """
    What:  Wraps a customer returned by a successful mutation.
    Who:   POST /customers (201) and PUT /customers/{id} (200).
    """

    success: Customer


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by every endpoint.
    Why:   Clients read a single "error" key regardless of the failure kind.
    """

    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and store status.
    Who:   Returned by GET /health for monitoring and container health checks.
    """

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
