"""
Customer API — Application Package Initializer
===============================================

What: Marks the `customer_api` directory as a Python package.
Why:  Enables module imports like `from customer_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service is split into thin layers:

    ┌─────────────────────────────────────┐
    │        Routes (Handler Layer)       │  ← HTTP concerns, validation, status codes
    ├─────────────────────────────────────┤
    │     Services (Data-Access Layer)    │  ← CustomerStore and its MongoDB backend
    ├─────────────────────────────────────┤
    │          Schemas (Records)          │  ← Pydantic Customer / Phone models
    ├─────────────────────────────────────┤
    │        Database (Connection)        │  ← Long-lived AsyncMongoClient
    └─────────────────────────────────────┘

    Routes depend on the abstract CustomerStore only, so the MongoDB backend
    can be replaced by any other implementation (tests use an in-memory one).
"""

__version__ = "1.0.0"
