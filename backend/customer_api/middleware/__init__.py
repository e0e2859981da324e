"""
Customer API — Middleware Package
==================================

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler

    1. Request ID first: every later log line can carry the correlation ID
    2. Logging: records method, path, status and duration once the response is ready
"""
