# Middleware package init
"""
Catalog API — Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID first, so every log line of the request carries the ID
    - Logging measures everything below it, including exception rendering
"""
