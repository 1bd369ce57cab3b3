# Middleware package init
"""
RetroBoard Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → Route Handler

    1. CORS first: OPTIONS preflight is answered before routing, and every
       other response (errors included) leaves with the CORS headers
    2. Request ID: correlation ID for logs, error bodies and X-Request-ID
    3. Logging: method, path, status and duration, tagged with the request ID
"""
