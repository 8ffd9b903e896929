# Middleware package init
"""
MindfulSpace Backend — Middleware Package
===========================================

What:  Cross-cutting concerns applied to every request, plus the auth guard
       dependency used by protected routers.

Middleware Chain:
    Request → [Request ID] → [Logging] → Route Handler (→ require_identity)

    Responses pass back through in reverse, so the access log sees the final
    status code and the X-Request-ID header is added last.
"""
