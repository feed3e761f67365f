"""
LivDaily Backend — Middleware Package
=======================================

Cross-cutting concerns applied to every request.

Middleware chain (outermost first):
    Request → [Request ID] → [Rate Limit] → [Logging] → [GZip] → [CORS] → Route

Starlette runs the middleware added last first, so main.create_app adds them
in the reverse of this order.
"""
