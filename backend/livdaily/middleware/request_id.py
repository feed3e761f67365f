"""
LivDaily Backend — Request ID Middleware
==========================================

What:  Tags each request with a short correlation ID and echoes it back in
       the X-Request-ID response header.
How:   Honour a client-supplied X-Request-ID, otherwise generate one. The ID
       lives in a ContextVar so loggers, services and exception handlers can
       read it without threading it through every call.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
