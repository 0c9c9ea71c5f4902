"""
Contact API — Request ID Middleware
=====================================

What:  Assigns a correlation ID to each request and echoes it in the response.
Why:   Every log line of one request (access log, service logs, error
       handlers) can be tied together, and clients can quote the ID in
       error reports.
How:   Reuses a client-sent X-Request-ID or generates a short UUID, stores it
       in a ContextVar and request.state, and sets the response header.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Behavior:
        1. Use the client's X-Request-ID header when present
        2. Otherwise generate an 8-character ID
        3. Store it in the ContextVar (loggers, exception handlers) and in
           request.state (route handlers)
        4. Add it to the response headers
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid

        return response
