"""
NoteStore - Request Logging Middleware
========================================

What:  One access-log line per handled HTTP request.
How:   Times the downstream call and logs method, path, status, duration,
       request ID and client IP on the "notestore.access" logger.
When:  Inside RequestIDMiddleware, so the request ID is already set.

Example line:
    2024-01-15T12:00:00 [INFO] notestore.access: PUT /notes/todo 200 1.4ms [a1b2c3d4] from 127.0.0.1

Request and response bodies are never logged; they are the users' notes.
At DEBUG the note name from the matched route is logged as well.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notestore.middleware.request_id import request_id_var

logger = logging.getLogger("notestore.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Level by status: 5xx → ERROR, 4xx → WARNING, everything else → INFO.
    The same fields are attached as `extra` for handlers that emit JSON.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client is None under some test transports
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        # filled in by the router once a route matched
        note_name = request.path_params.get("note_name")

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        if note_name is not None:
            logger.debug("%s %s touched note %r [%s]", method, path, note_name, rid)

        return response
