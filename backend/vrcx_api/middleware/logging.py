"""
VRCX Companion API — Request Logging Middleware
================================================

What:  One access-log line per HTTP request: method, path, status, duration.
How:   Logs after the response is produced; level follows the status class
       (5xx → ERROR, 4xx → WARNING, otherwise INFO).
Who:   Applied to every request; runs inside RequestIDMiddleware so the
       correlation ID is available.

Not logged:
    - Probe endpoints (/health, /healthz, /v1/ping): polled every few seconds
    - Request bodies: memos are user content
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from vrcx_api.middleware.request_id import request_id_var

logger = logging.getLogger("vrcx_api.access")

PROBE_PATHS = frozenset({"/health", "/healthz", "/v1/ping"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in PROBE_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
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
        return response
