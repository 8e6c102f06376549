"""
Shoplist Backend: Request Logging Middleware
=============================================

What:  One access-log line per HTTP request, in the Apache "common" log format.
How:   Wraps the downstream app, then logs on the `shoplist.access` logger once
       the response is available. Level follows the status class.

Line format:
    127.0.0.1 - - [19/Oct/2026:10:15:32 +0000] "POST /recipes HTTP/1.1" 201 64

    The request ID, duration and individual fields are attached to the record
    via `extra` for handlers that emit structured output.

Not logged: request and response bodies.
"""

import logging
import time
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shoplist.middleware.request_id import request_id_var

logger = logging.getLogger("shoplist.access")

CLF_DATE_FORMAT = "%d/%b/%Y:%H:%M:%S %z"


def format_common_log(
    client_ip: str,
    when: datetime,
    method: str,
    target: str,
    http_version: str,
    status: int,
    content_length: str,
) -> str:
    """Render one request in the common log format (`-` for unknown size)."""
    return '%s - - [%s] "%s %s HTTP/%s" %d %s' % (
        client_ip,
        when.strftime(CLF_DATE_FORMAT),
        method,
        target,
        http_version,
        status,
        content_length or "-",
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one common-log-format line for each HTTP request.

    Level selection:
        5xx → ERROR, 4xx → WARNING, everything else → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        received_at = datetime.now(timezone.utc)

        client_ip = request.client.host if request.client else "-"
        method = request.method
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        http_version = request.scope.get("http_version", "1.1")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        rid = request_id_var.get("")

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            format_common_log(
                client_ip,
                received_at,
                method,
                target,
                http_version,
                status,
                response.headers.get("content-length", "-"),
            ),
            extra={
                "request_id": rid,
                "method": method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
