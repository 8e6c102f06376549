"""
Shoplist Backend: Request ID Middleware
========================================

What:  Gives every request a correlation ID and threads it through logging.
How:   RequestIDMiddleware picks the ID (a well-formed inbound X-Request-ID, or
       a short UUID prefix), binds it to a ContextVar for the duration of the
       request and echoes it in the response header. RequestIDLogFilter copies
       the current ID onto every log record so the root format can print
       `%(request_id)s`, including records from uvicorn and the services.

Inbound IDs:
    Accepted only if they match REQUEST_ID_PATTERN (1-64 chars of letters,
    digits, `.`, `_`, `-`); anything else is replaced, so client input never
    lands unescaped in log lines or response headers.
"""

import logging
import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(inbound: Optional[str]) -> str:
    """Return `inbound` if it is a usable ID, else a fresh 8-char one."""
    if inbound and REQUEST_ID_PATTERN.match(inbound):
        return inbound
    return uuid.uuid4().hex[:8]


class RequestIDLogFilter(logging.Filter):
    """
    Sets `record.request_id` from the current request context.

    Records that already carry one (the access log passes it via `extra`) are
    left alone; outside a request the value is "-".
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Binds a request ID for the lifetime of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = rid

        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
