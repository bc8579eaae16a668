"""
Correlation ID middleware for request tracing.

Reads X-Correlation-ID from the incoming request or generates a UUID, and
stores it in request.state and a contextvar so reminder dispatch logs can be
tied to the call that triggered them.
"""

import uuid
from contextvars import ContextVar
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

HEADER_CORRELATION_ID = "X-Correlation-ID"

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id(request: Request | None = None) -> str | None:
    """
    Get correlation ID for the current request.
    Prefers request.state, then contextvar. Returns None if neither set.
    """
    if request is not None and getattr(request.state, "correlation_id", None):
        return request.state.correlation_id
    return _correlation_id_var.get()


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware that sets correlation_id on every request.
    Reuses X-Correlation-ID header if present (max 128 chars), otherwise generates UUID.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        incoming = (request.headers.get(HEADER_CORRELATION_ID) or "").strip()
        cid = incoming if incoming and len(incoming) <= 128 else str(uuid.uuid4())
        request.state.correlation_id = cid
        token = _correlation_id_var.set(cid)
        try:
            response = await call_next(request)
        finally:
            _correlation_id_var.reset(token)
        response.headers[HEADER_CORRELATION_ID] = cid
        return response
