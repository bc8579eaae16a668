"""
Error taxonomy for the reminder send endpoint.

Every failure on the request path is raised as a ReminderError subclass and
rendered by error_response() as {"error": ..., "detail"?: ...}.
"""

from fastapi.responses import JSONResponse


class ConfigurationError(RuntimeError):
    """Invalid process configuration. Raised at startup, never per request."""


class ReminderError(Exception):
    """Base class for failures that map to a structured HTTP response."""

    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.error)
        self.detail = detail

    def to_content(self) -> dict:
        content: dict = {"error": self.error}
        if self.detail is not None:
            content["detail"] = self.detail
        return content


class ValidationError(ReminderError):
    status_code = 400
    error = "Missing userId or date"


class NotFoundError(ReminderError):
    status_code = 404
    error = "Reservation not found"


class UpstreamError(ReminderError):
    """Airtable answered with a non-2xx status, timed out, or was unreachable."""

    status_code = 500
    error = "Reservation lookup failed"


class DispatchError(ReminderError):
    """LINE push API answered with a non-2xx status. detail carries its body."""

    status_code = 500
    error = "LINE push failed"


class UnexpectedError(ReminderError):
    status_code = 500
    error = "Internal server error"


def error_response(exc: ReminderError) -> JSONResponse:
    """Build JSONResponse for a ReminderError: {"error": ..., "detail"?: ...}."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())
