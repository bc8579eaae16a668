"""
Send endpoint response schemas.
"""

from pydantic import BaseModel


class SendSuccessResponse(BaseModel):
    """Body returned when the reminder was pushed."""

    success: bool = True


class SendErrorResponse(BaseModel):
    """Body returned for every failure outcome."""

    error: str
    detail: str | None = None
