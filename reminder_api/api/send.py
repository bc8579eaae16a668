"""
Reminder send endpoint.

GET  /api/send?userId=...&date=...
POST /api/send  {"userId": "...", "date": "..."}
"""

import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from reminder_api.api.dependencies import get_credentials, get_http_client
from reminder_api.api.errors import ReminderError, UnexpectedError, error_response
from reminder_api.core.config import Settings, get_settings
from reminder_api.middleware.correlation_id import get_correlation_id
from reminder_api.schemas.send import SendErrorResponse, SendSuccessResponse
from reminder_api.services.credentials import CredentialRegistry
from reminder_api.services.dispatch import send_reservation_reminder

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES = {
    400: {"model": SendErrorResponse},
    404: {"model": SendErrorResponse},
    500: {"model": SendErrorResponse},
}


async def _read_json_object(request: Request) -> dict:
    """Return the JSON body if it is an object; anything else counts as no fields."""
    try:
        body = await request.json()
    except ValueError:
        logger.info("Send request body is not valid JSON - treating as empty")
        return {}
    return body if isinstance(body, dict) else {}


async def _handle_send(
    request: Request,
    user_id,
    date,
    settings: Settings,
    credentials: CredentialRegistry,
    client: httpx.AsyncClient,
) -> JSONResponse:
    try:
        await send_reservation_reminder(
            user_id,
            date,
            settings=settings,
            credentials=credentials,
            client=client,
        )
    except ReminderError as e:
        return error_response(e)
    except Exception as e:
        logger.error(
            f"Reminder send failed unexpectedly - error_type={type(e).__name__}: {e}",
            exc_info=True,
            extra={"correlation_id": get_correlation_id(request)},
        )
        return error_response(UnexpectedError(str(e)))
    return JSONResponse(status_code=200, content=SendSuccessResponse().model_dump())


@router.get("/send", response_model=SendSuccessResponse, responses=_ERROR_RESPONSES)
async def send_reminder_get(
    request: Request,
    settings: Settings = Depends(get_settings),
    credentials: CredentialRegistry = Depends(get_credentials),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Send a reminder using query parameters userId and date."""
    params = request.query_params
    return await _handle_send(
        request, params.get("userId"), params.get("date"), settings, credentials, client
    )


@router.post("/send", response_model=SendSuccessResponse, responses=_ERROR_RESPONSES)
async def send_reminder_post(
    request: Request,
    settings: Settings = Depends(get_settings),
    credentials: CredentialRegistry = Depends(get_credentials),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """Send a reminder using a JSON body; query parameters fill in missing keys."""
    body = await _read_json_object(request)
    params = request.query_params
    user_id = body.get("userId", params.get("userId"))
    date = body.get("date", params.get("date"))
    return await _handle_send(request, user_id, date, settings, credentials, client)
