"""
Reminder dispatch use-case: validate -> lookup -> select credential -> format -> push.

Single-shot and linear. Each step either succeeds or raises a ReminderError
that the API layer renders; nothing is retried.
"""

import logging
from typing import Any

import httpx

from reminder_api.api.errors import DispatchError, NotFoundError, ValidationError
from reminder_api.core.config import Settings
from reminder_api.middleware.correlation_id import get_correlation_id
from reminder_api.services.credentials import CredentialRegistry, select_credential
from reminder_api.services.integrations.airtable import get_reservation_by_user_id
from reminder_api.services.messaging import build_reminder_message, send_line_message

logger = logging.getLogger(__name__)


def coerce_param(value: Any) -> str:
    """
    Coerce a raw query/body value to a stripped string.

    Strings and non-zero integers are accepted; None, booleans, 0 and any
    other JSON type count as absent ("").
    """
    if isinstance(value, bool) or not isinstance(value, (str, int)) or not value:
        return ""
    return str(value).strip()


def validate_send_request(user_id: Any, date: Any) -> tuple[str, str]:
    """Return (user_id, date) as non-empty strings or raise ValidationError."""
    user_id_text = coerce_param(user_id)
    date_text = coerce_param(date)
    if not user_id_text or not date_text:
        raise ValidationError()
    return user_id_text, date_text


async def send_reservation_reminder(
    user_id: Any,
    date: Any,
    *,
    settings: Settings,
    credentials: CredentialRegistry,
    client: httpx.AsyncClient,
) -> dict:
    """
    Send the reservation reminder for one user.

    Returns:
        dict with status, recipient and the LINE account used

    Raises:
        ValidationError: userId or date missing (no outbound calls made)
        NotFoundError: no reservation for userId
        UpstreamError: Airtable failure (no dispatch attempted)
        DispatchError: LINE returned non-2xx (detail = response body)
    """
    user_id, date = validate_send_request(user_id, date)
    log_extra = {"correlation_id": get_correlation_id()}

    reservation = await get_reservation_by_user_id(client, user_id, settings)
    if reservation is None:
        logger.info(f"No reservation for user {user_id}", extra=log_extra)
        raise NotFoundError()

    account, access_token = select_credential(reservation, credentials)
    message = build_reminder_message(date, settings.reminder_timezone)

    response = await send_line_message(
        client, user_id, message, access_token, url=settings.line_push_url
    )
    if not response.is_success:
        logger.error(
            f"LINE push failed for user {user_id} via account '{account}' - "
            f"status={response.status_code}",
            extra=log_extra,
        )
        raise DispatchError(response.text)

    logger.info(f"Reminder sent to user {user_id} via account '{account}'", extra=log_extra)
    return {"status": "sent", "to": user_id, "account": account}
