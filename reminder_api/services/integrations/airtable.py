"""
Airtable reservation lookup.

Read-only: one filtered list request per call, at most one record returned.
"""

import asyncio
import logging

import httpx

from reminder_api.api.errors import UpstreamError
from reminder_api.core.config import Settings

logger = logging.getLogger(__name__)


def escape_formula_string(value: str) -> str:
    """Escape a value for use inside a single-quoted Airtable formula string."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_filter_formula(field_name: str, user_id: str) -> str:
    """
    Build the filterByFormula expression matching field_name == user_id.

    URL encoding happens when the formula is sent as a query parameter.
    """
    return f"{{{field_name}}}='{escape_formula_string(user_id)}'"


def build_records_url(settings: Settings) -> str:
    base_url = settings.airtable_api_url.rstrip("/")
    return f"{base_url}/{settings.airtable_base_id}/{settings.airtable_table_id}"


async def get_reservation_by_user_id(
    client: httpx.AsyncClient,
    user_id: str,
    settings: Settings,
) -> dict | None:
    """
    Fetch the reservation record for user_id.

    Args:
        client: Shared async HTTP client
        user_id: LINE user id stored on the reservation
        settings: Process settings (credentials, ids, timeout)

    Returns:
        The first matching record ({"id": ..., "fields": {...}}), or None if none match

    Raises:
        UpstreamError: timeout, transport failure, non-2xx status or malformed body
    """
    params = {
        "filterByFormula": build_filter_formula(settings.airtable_user_id_field, user_id),
        "maxRecords": 1,
    }
    headers = {"Authorization": f"Bearer {settings.airtable_api_key}"}

    try:
        async with asyncio.timeout(settings.airtable_timeout_seconds):
            response = await client.get(
                build_records_url(settings),
                params=params,
                headers=headers,
                timeout=settings.airtable_timeout_seconds,
            )
    except (TimeoutError, httpx.TimeoutException) as e:
        logger.warning(
            f"Airtable lookup timed out after {settings.airtable_timeout_seconds}s"
        )
        raise UpstreamError("Airtable request timed out") from e
    except httpx.HTTPError as e:
        logger.warning(f"Airtable lookup failed - error_type={type(e).__name__}: {e}")
        raise UpstreamError(f"Airtable request failed: {e}") from e

    if not response.is_success:
        logger.warning(f"Airtable API error: status={response.status_code}")
        raise UpstreamError(f"Airtable API error: {response.status_code} {response.text}")

    try:
        data = response.json()
    except ValueError as e:
        raise UpstreamError("Airtable returned a non-JSON body") from e

    records = data.get("records") if isinstance(data, dict) else None
    if not records:
        return None
    if not isinstance(records, list):
        raise UpstreamError("Airtable returned a malformed records list")
    return records[0]
