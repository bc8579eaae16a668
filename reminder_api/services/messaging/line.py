"""
LINE Messaging API push sender.

Each call delivers a message: there is no deduplication and no retry.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

LINE_PUSH_URL = "https://api.line.me/v2/bot/message/push"


def build_push_payload(to: str, message: str) -> dict:
    return {"to": to, "messages": [{"type": "text", "text": message}]}


async def send_line_message(
    client: httpx.AsyncClient,
    to: str,
    message: str,
    access_token: str,
    url: str = LINE_PUSH_URL,
) -> httpx.Response:
    """
    Push one text message to a LINE user.

    Args:
        client: Shared async HTTP client (its default timeout applies)
        to: LINE user id of the recipient
        message: Message text
        access_token: Channel access token of the sending account
        url: Push endpoint

    Returns:
        The raw response. Callers check response.is_success.
    """
    headers = {
        "Authorization": f"Bearer {access_token}",
        "Content-Type": "application/json",
    }
    response = await client.post(url, headers=headers, json=build_push_payload(to, message))
    if not response.is_success:
        logger.warning(f"LINE push returned status={response.status_code}")
    return response
