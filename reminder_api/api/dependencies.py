"""FastAPI dependencies for API routes."""

from collections.abc import AsyncIterator

import httpx
from fastapi import Request

from reminder_api.services.credentials import CredentialRegistry
from reminder_api.services.integrations.http_client import create_httpx_client


def get_credentials(request: Request) -> CredentialRegistry:
    """Credential registry built at startup (see main.startup_event)."""
    return request.app.state.credentials


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """One outbound client per request, closed when the request ends."""
    async with create_httpx_client() as client:
        yield client
