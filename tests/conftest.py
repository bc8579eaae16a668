import asyncio
import json
import os

import httpx
import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ["APP_ENV"] = "dev"
os.environ.setdefault("AIRTABLE_API_KEY", "test_airtable_key")
os.environ.setdefault("AIRTABLE_BASE_ID", "appTestBase")
os.environ.setdefault("AIRTABLE_TABLE_ID", "tblReservations")
os.environ.setdefault(
    "LINE_CHANNEL_ACCESS_TOKENS",
    json.dumps(
        {
            "default": "token-default",
            "980hrcnx": "token-980hrcnx",
            "ltf8289j": "token-ltf8289j",
        }
    ),
)
os.environ.setdefault("LINE_DEFAULT_ACCOUNT", "default")
os.environ.setdefault("REMINDER_TIMEZONE", "Asia/Taipei")

from reminder_api.api.dependencies import get_http_client
from reminder_api.core.config import Settings
from reminder_api.main import app
from reminder_api.services.credentials import CredentialRegistry
from reminder_api.services.integrations.http_client import create_httpx_client

AIRTABLE_HOST = "api.airtable.com"
LINE_HOST = "api.line.me"


class FakeUpstreams:
    """
    In-process stand-in for Airtable and the LINE push API.

    Records every request so tests can assert call counts, headers and payloads.
    """

    def __init__(self):
        self.records: list[dict] = []
        self.airtable_status = 200
        self.airtable_body: str | None = None
        self.airtable_exception: type[httpx.TransportError] | None = None
        self.airtable_delay_seconds = 0.0
        self.line_status = 200
        self.line_body = "{}"
        self.airtable_requests: list[httpx.Request] = []
        self.line_requests: list[httpx.Request] = []

    def add_reservation(self, user_id: str, **fields) -> dict:
        record = {"id": f"rec{len(self.records) + 1}", "fields": {"userId_": user_id, **fields}}
        self.records.append(record)
        return record

    async def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == AIRTABLE_HOST:
            self.airtable_requests.append(request)
            if self.airtable_delay_seconds:
                await asyncio.sleep(self.airtable_delay_seconds)
            if self.airtable_exception is not None:
                raise self.airtable_exception("simulated failure", request=request)
            if self.airtable_body is not None:
                return httpx.Response(self.airtable_status, text=self.airtable_body)
            return httpx.Response(self.airtable_status, json={"records": self.records[:1]})
        if request.url.host == LINE_HOST:
            self.line_requests.append(request)
            return httpx.Response(self.line_status, text=self.line_body)
        raise AssertionError(f"Unexpected outbound request: {request.method} {request.url}")

    def line_payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.line_requests]

    def line_tokens(self) -> list[str]:
        return [r.headers["Authorization"].removeprefix("Bearer ") for r in self.line_requests]

    @property
    def outbound_count(self) -> int:
        return len(self.airtable_requests) + len(self.line_requests)


@pytest.fixture
def upstreams():
    return FakeUpstreams()


@pytest.fixture
def http_client(upstreams):
    """Async client whose requests are answered by FakeUpstreams."""
    return create_httpx_client(transport=httpx.MockTransport(upstreams.handler))


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def credentials():
    return CredentialRegistry(
        tokens={
            "default": "token-default",
            "980hrcnx": "token-980hrcnx",
            "ltf8289j": "token-ltf8289j",
        },
        default_label="default",
    )


@pytest.fixture(scope="function")
def client(upstreams):
    """Create a test client whose outbound calls go to FakeUpstreams."""

    async def override_get_http_client():
        async with create_httpx_client(
            transport=httpx.MockTransport(upstreams.handler)
        ) as http_client:
            yield http_client

    app.dependency_overrides[get_http_client] = override_get_http_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
