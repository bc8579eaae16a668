"""
Tests for correlation IDs on the send endpoint.
"""

import logging
import uuid

import pytest

from reminder_api.middleware.correlation_id import HEADER_CORRELATION_ID


def test_response_carries_generated_correlation_id(client, upstreams):
    upstreams.add_reservation("U123")

    response = client.get("/api/send", params={"userId": "U123", "date": "2024-01-01"})

    cid = response.headers[HEADER_CORRELATION_ID]
    try:
        uuid.UUID(cid)
    except ValueError:
        pytest.fail("Correlation ID is not a valid UUID")


def test_incoming_correlation_id_is_echoed(client):
    response = client.get("/health", headers={HEADER_CORRELATION_ID: "cron-run-42"})

    assert response.headers[HEADER_CORRELATION_ID] == "cron-run-42"


def test_oversized_correlation_id_is_replaced(client):
    response = client.get("/health", headers={HEADER_CORRELATION_ID: "x" * 200})

    assert response.headers[HEADER_CORRELATION_ID] != "x" * 200
    uuid.UUID(response.headers[HEADER_CORRELATION_ID])


def test_dispatch_logs_include_correlation_id(client, upstreams, caplog):
    upstreams.add_reservation("U123")

    with caplog.at_level(logging.INFO, logger="reminder_api.services.dispatch"):
        response = client.post(
            "/api/send",
            json={"userId": "U123", "date": "2024-01-01T09:30:00+08:00"},
            headers={HEADER_CORRELATION_ID: "trace-abc"},
        )

    assert response.status_code == 200
    sent = [r for r in caplog.records if "Reminder sent" in r.getMessage()]
    assert sent and sent[0].correlation_id == "trace-abc"


def test_each_request_gets_unique_correlation_id(client):
    ids = {client.get("/health").headers[HEADER_CORRELATION_ID] for _ in range(3)}

    assert len(ids) == 3
