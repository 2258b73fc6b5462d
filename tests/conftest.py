import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from gocardless_payments.client import GoCardlessClient


def make_response(status_code=200, json_data=None, headers=None, text=None):
    """Build a fake requests.Response.

    When ``text`` is given without ``json_data`` the body is treated as
    non-JSON and ``.json()`` raises ``ValueError``.
    """
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.headers = headers or {}
    if json_data is None and text is not None:
        resp.json.side_effect = ValueError("Expecting value")
        resp.text = text
    else:
        resp.json.return_value = json_data if json_data is not None else {}
        resp.text = json.dumps(resp.json.return_value)
    return resp


def page_payload(envelope, items, after=None, before=None, limit=50):
    return {
        envelope: items,
        "meta": {"cursors": {"before": before, "after": after}, "limit": limit},
    }


def error_payload(error_type, code, errors=None, message="Request failed"):
    return {
        "error": {
            "message": message,
            "type": error_type,
            "code": code,
            "request_id": "REQ-0001",
            "documentation_url": "https://developer.gocardless.com/api-reference#errors",
            "errors": errors or [],
        }
    }


ENV_VARS = (
    "GOCARDLESS_ACCESS_TOKEN",
    "GOCARDLESS_ENVIRONMENT",
    "GOCARDLESS_BASE_URL",
    "GOCARDLESS_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Unset GOCARDLESS_* variables; anything set during the test is undone."""
    for name in ENV_VARS:
        # setenv first so teardown also removes values loaded from a .env file
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture
def client():
    """Return a sandbox GoCardlessClient with a mocked session (no real HTTP)."""
    with patch("gocardless_payments.client.requests.Session") as mock_session_cls:
        mock_session_cls.return_value = MagicMock()
        c = GoCardlessClient("test-token", environment="sandbox")
    return c


@pytest.fixture
def payment_payload():
    return {
        "payments": {
            "id": "PM123",
            "created_at": "2026-01-05T12:12:09.133Z",
            "amount": 1000,
            "currency": "GBP",
            "status": "pending_submission",
            "charge_date": "2026-01-10",
            "reference": "INV-42",
            "links": {"mandate": "MD123", "creditor": "CR123"},
            "metadata": {"order": "42"},
            "fx": {"fx_currency": "EUR"},
        }
    }


@pytest.fixture
def conflict_payload():
    """409 returned when a creation request reuses an idempotency key."""
    return error_payload(
        "invalid_state",
        409,
        errors=[
            {
                "reason": "idempotent_creation_conflict",
                "message": "A resource has already been created with this idempotency key",
                "links": {"conflicting_resource_id": "PM123"},
            }
        ],
        message="A resource has already been created with this idempotency key",
    )
