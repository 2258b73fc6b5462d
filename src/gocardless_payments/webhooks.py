"""Verification and parsing of GoCardless webhooks.

GoCardless signs each webhook body with the endpoint secret (HMAC-SHA256,
hex encoded) and sends the signature in the ``Webhook-Signature`` header.
"""

import hashlib
import hmac
import json
import logging
from typing import List, Union

import pydantic

from .errors import InvalidSignatureError, MalformedResponse
from .models import Event

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "Webhook-Signature"

__all__ = ["SIGNATURE_HEADER", "is_valid_signature", "parse", "parse_events"]


def _as_bytes(value: Union[str, bytes]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def is_valid_signature(
    request_body: Union[str, bytes], signature_header: str, webhook_secret: str
) -> bool:
    """Check the ``Webhook-Signature`` header against the request body."""
    computed = hmac.new(
        _as_bytes(webhook_secret), _as_bytes(request_body), hashlib.sha256
    ).hexdigest()
    # compare_digest only accepts ASCII str, and the header is untrusted.
    return hmac.compare_digest(computed.encode("ascii"), _as_bytes(signature_header or ""))


def parse_events(request_body: Union[str, bytes]) -> List[Event]:
    """Decode the ``events`` envelope of an already verified webhook body."""
    try:
        payload = json.loads(request_body)
        return [Event.model_validate(event) for event in payload["events"]]
    except (ValueError, KeyError, TypeError, pydantic.ValidationError) as e:
        raise MalformedResponse(
            "Webhook body has no valid 'events' envelope",
            response_body=request_body if isinstance(request_body, str) else None,
        ) from e


def parse(
    request_body: Union[str, bytes], signature_header: str, webhook_secret: str
) -> List[Event]:
    """Verify a webhook and return the events it contains.

    Raises:
        InvalidSignatureError: if the signature does not match the body.
        MalformedResponse: if the body is not a valid events payload.
    """
    if not is_valid_signature(request_body, signature_header, webhook_secret):
        logger.warning("Rejected webhook with invalid signature")
        raise InvalidSignatureError("Webhook signature does not match request body")
    events = parse_events(request_body)
    logger.debug("Parsed webhook with %d event(s)", len(events))
    return events
