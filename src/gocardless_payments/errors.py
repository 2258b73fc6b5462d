"""Exception hierarchy for the GoCardless API client.

Every failure is raised as a subclass of :class:`GoCardlessError`. Errors
returned by the API are mapped from the ``error`` envelope of the response
by :func:`from_error_response`; the HTTP status code picks the class for
authentication, permission and rate-limit failures, otherwise the ``type``
field of the payload does.
"""

import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

IDEMPOTENT_CREATION_CONFLICT = "idempotent_creation_conflict"

__all__ = [
    "GoCardlessError",
    "InvalidRequestError",
    "NetworkFailure",
    "MalformedResponse",
    "InvalidSignatureError",
    "ApiError",
    "ValidationError",
    "InvalidStateError",
    "IdempotentCreationConflict",
    "InvalidApiUsageError",
    "AuthenticationError",
    "AuthorizationError",
    "RateLimitError",
    "GoCardlessInternalError",
    "from_error_response",
]


class GoCardlessError(Exception):
    """Base class for every error raised by this library."""


class InvalidRequestError(GoCardlessError, ValueError):
    """A request was built incorrectly and was never sent."""


class NetworkFailure(GoCardlessError):
    """The HTTP round trip could not be completed."""


class MalformedResponse(GoCardlessError):
    """The server answered with a body that could not be decoded.

    Raised for non-JSON bodies (e.g. an HTML page from a load balancer) and
    for JSON bodies that lack the expected envelope.
    """

    def __init__(
        self,
        message: str = "Malformed response received from server",
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class InvalidSignatureError(GoCardlessError):
    """A webhook signature did not match the one computed from its body."""


class ApiError(GoCardlessError):
    """The API returned an error payload.

    Attributes mirror the ``error`` envelope of the response. ``errors`` is
    the server's field-level error list, kept verbatim.
    """

    def __init__(self, status_code: int, payload: Dict[str, Any]):
        self.status_code = status_code
        self.payload = payload
        self.message: Optional[str] = payload.get("message")
        self.type: Optional[str] = payload.get("type")
        self.code: int = payload.get("code") or status_code
        self.request_id: Optional[str] = payload.get("request_id")
        self.documentation_url: Optional[str] = payload.get("documentation_url")
        self.errors: List[Dict[str, Any]] = list(payload.get("errors") or [])
        super().__init__(self._describe())

    def _describe(self) -> str:
        details = []
        for error in self.errors:
            parts = [error.get("field"), error.get("message")]
            details.append(" ".join(str(p) for p in parts if p))
        details = [d for d in details if d]
        if details:
            return ", ".join(details)
        return self.message or f"HTTP {self.status_code}"

    def reasons(self) -> List[str]:
        """Return the ``reason`` of each field-level error."""
        return [e["reason"] for e in self.errors if e.get("reason")]


class ValidationError(ApiError):
    """The request was rejected because of the submitted fields."""


class InvalidStateError(ApiError):
    """The action is invalid given the current state of the resource."""


class IdempotentCreationConflict(InvalidStateError):
    """A creation request reused an idempotency key.

    ``conflicting_resource_id`` identifies the resource created by the
    original request.
    """

    @property
    def conflicting_resource_id(self) -> Optional[str]:
        for error in self.errors:
            if error.get("reason") == IDEMPOTENT_CREATION_CONFLICT:
                links = error.get("links") or {}
                return links.get("conflicting_resource_id")
        return None


class InvalidApiUsageError(ApiError):
    """The request was malformed or not permitted."""


class AuthenticationError(InvalidApiUsageError):
    """The access token is missing or invalid (HTTP 401)."""


class AuthorizationError(InvalidApiUsageError):
    """The access token lacks permission for this request (HTTP 403)."""


class RateLimitError(InvalidApiUsageError):
    """The rate limit was exceeded (HTTP 429). No retry is attempted."""


class GoCardlessInternalError(ApiError):
    """The API failed internally (``gocardless`` type or HTTP 5xx)."""


_STATUS_ERRORS = {
    401: AuthenticationError,
    403: AuthorizationError,
    429: RateLimitError,
}

_TYPE_ERRORS = {
    "validation_failed": ValidationError,
    "invalid_state": InvalidStateError,
    "invalid_api_usage": InvalidApiUsageError,
    "gocardless": GoCardlessInternalError,
}


def from_error_response(status_code: int, payload: Dict[str, Any]) -> ApiError:
    """Map an API ``error`` envelope to the matching exception instance."""
    error_class = _STATUS_ERRORS.get(status_code)
    if error_class is None:
        error_class = _TYPE_ERRORS.get(payload.get("type") or "")
    if error_class is None:
        logger.debug(
            "Unknown error type %r for HTTP %d", payload.get("type"), status_code
        )
        error_class = GoCardlessInternalError if status_code >= 500 else ValidationError

    reasons = [e.get("reason") for e in payload.get("errors") or []]
    if IDEMPOTENT_CREATION_CONFLICT in reasons and issubclass(
        error_class, (InvalidStateError, ValidationError)
    ):
        error_class = IdempotentCreationConflict

    return error_class(status_code, payload)
