"""GoCardless payments API client.

Executes :class:`~gocardless_payments.descriptor.RequestDescriptor` values
over a ``requests`` session and decodes enveloped JSON responses into
Pydantic models. Resource services (``client.payments``,
``client.mandates``, ...) are generated from the endpoint table.
"""

import logging
import os
import platform
from typing import Any, Dict, Optional

import pydantic
import requests
from requests.structures import CaseInsensitiveDict

from . import __version__
from .descriptor import RequestDescriptor
from .endpoints import RESOURCES
from .errors import (
    IdempotentCreationConflict,
    MalformedResponse,
    NetworkFailure,
    from_error_response,
)
from .models import ApiResponse, ListResponse
from .services import Service
from .utils import load_dotenv

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Environments and protocol constants
# ---------------------------------------------------------------------------
ENVIRONMENTS = {
    "live": "https://api.gocardless.com",
    "sandbox": "https://api-sandbox.gocardless.com",
}
API_VERSION = "2015-07-06"
DEFAULT_TIMEOUT = 30  # seconds
JSON_MEDIA_TYPE = "application/json"
IDEMPOTENCY_KEY_HEADER = "Idempotency-Key"

__all__ = [
    "GoCardlessClient",
    "ENVIRONMENTS",
    "API_VERSION",
    "DEFAULT_TIMEOUT",
]


def _user_agent() -> str:
    return "gocardless-payments-python/{} python/{} {}/{} requests/{}".format(
        __version__,
        platform.python_version(),
        platform.system().replace(" ", "_"),
        platform.release().replace(" ", "_"),
        requests.__version__,
    )


class GoCardlessClient:
    """GoCardless payments API client.

    Args:
        access_token: API access token, sent as a bearer token.
        environment: ``"live"`` or ``"sandbox"``. Ignored when ``base_url``
            is given.
        base_url: Explicit API base URL.
        timeout: Transport timeout in seconds applied to every request.
        error_on_idempotency_conflict: If ``True``, a reused idempotency key
            raises :class:`IdempotentCreationConflict` instead of returning
            the resource created by the earlier request.
    """

    def __init__(
        self,
        access_token: str,
        environment: str = "live",
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        error_on_idempotency_conflict: bool = False,
    ):
        if not access_token:
            raise ValueError("An access token is required")
        if base_url is None:
            if environment not in ENVIRONMENTS:
                raise ValueError(
                    f"Unknown environment '{environment}', "
                    f"expected one of {', '.join(sorted(ENVIRONMENTS))}"
                )
            base_url = ENVIRONMENTS[environment]

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.error_on_idempotency_conflict = error_on_idempotency_conflict
        self._access_token = access_token
        self.session = requests.Session()
        self.services: Dict[str, Service] = {
            name: Service(self, name) for name in RESOURCES
        }
        logger.info("Initialized GoCardlessClient for %s", self.base_url)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, **overrides) -> "GoCardlessClient":
        """Build a client from ``GOCARDLESS_*`` environment variables.

        A ``.env`` file is loaded first (see :func:`load_dotenv`); variables
        already set in the environment take precedence over it, and keyword
        ``overrides`` take precedence over both.
        """
        load_dotenv(env_file)
        config: Dict[str, Any] = {
            "access_token": os.getenv("GOCARDLESS_ACCESS_TOKEN"),
            "environment": os.getenv("GOCARDLESS_ENVIRONMENT", "live"),
            "base_url": os.getenv("GOCARDLESS_BASE_URL") or None,
        }
        timeout = os.getenv("GOCARDLESS_TIMEOUT")
        if timeout:
            config["timeout"] = float(timeout)
        config.update(overrides)
        return cls(**config)

    def __getattr__(self, name: str) -> Service:
        services = self.__dict__.get("services", {})
        if name in services:
            return services[name]
        raise AttributeError(f"'{type(self).__name__}' has no attribute '{name}'")

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self.__dict__.get("services", {})))

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "GoCardlessClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Request execution
    # ------------------------------------------------------------------
    def execute(self, descriptor: RequestDescriptor) -> Any:
        """Execute a request and return the decoded resource or page."""
        return self.execute_wrapped(descriptor).resource

    def execute_wrapped(self, descriptor: RequestDescriptor) -> ApiResponse:
        """Execute a request and return an :class:`ApiResponse`.

        A creation request that carries an idempotency key and fails because
        the key was already used is answered with one GET for the resource
        created by the earlier request, unless the client was configured with
        ``error_on_idempotency_conflict``.
        """
        try:
            response = self._send(descriptor)
        except IdempotentCreationConflict as e:
            resource_id = e.conflicting_resource_id
            if (
                self.error_on_idempotency_conflict
                or descriptor.idempotency_key is None
                or descriptor.conflict_path_template is None
                or not resource_id
            ):
                raise
            logger.info(
                "Idempotency key reused for %s, fetching existing resource %s",
                descriptor.path_template,
                resource_id,
            )
            # The lookup carries no idempotency key, so this cannot recurse again.
            return self.execute_wrapped(descriptor.conflict_lookup(resource_id))

        return ApiResponse(
            resource=self._decode(descriptor, response),
            status_code=response.status_code,
            headers=dict(response.headers),
        )

    def build_url(self, descriptor: RequestDescriptor) -> str:
        return f"{self.base_url}/{descriptor.path}"

    def build_headers(self, descriptor: RequestDescriptor) -> CaseInsensitiveDict:
        """Standard headers, then custom ones; later names replace earlier ones."""
        headers = CaseInsensitiveDict(
            {
                "Authorization": f"Bearer {self._access_token}",
                "GoCardless-Version": API_VERSION,
                "Accept": JSON_MEDIA_TYPE,
                "Content-Type": JSON_MEDIA_TYPE,
                "User-Agent": _user_agent(),
            }
        )
        if descriptor.idempotency_key:
            headers[IDEMPOTENCY_KEY_HEADER] = descriptor.idempotency_key
        headers.update(descriptor.headers)
        return headers

    def _send(self, descriptor: RequestDescriptor) -> requests.Response:
        """Issue exactly one HTTP request; raise on any non-2xx status."""
        url = self.build_url(descriptor)
        logger.debug("%s %s", descriptor.method, url)
        try:
            response = self.session.request(
                descriptor.method,
                url,
                params=descriptor.encoded_query() or None,
                json=descriptor.envelope_body(),
                headers=self.build_headers(descriptor),
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise NetworkFailure(f"Request to {url} timed out") from e
        except requests.RequestException as e:
            raise NetworkFailure(f"Failed to execute request to {url}: {e}") from e

        logger.debug("%s %s -> %d", descriptor.method, url, response.status_code)
        if not 200 <= response.status_code < 300:
            raise self._error_from_response(response)
        return response

    def _parse_json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(
                status_code=response.status_code, response_body=response.text
            ) from e

    def _error_from_response(self, response: requests.Response) -> Exception:
        payload = self._parse_json(response)
        error = payload.get("error") if isinstance(payload, dict) else None
        if not isinstance(error, dict):
            return MalformedResponse(
                "Error response without an 'error' envelope",
                status_code=response.status_code,
                response_body=response.text,
            )
        logger.debug(
            "API error %d (%s) request_id=%s",
            response.status_code,
            error.get("type"),
            error.get("request_id"),
        )
        return from_error_response(response.status_code, error)

    def _decode(self, descriptor: RequestDescriptor, response: requests.Response) -> Any:
        payload = self._parse_json(response)
        envelope = descriptor.response_envelope
        if not isinstance(payload, dict) or envelope not in payload:
            raise MalformedResponse(
                f"Response is missing the '{envelope}' envelope",
                status_code=response.status_code,
                response_body=response.text,
            )

        model = descriptor.response_model
        try:
            if descriptor.paginated:
                return self._decode_page(payload, envelope, model)
            return model.model_validate(payload[envelope])
        except (pydantic.ValidationError, TypeError, AttributeError) as e:
            raise MalformedResponse(
                f"Could not decode '{envelope}': {e}",
                status_code=response.status_code,
                response_body=response.text,
            ) from e

    @staticmethod
    def _decode_page(payload: Dict[str, Any], envelope: str, model) -> ListResponse:
        meta = payload.get("meta") or {}
        cursors = meta.get("cursors") or {}
        return ListResponse(
            items=[model.model_validate(item) for item in payload[envelope]],
            before=cursors.get("before"),
            after=cursors.get("after"),
            limit=meta.get("limit"),
            linked=payload.get("linked") or {},
        )
