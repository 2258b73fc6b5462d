"""Resource services and request builders generated from the endpoint table.

A :class:`Service` exposes one method per operation of a resource. Calling
it returns a :class:`RequestBuilder`, which collects parameters until the
request is submitted with ``execute()``, ``execute_wrapped()`` or ``all()``::

    payment = (
        client.payments.create(amount=1000, currency="GBP")
        .with_param("links", {"mandate": "MD123"})
        .with_idempotency_key("order-42")
        .execute()
    )

    for mandate in client.mandates.all(customer="CU123"):
        ...
"""

import copy
import logging
import uuid
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from .descriptor import RequestDescriptor
from .endpoints import RESOURCES, Endpoint
from .errors import InvalidRequestError
from .models import ApiResponse
from .paginator import Paginator

if TYPE_CHECKING:
    from .client import GoCardlessClient

logger = logging.getLogger(__name__)

__all__ = ["RequestBuilder", "Service"]


class RequestBuilder:
    """Mutable builder for a single endpoint call.

    Builder methods return ``self`` for chaining. Each submission takes an
    immutable :class:`RequestDescriptor` snapshot, so a builder can be
    reused without affecting requests already sent.
    """

    def __init__(
        self,
        client: "GoCardlessClient",
        endpoint: Endpoint,
        path_params: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ):
        self._client = client
        self._endpoint = endpoint
        self._path_params: Dict[str, str] = dict(path_params or {})
        self._params: Dict[str, Any] = {}
        self._headers: Dict[str, str] = {}
        self._idempotency_key: Optional[str] = None
        if params:
            self.with_params(**params)

    @property
    def endpoint(self) -> Endpoint:
        return self._endpoint

    def with_params(self, **params: Any) -> "RequestBuilder":
        """Set several fields at once. ``None`` unsets a field."""
        for name, value in params.items():
            self.with_param(name, value)
        return self

    def with_param(self, name: str, value: Any) -> "RequestBuilder":
        if value is None:
            self._params.pop(name, None)
        else:
            self._params[name] = value
        return self

    def with_metadata(self, key: str, value: str) -> "RequestBuilder":
        """Add a single metadata key, keeping any already set."""
        metadata = dict(self._params.get("metadata") or {})
        metadata[key] = value
        self._params["metadata"] = metadata
        return self

    def with_header(self, name: str, value: str) -> "RequestBuilder":
        self._headers[name] = value
        return self

    def with_idempotency_key(self, idempotency_key: str) -> "RequestBuilder":
        if not self._endpoint.idempotent:
            raise InvalidRequestError(
                f"{self._endpoint.method} {self._endpoint.path} does not accept "
                "an idempotency key"
            )
        self._idempotency_key = idempotency_key
        return self

    # Cursor helpers for list endpoints
    def with_after(self, after: Optional[str]) -> "RequestBuilder":
        return self.with_param("after", after)

    def with_before(self, before: Optional[str]) -> "RequestBuilder":
        return self.with_param("before", before)

    def with_limit(self, limit: Optional[int]) -> "RequestBuilder":
        return self.with_param("limit", limit)

    def build(self) -> RequestDescriptor:
        """Return an immutable snapshot of this request."""
        endpoint = self._endpoint
        params = copy.deepcopy(self._params)

        idempotency_key = self._idempotency_key
        if endpoint.idempotent and idempotency_key is None:
            # Stored so that re-sending this builder reuses the same key.
            idempotency_key = self._idempotency_key = str(uuid.uuid4())

        return RequestDescriptor(
            method=endpoint.method,
            path_template=endpoint.path,
            path_params=dict(self._path_params),
            query_params={} if endpoint.has_body else params,
            body=params if endpoint.has_body else None,
            request_envelope=endpoint.request_envelope,
            response_envelope=endpoint.envelope,
            response_model=endpoint.model,
            paginated=endpoint.paginated,
            idempotency_key=idempotency_key,
            conflict_path_template=endpoint.conflict_path,
            headers=dict(self._headers),
        )

    def execute(self) -> Any:
        """Send the request and return the decoded resource or page."""
        return self._client.execute(self.build())

    def execute_wrapped(self) -> ApiResponse:
        """Send the request and return the resource with status and headers."""
        return self._client.execute_wrapped(self.build())

    def all(self) -> Paginator:
        """Return a lazy iterator over every item of a list endpoint."""
        if not self._endpoint.paginated:
            raise InvalidRequestError(f"{self._endpoint.path} is not a list endpoint")
        return Paginator(self._client, self.build())

    def __repr__(self) -> str:
        return (
            f"<RequestBuilder {self._endpoint.method} {self._endpoint.path} "
            f"params={sorted(self._params)}>"
        )


class Service:
    """Operations available on one API resource.

    Path parameters are passed positionally in the order they appear in
    the path template; fields are passed as keyword arguments.
    """

    def __init__(self, client: "GoCardlessClient", name: str):
        if name not in RESOURCES:
            raise InvalidRequestError(f"Unknown resource '{name}'")
        self._client = client
        self.name = name
        self.endpoints: Dict[str, Endpoint] = RESOURCES[name]

    def __getattr__(self, operation: str) -> Callable[..., RequestBuilder]:
        # Only reached for names that are not regular attributes.
        endpoints = self.__dict__.get("endpoints", {})
        if operation not in endpoints:
            raise AttributeError(
                f"'{self.__dict__.get('name')}' has no operation '{operation}'"
            )
        return lambda *args, **params: self.request(operation, *args, **params)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self.endpoints))

    def request(self, operation: str, *path_values: str, **params: Any) -> RequestBuilder:
        endpoint = self.endpoints[operation]
        names = endpoint.path_params
        if len(path_values) != len(names):
            raise InvalidRequestError(
                f"{self.name}.{operation} expects {len(names)} path parameter(s) "
                f"({', '.join(names) or 'none'}), got {len(path_values)}"
            )
        return RequestBuilder(
            self._client,
            endpoint,
            path_params=dict(zip(names, path_values)),
            params=params,
        )

    def all(self, *path_values: str, **params: Any) -> Paginator:
        """Shortcut for ``list(...).all()``."""
        if "list" not in self.endpoints:
            raise AttributeError(f"'{self.name}' has no operation 'list'")
        return self.request("list", *path_values, **params).all()

    def __repr__(self) -> str:
        return f"<Service {self.name}: {', '.join(sorted(self.endpoints))}>"
