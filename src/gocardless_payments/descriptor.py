"""Immutable description of a single API request."""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidRequestError
from .models import Resource
from .utils import flatten_query_params, format_path

DEFAULT_REQUEST_ENVELOPE = "data"


def _freeze(value: Any) -> Any:
    """Return a read-only copy: mappings become proxies, lists become tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(sub) for key, sub in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(sub) for key, sub in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


class RequestDescriptor(BaseModel):
    """Everything needed to issue one API call.

    Built by :class:`~gocardless_payments.services.RequestBuilder` as a
    snapshot; the executor never modifies it. Mapping fields are stored as
    read-only views and copied back to plain dicts when the request is sent.
    Capabilities are expressed as optional fields: a ``body`` makes it a
    write, ``paginated`` makes it a list call and an ``idempotency_key``
    makes it eligible for conflict recovery through ``conflict_path_template``.
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    method: str
    path_template: str
    path_params: Dict[str, str] = Field(default_factory=dict)
    query_params: Dict[str, Any] = Field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None
    request_envelope: str = DEFAULT_REQUEST_ENVELOPE
    response_envelope: str
    response_model: Type[Resource] = Resource
    paginated: bool = False
    idempotency_key: Optional[str] = None
    conflict_path_template: Optional[str] = None
    headers: Dict[str, str] = Field(default_factory=dict)

    @field_validator("path_params", "query_params", "body", "headers")
    @classmethod
    def _read_only(cls, value: Any) -> Any:
        return _freeze(value)

    @property
    def path(self) -> str:
        return format_path(self.path_template, self.path_params)

    def encoded_query(self) -> Dict[str, str]:
        return flatten_query_params(self.query_params)

    def envelope_body(self) -> Optional[Dict[str, Any]]:
        """Return the body nested one level under the request envelope."""
        if self.body is None:
            return None
        return {self.request_envelope: _thaw(self.body)}

    def with_cursor(self, after: Optional[str]) -> "RequestDescriptor":
        """Return a copy that requests the page following ``after``."""
        if not self.paginated:
            raise InvalidRequestError(f"{self.path_template} is not a list endpoint")
        query = _thaw(self.query_params)
        query["after"] = after
        return self._replace(query_params=query)

    def _replace(self, **changes: Any) -> "RequestDescriptor":
        values = {name: _thaw(getattr(self, name)) for name in type(self).model_fields}
        values.update(changes)
        return type(self)(**values)

    def conflict_lookup(self, resource_id: str) -> "RequestDescriptor":
        """Return a GET for the resource behind an idempotency conflict."""
        if not self.conflict_path_template:
            raise InvalidRequestError(
                f"{self.path_template} does not support conflict recovery"
            )
        return RequestDescriptor(
            method="GET",
            path_template=self.conflict_path_template,
            path_params={"identity": resource_id},
            response_envelope=self.response_envelope,
            response_model=self.response_model,
            headers=_thaw(self.headers),
        )
