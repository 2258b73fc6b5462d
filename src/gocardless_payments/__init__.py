"""
GoCardless payments API client.
Request execution, cursor pagination and idempotent creation over a
declarative table of the API's endpoints.
"""

__version__ = "0.1.0"

from .client import GoCardlessClient
from .descriptor import RequestDescriptor
from .errors import *
from .models import ApiResponse, ListResponse
from .paginator import Paginator
from .services import RequestBuilder, Service
from . import errors, webhooks

__all__ = [
    "GoCardlessClient",
    "RequestDescriptor",
    "RequestBuilder",
    "Service",
    "Paginator",
    "ApiResponse",
    "ListResponse",
    "webhooks",
    "__version__",
] + errors.__all__
