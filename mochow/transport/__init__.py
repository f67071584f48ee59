"""Transport module."""

from mochow.transport.client import HTTPTransport, Transport
from mochow.transport.models import ApiRequest, ApiResponse

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "HTTPTransport",
    "Transport",
]
