"""restcall API client.

This package turns declared operations into HTTP calls. An operation is
described once (method, relative path template, parameter placements,
expected status codes) and executed through a pluggable async transport.

Simple calls:
    Return the decoded body, raise UnexpectedStatusError otherwise.

Detailed calls:
    Return a CallDetails envelope with request/response dumps and an
    unexpected-status flag; never raise for a status code.

Usage:
    from restcall.client import ApiClient
    from restcall.contract import ContractRegistry

    registry = ContractRegistry.from_file("contracts.json")
    async with ApiClient(registry) as client:
        user = await client.call("get_user", 42, return_type=User)
"""

from .exceptions import (
    ConfigurationError,
    ModificationError,
    ResponseDecodingError,
    RestCallError,
    TransportError,
    UnexpectedStatusError,
    UriConstructionError,
)
from .config import RestCallConfig
from .transport import Transport, TransportProvider
from .factory import create_transport
from .http import HTTPTransport
from .api_request import ApiRequest
from .api import ApiClient

__all__ = [
    # Main API
    "ApiClient",
    "ApiRequest",
    "RestCallConfig",
    # Transport protocol and factory
    "Transport",
    "TransportProvider",
    "create_transport",
    # Transport implementations
    "HTTPTransport",
    # Exceptions
    "ConfigurationError",
    "ModificationError",
    "ResponseDecodingError",
    "RestCallError",
    "TransportError",
    "UnexpectedStatusError",
    "UriConstructionError",
]
