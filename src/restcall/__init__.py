"""restcall - Declarative HTTP API client: operation contracts compiled into requests."""

from restcall.client import ApiClient, ApiRequest, RestCallConfig
from restcall.client.exceptions import (
    ConfigurationError,
    ModificationError,
    ResponseDecodingError,
    RestCallError,
    TransportError,
    UnexpectedStatusError,
    UriConstructionError,
)
from restcall.contract import ContractRegistry, MethodDescription, ParamDescription, ParamPlace
from restcall.request import HeaderModifier, QueryModifier, RequestModifier
from restcall.response import CallDetails

try:
    from importlib.metadata import version
    __version__ = version("restcall")
except Exception:
    __version__ = "0.1.0"  # Fallback for development

__all__ = [
    "ApiClient",
    "ApiRequest",
    "CallDetails",
    "ConfigurationError",
    "ContractRegistry",
    "HeaderModifier",
    "MethodDescription",
    "ModificationError",
    "ParamDescription",
    "ParamPlace",
    "QueryModifier",
    "RequestModifier",
    "ResponseDecodingError",
    "RestCallConfig",
    "RestCallError",
    "TransportError",
    "UnexpectedStatusError",
    "UriConstructionError",
    "__version__",
]
