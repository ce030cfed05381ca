"""Operation descriptions and the registry they are looked up in."""

from .description import DEFAULT_CONTENT_TYPE, MethodDescription, ParamDescription, ParamPlace
from .registry import ContractRegistry

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "ContractRegistry",
    "MethodDescription",
    "ParamDescription",
    "ParamPlace",
]
