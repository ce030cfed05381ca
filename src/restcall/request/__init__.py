"""Request construction: path templates, parameter appliers and modifiers."""

from .appliers import (
    BodyApplier,
    HeaderApplier,
    ParameterApplier,
    PathApplier,
    QueryApplier,
    create_appliers,
    format_value,
)
from .builder import OutboundRequest, ParameterBinding, RequestBuilder, bind_arguments
from .modifiers import HeaderModifier, ModifierLike, QueryModifier, RequestModifier
from .url_template import UrlTemplate, join_url

__all__ = [
    "BodyApplier",
    "HeaderApplier",
    "HeaderModifier",
    "ModifierLike",
    "OutboundRequest",
    "ParameterApplier",
    "ParameterBinding",
    "PathApplier",
    "QueryApplier",
    "QueryModifier",
    "RequestBuilder",
    "RequestModifier",
    "UrlTemplate",
    "bind_arguments",
    "create_appliers",
    "format_value",
    "join_url",
]
