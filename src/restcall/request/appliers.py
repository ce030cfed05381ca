"""Per-placement strategies that put argument values into a request."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any

from ..codecs import CodecRegistry
from ..contract.description import ParamDescription, ParamPlace

if TYPE_CHECKING:
    from .builder import OutboundRequest


def format_value(value: Any) -> str:
    """Render a scalar argument the way it goes on the wire."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class ParameterApplier(ABC):
    """Applies one declared parameter's runtime value to a request.

    Appliers are stateless; the same instance serves every call.
    """

    place: ParamPlace

    @abstractmethod
    def apply(self, request: "OutboundRequest", param: ParamDescription, value: Any) -> None:
        """Mutate the request in place."""
        pass


class PathApplier(ParameterApplier):
    """Supplies the value to path template resolution."""

    place = ParamPlace.PATH

    def apply(self, request: "OutboundRequest", param: ParamDescription, value: Any) -> None:
        request.path_values[param.wire_name] = None if value is None else format_value(value)


class QueryApplier(ParameterApplier):
    """Appends ``name=value`` pairs to the query string.

    None is skipped; lists and tuples repeat the name once per item.
    """

    place = ParamPlace.QUERY

    def apply(self, request: "OutboundRequest", param: ParamDescription, value: Any) -> None:
        if value is None:
            return
        items = value if isinstance(value, (list, tuple)) else [value]
        for item in items:
            request.add_query(param.wire_name, format_value(item))


class BodyApplier(ParameterApplier):
    """Serializes the value as the single request body."""

    place = ParamPlace.BODY

    def __init__(self, codecs: CodecRegistry):
        self.codecs = codecs

    def apply(self, request: "OutboundRequest", param: ParamDescription, value: Any) -> None:
        if value is None:
            return
        content = self.codecs.serialize(value, param.content_type)
        request.set_body(content, param.content_type)


class HeaderApplier(ParameterApplier):
    """Sets a header; a later value for the same name overwrites the earlier one."""

    place = ParamPlace.HEADER

    def apply(self, request: "OutboundRequest", param: ParamDescription, value: Any) -> None:
        if value is None:
            return
        request.headers[param.wire_name] = format_value(value)


def create_appliers(codecs: CodecRegistry) -> dict[ParamPlace, ParameterApplier]:
    """One applier per placement."""
    appliers: list[ParameterApplier] = [
        PathApplier(),
        QueryApplier(),
        BodyApplier(codecs),
        HeaderApplier(),
    ]
    return {applier.place: applier for applier in appliers}
