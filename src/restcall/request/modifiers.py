"""Caller-supplied hooks that adjust a request after it has been built."""

from typing import TYPE_CHECKING, Callable, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from .builder import OutboundRequest


@runtime_checkable
class RequestModifier(Protocol):
    """Post-construction hook, e.g. to inject an auth header.

    Modifiers run after every parameter has been applied, in registration
    order. Anything they raise is reported as ModificationError.
    """

    def modify(self, request: "OutboundRequest") -> None:
        ...


# Plain callables taking the request are accepted as well
ModifierLike = Union[RequestModifier, Callable[["OutboundRequest"], None]]


class HeaderModifier:
    """Set a header on every request."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return f"HeaderModifier({self.name!r})"

    def modify(self, request: "OutboundRequest") -> None:
        request.headers[self.name] = self.value


class QueryModifier:
    """Append a query parameter to every request."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return f"QueryModifier({self.name!r}, {self.value!r})"

    def modify(self, request: "OutboundRequest") -> None:
        request.add_query(self.name, self.value)


def apply_modifier(modifier: ModifierLike, request: "OutboundRequest") -> None:
    if isinstance(modifier, RequestModifier):
        modifier.modify(request)
    else:
        modifier(request)
