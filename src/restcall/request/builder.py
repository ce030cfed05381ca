"""Compose base URL, path template, arguments and modifiers into a request."""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Sequence
from urllib.parse import quote

import httpx

from ..client.exceptions import ConfigurationError, ModificationError, UriConstructionError
from ..codecs import CodecRegistry, default_registry
from ..contract.description import MethodDescription, ParamDescription, ParamPlace
from .appliers import create_appliers
from .modifiers import ModifierLike, apply_modifier
from .url_template import join_url

logger = logging.getLogger("restcall")


@dataclass
class ParameterBinding:
    """A declared parameter paired with its value for one call."""
    param: ParamDescription
    value: Any


def bind_arguments(
    description: MethodDescription,
    args: Sequence[Any] = (),
    kwargs: Mapping[str, Any] | None = None,
) -> list[ParameterBinding]:
    """Pair call arguments with declared parameters, in declared order.

    Positional arguments follow the declaration order; keyword arguments use
    parameter names. Parameters without an argument are bound to None.

    Raises:
        ConfigurationError: On too many, duplicate or unknown arguments
    """
    kwargs = dict(kwargs or {})
    params = description.params
    label = description.operation_id or description.url or "/"

    if len(args) > len(params):
        raise ConfigurationError(
            f"{label} takes {len(params)} arguments but {len(args)} were given"
        )

    values: dict[str, Any] = {}
    for param, value in zip(params, args):
        values[param.name] = value
    for name, value in kwargs.items():
        if name in values:
            raise ConfigurationError(f"{label} got multiple values for argument '{name}'")
        values[name] = value

    unknown = sorted(set(values) - {p.name for p in params})
    if unknown:
        raise ConfigurationError(f"{label} got unexpected arguments {unknown}")

    return [ParameterBinding(param, values.get(param.name)) for param in params]


@dataclass
class OutboundRequest:
    """Mutable request accumulator owned by one call until it is sent."""

    method: str = "GET"
    base_url: str | None = None
    relative_path: str = ""
    path_values: dict[str, Any] = field(default_factory=dict)
    query: list[tuple[str, str]] = field(default_factory=list)
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    content: bytes | None = None

    @property
    def url(self) -> str:
        """Base URL + relative path + query string."""
        target = join_url(self.base_url, self.relative_path)
        if not self.query:
            return target
        query = "&".join(f"{quote(name, safe='')}={quote(value, safe='')}" for name, value in self.query)
        separator = "&" if "?" in target else "?"
        return f"{target}{separator}{query}"

    def add_query(self, name: str, value: str) -> None:
        self.query.append((name, value))

    def set_body(self, content: bytes, content_type: str) -> None:
        self.content = content
        self.headers["Content-Type"] = content_type

    def to_httpx(self) -> httpx.Request:
        """Freeze into the request handed to the transport."""
        return httpx.Request(
            self.method,
            self.url,
            headers=self.headers,
            content=self.content,
        )


class RequestBuilder:
    """Builds an OutboundRequest in a fixed order.

    1. resolve the path template with path-placed arguments
    2. join with the base URL
    3. set the HTTP method
    4. apply query, body and header arguments in declared order
    5. run modifiers in registration order
    """

    def __init__(self, codecs: CodecRegistry | None = None):
        self.codecs = codecs or default_registry()
        self._appliers = create_appliers(self.codecs)

    def build(
        self,
        base_url: str | None,
        description: MethodDescription,
        bindings: Sequence[ParameterBinding],
        modifiers: Iterable[ModifierLike | None] = (),
    ) -> OutboundRequest:
        """Build the request for one call.

        Raises:
            ConfigurationError: If a placeholder has no value or a body
                cannot be encoded
            UriConstructionError: If base URL and template do not form a URI
            ModificationError: If a modifier raises
        """
        request = OutboundRequest(base_url=base_url)

        path_applier = self._appliers[ParamPlace.PATH]
        for binding in bindings:
            if binding.param.place is ParamPlace.PATH:
                path_applier.apply(request, binding.param, binding.value)
        request.relative_path = description.template.resolve(request.path_values)

        try:
            httpx.URL(join_url(base_url, request.relative_path))
        except (httpx.InvalidURL, ValueError) as e:
            raise UriConstructionError(
                f"Cannot build request URI: {e}",
                base_url=base_url,
                template=description.url,
            ) from e

        request.method = description.http_method

        for binding in bindings:
            if binding.param.place is not ParamPlace.PATH:
                self._appliers[binding.param.place].apply(request, binding.param, binding.value)

        for modifier in modifiers:
            if modifier is None:
                continue
            try:
                apply_modifier(modifier, request)
            except Exception as e:
                raise ModificationError(
                    f"An error occurred while modifying the request with {modifier!r}: {e}"
                ) from e

        logger.debug(f"Built {request.method} {request.url}")
        return request
