"""Declarative descriptions of remote operations."""

import json
from enum import Enum
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from ..client.exceptions import ConfigurationError

DEFAULT_CONTENT_TYPE = "application/json"


class ParamPlace(str, Enum):
    """Part of the request a parameter is bound to."""

    PATH = "path"
    QUERY = "query"
    BODY = "body"
    HEADER = "header"


class ParamDescription(BaseModel):
    """One declared parameter of an operation."""

    model_config = ConfigDict(frozen=True)

    name: str
    place: ParamPlace = ParamPlace.QUERY
    alias: str | None = Field(
        default=None,
        description="Name used on the wire when it differs from the argument name",
    )
    source_type: Literal["str", "int", "float", "bool", "json"] = "str"
    content_type: str = DEFAULT_CONTENT_TYPE

    @property
    def wire_name(self) -> str:
        return self.alias or self.name

    def coerce(self, raw: str) -> Any:
        """Convert a command-line string to the declared source type."""
        if self.source_type == "int":
            return int(raw)
        if self.source_type == "float":
            return float(raw)
        if self.source_type == "bool":
            return raw.strip().lower() in ("1", "true", "yes", "on")
        if self.source_type == "json":
            return json.loads(raw)
        return raw


class MethodDescription(BaseModel):
    """Everything needed to build requests for one declared operation.

    Built once per operation and shared read-only by every call.
    """

    model_config = ConfigDict(frozen=True)

    operation_id: str | None = None
    http_method: str = Field(
        default="GET",
        validation_alias=AliasChoices("http_method", "method"),
    )
    url: str = Field(
        default="",
        validation_alias=AliasChoices("url", "path", "rel_path"),
    )
    params: tuple[ParamDescription, ...] = ()
    expected_codes: frozenset[int] = frozenset()
    summary: str | None = None

    @field_validator("http_method")
    @classmethod
    def normalize_method(cls, v: str) -> str:
        """HTTP methods are case-insensitive; keep them upper case."""
        if not v or not v.isalpha():
            raise ValueError(f"Invalid HTTP method: {v!r}")
        return v.upper()

    @property
    def template(self) -> "UrlTemplate":
        from ..request.url_template import UrlTemplate

        return UrlTemplate(self.url)

    @property
    def body_param(self) -> ParamDescription | None:
        return next((p for p in self.params if p.place is ParamPlace.BODY), None)

    def params_in(self, place: ParamPlace) -> list[ParamDescription]:
        return [p for p in self.params if p.place is place]

    def check(self) -> None:
        """Validate the description as a whole.

        Raises:
            ConfigurationError: On duplicate parameter names, more than one
                body parameter, or a placeholder without a path parameter.
        """
        label = self.operation_id or f"{self.http_method} {self.url or '/'}"

        names = [p.name for p in self.params]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ConfigurationError(f"{label}: duplicate parameters {duplicates}")

        bodies = self.params_in(ParamPlace.BODY)
        if len(bodies) > 1:
            raise ConfigurationError(
                f"{label}: only one body parameter is allowed, got "
                f"{[p.name for p in bodies]}"
            )

        path_names = [p.wire_name for p in self.params_in(ParamPlace.PATH)]
        for placeholder in self.template.names:
            if placeholder in path_names:
                continue
            if placeholder.isdigit() and int(placeholder) < len(path_names):
                continue
            raise ConfigurationError(
                f"{label}: placeholder '{{{placeholder}}}' has no path parameter"
            )
