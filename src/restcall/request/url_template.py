"""Relative path templates and base URL joining."""

import re
from typing import Any, Mapping
from urllib.parse import quote

from ..client.exceptions import ConfigurationError

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def join_url(base_url: str | None, relative_path: str | None) -> str:
    """Join base URL and relative path with exactly one separator.

    Args:
        base_url: Base address, with or without a trailing slash
        relative_path: Resolved relative path, with or without a leading slash

    Returns:
        The combined address. An empty relative path yields the trimmed base,
        an empty base yields the relative path.
    """
    base = (base_url or "").rstrip("/")
    relative = (relative_path or "").lstrip("/")
    if not relative:
        return base
    if not base:
        return relative
    return f"{base}/{relative}"


class UrlTemplate:
    """Relative path template with ``{name}`` placeholders.

    Placeholders made of digits only (``{0}``) are positional: when no value
    with that name is bound, they index into the bound values in order.

    Usage:
        template = UrlTemplate("users/{user_id}/orders/{order_id}")
        template.resolve({"user_id": 7, "order_id": "a b"})
        # -> "users/7/orders/a%20b"
    """

    def __init__(self, template: str | None):
        self.template = template or ""
        self.names: list[str] = _PLACEHOLDER.findall(self.template)

    def __repr__(self) -> str:
        return f"UrlTemplate({self.template!r})"

    @property
    def has_placeholders(self) -> bool:
        return bool(self.names)

    def resolve(self, values: Mapping[str, Any] | None = None) -> str:
        """Substitute bound values into the template.

        Args:
            values: Ordered mapping of placeholder name to value

        Returns:
            Template with every placeholder replaced by the URL-encoded value

        Raises:
            ConfigurationError: If a placeholder has no bound value
        """
        if not self.names:
            return self.template

        values = values or {}
        ordered = list(values.values())

        def substitute(match: re.Match) -> str:
            name = match.group(1)
            if name in values:
                value = values[name]
            elif name.isdigit() and int(name) < len(ordered):
                value = ordered[int(name)]
            else:
                raise ConfigurationError(
                    f"No value bound for placeholder '{{{name}}}' in '{self.template}'"
                )
            if value is None:
                raise ConfigurationError(
                    f"Placeholder '{{{name}}}' in '{self.template}' is bound to None"
                )
            return quote(str(value), safe="")

        return _PLACEHOLDER.sub(substitute, self.template)
