"""Abstract base class for content codecs."""

from abc import ABC, abstractmethod
from typing import Any

DEFAULT_CHARSET = "utf-8"


def media_type_of(content_type: str | None) -> str:
    """Strip parameters from a Content-Type value ("text/html; charset=x" -> "text/html")."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def charset_of(content_type: str | None, default: str = DEFAULT_CHARSET) -> str:
    """Extract the charset parameter from a Content-Type value."""
    if not content_type:
        return default
    for part in content_type.split(";")[1:]:
        key, _, value = part.partition("=")
        if key.strip().lower() == "charset" and value.strip():
            return value.strip().strip('"')
    return default


class ContentCodec(ABC):
    """Base class for request/response body codecs.

    Built-in codecs have priority 0. Plugin codecs should use 10+ to override.
    """

    @property
    @abstractmethod
    def media_types(self) -> list[str]:
        """Media types this codec handles (e.g., ['application/json']).

        A trailing wildcard ('text/*') matches the whole top-level type.
        """
        pass

    @property
    def priority(self) -> int:
        """Codec priority (higher = preferred). Default 0 for built-in."""
        return 0

    @abstractmethod
    def serialize(self, value: Any, content_type: str) -> bytes:
        """Encode a request body value."""
        pass

    @abstractmethod
    def deserialize(self, content: bytes, target_type: Any, content_type: str | None) -> Any:
        """Decode a response body into target_type."""
        pass

    def can_handle(self, content_type: str | None) -> bool:
        """Check if this codec handles the given Content-Type."""
        media_type = media_type_of(content_type)
        if not media_type:
            return False
        for supported in self.media_types:
            supported = supported.lower()
            if supported.endswith("/*"):
                if media_type.startswith(supported[:-1]):
                    return True
            elif media_type == supported:
                return True
        return False
