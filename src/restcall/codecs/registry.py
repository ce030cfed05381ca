"""Codec lookup by content type, with plugin discovery."""

import logging
import threading
from importlib.metadata import entry_points
from typing import Any

from pydantic import ValidationError

from ..client.exceptions import ConfigurationError, ResponseDecodingError
from .base import ContentCodec, charset_of, media_type_of
from .json_codec import JSONCodec
from .text import BinaryCodec, FormCodec, TextCodec

logger = logging.getLogger("restcall")


class CodecRegistry:
    """Registry of content codecs used to encode bodies and decode responses.

    Usage:
        codecs = CodecRegistry()
        payload = codecs.serialize({"a": 1}, "application/json")
        user = codecs.deserialize(response.content, User, response.headers.get("content-type"))
    """

    def __init__(self, load_plugins: bool = True):
        self._codecs: list[ContentCodec] = [
            JSONCodec(),
            TextCodec(),
            FormCodec(),
            BinaryCodec(),
        ]
        self._fallback = self._codecs[0]
        if load_plugins:
            self._load_plugins()

    def _load_plugins(self) -> None:
        """Discover and load plugin codecs."""
        try:
            eps = entry_points(group="restcall.codecs")
            for ep in eps:
                try:
                    codec_class = ep.load()
                    self._codecs.append(codec_class())
                    logger.info(f"Loaded plugin codec: {ep.name}")
                except Exception as e:
                    logger.warning(f"Failed to load codec plugin {ep.name}: {e}")
        except Exception as e:
            logger.warning(f"Error discovering codec plugins: {e}")

    def register(self, codec: ContentCodec) -> None:
        """Manually register a codec."""
        self._codecs.append(codec)

    def get_codec(self, content_type: str | None) -> ContentCodec | None:
        """Get the highest-priority codec for a Content-Type value."""
        candidates = [c for c in self._codecs if c.can_handle(content_type)]
        if not candidates:
            return None
        # Later registrations win ties so a manual register() overrides built-ins
        return max(reversed(candidates), key=lambda c: c.priority)

    def serialize(self, value: Any, content_type: str) -> bytes:
        """Encode a request body.

        Raises:
            ConfigurationError: If no codec handles the content type or the
                value cannot be encoded with it
        """
        codec = self.get_codec(content_type)
        if codec is None:
            raise ConfigurationError(f"No codec registered for content type '{content_type}'")
        try:
            return codec.serialize(value, content_type)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Cannot encode {type(value).__name__} as '{media_type_of(content_type)}': {e}"
            ) from e

    def deserialize(self, content: bytes, target_type: Any, content_type: str | None) -> Any:
        """Decode a response body into target_type.

        None as target type, or an empty body, yields None. bytes and str
        targets are served directly from the raw content. Unknown content
        types are decoded as JSON.

        Raises:
            ResponseDecodingError: If the body cannot be decoded
        """
        if target_type is None or target_type is type(None):
            return None
        if target_type is bytes:
            return bytes(content)
        if not content:
            return None
        if target_type is str:
            return content.decode(charset_of(content_type), errors="replace")

        codec = self.get_codec(content_type) or self._fallback
        try:
            return codec.deserialize(content, target_type, content_type)
        except (ValidationError, ValueError, TypeError) as e:
            raise ResponseDecodingError(
                f"Cannot decode '{media_type_of(content_type) or 'unknown'}' content "
                f"into {getattr(target_type, '__name__', target_type)}: {e}"
            ) from e


_default: CodecRegistry | None = None
_lock = threading.Lock()


def default_registry() -> CodecRegistry:
    """Shared registry with built-in and plugin codecs, created on first use."""
    global _default
    if _default is None:
        with _lock:
            if _default is None:
                _default = CodecRegistry()
    return _default
