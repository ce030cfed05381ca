"""Plain text, form and binary codecs."""

from typing import Any, Mapping
from urllib.parse import parse_qsl, urlencode

from pydantic import BaseModel, TypeAdapter

from .base import ContentCodec, charset_of


class TextCodec(ContentCodec):
    """Codec for text/* bodies."""

    @property
    def media_types(self) -> list[str]:
        return ["text/*"]

    def serialize(self, value: Any, content_type: str) -> bytes:
        return str(value).encode(charset_of(content_type))

    def deserialize(self, content: bytes, target_type: Any, content_type: str | None) -> Any:
        text = content.decode(charset_of(content_type), errors="replace")
        if target_type in (None, Any, str, object):
            return text
        return TypeAdapter(target_type).validate_python(text.strip())


class FormCodec(ContentCodec):
    """Codec for application/x-www-form-urlencoded bodies."""

    @property
    def media_types(self) -> list[str]:
        return ["application/x-www-form-urlencoded"]

    def serialize(self, value: Any, content_type: str) -> bytes:
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json", exclude_none=True)
        if not isinstance(value, Mapping):
            raise TypeError(f"Form body must be a mapping, got {type(value).__name__}")
        return urlencode(value, doseq=True).encode("ascii")

    def deserialize(self, content: bytes, target_type: Any, content_type: str | None) -> Any:
        pairs = dict(parse_qsl(content.decode(charset_of(content_type)), keep_blank_values=True))
        if target_type in (None, Any, dict, object):
            return pairs
        return TypeAdapter(target_type).validate_python(pairs)


class BinaryCodec(ContentCodec):
    """Codec for application/octet-stream bodies (pass-through)."""

    @property
    def media_types(self) -> list[str]:
        return ["application/octet-stream"]

    def serialize(self, value: Any, content_type: str) -> bytes:
        if isinstance(value, (bytes, bytearray, memoryview)):
            return bytes(value)
        if isinstance(value, str):
            return value.encode(charset_of(content_type))
        raise TypeError(f"Binary body must be bytes or str, got {type(value).__name__}")

    def deserialize(self, content: bytes, target_type: Any, content_type: str | None) -> Any:
        if target_type in (None, Any, bytes, object):
            return bytes(content)
        raise TypeError(f"Cannot decode binary content into {target_type!r}")
