"""JSON codec backed by pydantic type adapters."""

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter

from .base import ContentCodec, media_type_of


@lru_cache(maxsize=256)
def _adapter(target_type: Any) -> TypeAdapter:
    return TypeAdapter(target_type)


class JSONCodec(ContentCodec):
    """Codec for application/json and any '+json' structured syntax suffix.

    Values are serialized with pydantic, so models, dataclasses, enums and
    datetimes work without custom encoders. Responses are validated into the
    requested type.
    """

    @property
    def media_types(self) -> list[str]:
        return ["application/json"]

    def can_handle(self, content_type: str | None) -> bool:
        return super().can_handle(content_type) or media_type_of(content_type).endswith("+json")

    def serialize(self, value: Any, content_type: str) -> bytes:
        return _adapter(Any).dump_json(value)

    def deserialize(self, content: bytes, target_type: Any, content_type: str | None) -> Any:
        return _adapter(Any if target_type is None else target_type).validate_json(content)
