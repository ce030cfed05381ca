"""Content codecs with plugin architecture."""

from .base import ContentCodec, charset_of, media_type_of
from .json_codec import JSONCodec
from .registry import CodecRegistry, default_registry
from .text import BinaryCodec, FormCodec, TextCodec

__all__ = [
    "BinaryCodec",
    "CodecRegistry",
    "ContentCodec",
    "FormCodec",
    "JSONCodec",
    "TextCodec",
    "charset_of",
    "default_registry",
    "media_type_of",
]
