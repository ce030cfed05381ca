"""Tests for content codecs and the codec registry."""

import json
from datetime import date
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from pydantic import BaseModel

from restcall.client.exceptions import ConfigurationError, ResponseDecodingError
from restcall.codecs import (
    BinaryCodec,
    CodecRegistry,
    ContentCodec,
    FormCodec,
    JSONCodec,
    TextCodec,
    charset_of,
    media_type_of,
)


class Item(BaseModel):
    name: str
    added: date | None = None


class YamlCodec(ContentCodec):
    """Minimal plugin codec used to exercise registration."""

    @property
    def media_types(self) -> list[str]:
        return ["application/yaml"]

    @property
    def priority(self) -> int:
        return 10

    def serialize(self, value: Any, content_type: str) -> bytes:
        return b"yaml"

    def deserialize(self, content: bytes, target_type: Any, content_type: str | None) -> Any:
        return {"yaml": content.decode()}


class TestContentTypeHelpers:
    """Tests for media_type_of and charset_of."""

    def test_media_type(self):
        """Test parameters are stripped and case normalized."""
        assert media_type_of("Application/JSON; charset=utf-8") == "application/json"
        assert media_type_of(None) == ""

    def test_charset(self):
        """Test charset parameter is extracted."""
        assert charset_of('text/plain; charset="latin-1"') == "latin-1"
        assert charset_of("text/plain") == "utf-8"


class TestCodecLookup:
    """Tests for CodecRegistry.get_codec."""

    def test_builtin_lookup(self, codecs):
        """Test each built-in media type maps to its codec."""
        assert isinstance(codecs.get_codec("application/json"), JSONCodec)
        assert isinstance(codecs.get_codec("application/problem+json"), JSONCodec)
        assert isinstance(codecs.get_codec("text/csv"), TextCodec)
        assert isinstance(codecs.get_codec("application/x-www-form-urlencoded"), FormCodec)
        assert isinstance(codecs.get_codec("application/octet-stream"), BinaryCodec)
        assert codecs.get_codec("application/x-unknown") is None

    def test_registered_codec_wins(self, codecs):
        """Test higher priority codec is preferred."""
        plugin = YamlCodec()
        codecs.register(plugin)
        assert codecs.get_codec("application/yaml; charset=utf-8") is plugin

    def test_plugin_discovery(self):
        """Test codecs are loaded from entry points."""
        entry_point = MagicMock()
        entry_point.name = "yaml"
        entry_point.load.return_value = YamlCodec

        with patch("restcall.codecs.registry.entry_points", return_value=[entry_point]):
            codecs = CodecRegistry()

        assert isinstance(codecs.get_codec("application/yaml"), YamlCodec)

    def test_broken_plugin_skipped(self):
        """Test a plugin that fails to load does not break the registry."""
        entry_point = MagicMock()
        entry_point.name = "broken"
        entry_point.load.side_effect = ImportError("missing dependency")

        with patch("restcall.codecs.registry.entry_points", return_value=[entry_point]):
            codecs = CodecRegistry()

        assert isinstance(codecs.get_codec("application/json"), JSONCodec)


class TestSerialize:
    """Tests for CodecRegistry.serialize."""

    def test_json_model(self, codecs):
        """Test models are serialized with pydantic."""
        content = codecs.serialize(Item(name="pen", added=date(2024, 1, 2)), "application/json")
        assert json.loads(content) == {"name": "pen", "added": "2024-01-02"}

    def test_form(self, codecs):
        """Test mappings are form encoded."""
        content = codecs.serialize({"q": "a b", "tag": ["x", "y"]}, "application/x-www-form-urlencoded")
        assert content == b"q=a+b&tag=x&tag=y"

    def test_form_rejects_scalar(self, codecs):
        """Test values the codec cannot encode are configuration errors."""
        with pytest.raises(ConfigurationError, match="Cannot encode int"):
            codecs.serialize(5, "application/x-www-form-urlencoded")

    def test_binary(self, codecs):
        """Test bytes pass through unchanged."""
        assert codecs.serialize(b"\x00\x01", "application/octet-stream") == b"\x00\x01"

    def test_unknown_content_type(self, codecs):
        """Test missing codec is a configuration error."""
        with pytest.raises(ConfigurationError, match="No codec registered"):
            codecs.serialize({}, "application/x-unknown")


class TestDeserialize:
    """Tests for CodecRegistry.deserialize."""

    def test_json_into_model(self, codecs):
        """Test JSON is validated into the target type."""
        item = codecs.deserialize(b'{"name": "pen", "added": "2024-01-02"}', Item, "application/json")
        assert item == Item(name="pen", added=date(2024, 1, 2))

    def test_json_into_list(self, codecs):
        """Test generic targets are supported."""
        assert codecs.deserialize(b"[1, 2]", list[int], "application/json") == [1, 2]

    def test_none_target(self, codecs):
        """Test None target ignores the body."""
        assert codecs.deserialize(b"{}", None, "application/json") is None
        assert codecs.deserialize(b"{}", type(None), "application/json") is None

    def test_empty_body(self, codecs):
        """Test empty body yields None."""
        assert codecs.deserialize(b"", Item, "application/json") is None

    def test_bytes_target(self, codecs):
        """Test bytes target returns the raw content."""
        assert codecs.deserialize(b'{"a": 1}', bytes, "application/json") == b'{"a": 1}'

    def test_str_target(self, codecs):
        """Test str target returns decoded text whatever the media type."""
        assert codecs.deserialize("café".encode("latin-1"), str, "text/plain; charset=latin-1") == "café"

    def test_unknown_media_type_falls_back_to_json(self, codecs):
        """Test unrecognised media types are decoded as JSON."""
        assert codecs.deserialize(b'{"a": 1}', dict, None) == {"a": 1}

    def test_text_into_int(self, codecs):
        """Test text bodies are validated into scalar targets."""
        assert codecs.deserialize(b"42\n", int, "text/plain") == 42

    def test_form_into_dict(self, codecs):
        """Test form bodies decode into dictionaries."""
        result = codecs.deserialize(b"a=1&b=", Any, "application/x-www-form-urlencoded")
        assert result == {"a": "1", "b": ""}

    def test_invalid_json(self, codecs):
        """Test malformed JSON raises ResponseDecodingError."""
        with pytest.raises(ResponseDecodingError, match="application/json"):
            codecs.deserialize(b"{oops", Item, "application/json")

    def test_validation_failure(self, codecs):
        """Test shape mismatch raises ResponseDecodingError."""
        with pytest.raises(ResponseDecodingError, match="Item"):
            codecs.deserialize(b'{"title": "x"}', Item, "application/json")

    def test_binary_into_model(self, codecs):
        """Test binary content cannot be decoded into a model."""
        with pytest.raises(ResponseDecodingError):
            codecs.deserialize(b"\x00", Item, "application/octet-stream")
