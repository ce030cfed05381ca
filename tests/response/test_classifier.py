"""Tests for status classification and message dumps."""

import httpx
import pytest

from restcall.client.exceptions import UnexpectedStatusError
from restcall.response import (
    MESSAGE_PREFIX_LENGTH,
    Expected,
    Unexpected,
    classify,
    dump_request,
    dump_response,
    is_unexpected,
    read_diagnostic_message,
)


class TestIsUnexpected:
    """Tests for is_unexpected."""

    def test_success_always_expected(self):
        """Test 200 is expected even with no declared codes."""
        assert is_unexpected(200, []) is False

    def test_declared_code_expected(self):
        """Test declared codes are expected."""
        assert is_unexpected(404, [404]) is False

    def test_undeclared_code_unexpected(self):
        """Test other codes are unexpected, including other 2xx."""
        assert is_unexpected(201, []) is True
        assert is_unexpected(500, [200, 404]) is True


class TestClassify:
    """Tests for classify and the diagnostic message."""

    @pytest.mark.asyncio
    async def test_expected(self):
        """Test expected response yields Expected."""
        result = await classify(httpx.Response(200, text="ok"), [])
        assert result == Expected(200)

    @pytest.mark.asyncio
    async def test_unexpected_uses_body(self):
        """Test unexpected response message comes from the body."""
        result = await classify(httpx.Response(409, text="Name already taken"), [200])
        assert isinstance(result, Unexpected)
        assert result.status_code == 409
        assert result.message == "Name already taken"

    @pytest.mark.asyncio
    async def test_long_body_truncated(self):
        """Test message is truncated to exactly 1024 characters."""
        response = httpx.Response(500, text="x" * 5000)
        message = await read_diagnostic_message(response)
        assert len(message) == MESSAGE_PREFIX_LENGTH == 1024

    @pytest.mark.asyncio
    async def test_truncation_counts_characters(self):
        """Test multi-byte text is truncated on a character boundary."""
        response = httpx.Response(500, text="é" * 2000, headers={"content-type": "text/plain; charset=utf-8"})
        message = await read_diagnostic_message(response)
        assert message == "é" * 1024

    @pytest.mark.asyncio
    async def test_unread_body_consumed_up_to_prefix(self):
        """Test only the prefix of an unread body is pulled from the stream."""
        pulled = []

        class Chunks(httpx.AsyncByteStream):
            async def __aiter__(self):
                for _ in range(10):
                    pulled.append(1)
                    yield b"y" * 1024

        response = httpx.Response(500, stream=Chunks())
        message = await read_diagnostic_message(response)
        assert message == "y" * 1024
        assert len(pulled) == 1

    @pytest.mark.asyncio
    async def test_multibyte_character_split_across_chunks(self):
        """Test a character split between chunks is decoded once whole."""
        response = httpx.Response(500, content="aé".encode("utf-8"),
                                  headers={"content-type": "text/plain; charset=utf-8"})
        assert await read_diagnostic_message(response, limit=2) == "aé"

    @pytest.mark.asyncio
    async def test_empty_body_uses_reason_phrase(self):
        """Test empty body falls back to the reason phrase."""
        result = await classify(httpx.Response(503), [])
        assert result.message == "Service Unavailable"

    @pytest.mark.asyncio
    async def test_whitespace_body_uses_reason_phrase(self):
        """Test whitespace-only body falls back to the reason phrase."""
        result = await classify(httpx.Response(404, text="  \n\t "), [])
        assert result.message == "Not Found"

    @pytest.mark.asyncio
    async def test_to_error(self):
        """Test Unexpected converts to UnexpectedStatusError."""
        result = await classify(httpx.Response(418, text="teapot"), [])
        error = result.to_error()
        assert isinstance(error, UnexpectedStatusError)
        assert error.status_code == 418
        assert str(error) == "HTTP 418: teapot"


class TestDump:
    """Tests for request/response dumps."""

    def test_dump_request(self):
        """Test request dump has start line, headers and body."""
        request = httpx.Request(
            "POST",
            "http://api.test/users?x=1",
            headers={"Content-Type": "application/json"},
            content=b'{"a": 1}',
        )
        dump = dump_request(request)
        lines = dump.split("\n")
        assert lines[0] == "POST http://api.test/users?x=1 HTTP/1.1"
        assert "content-type: application/json" in [line.lower() for line in lines]
        assert dump.endswith('\n\n{"a": 1}')

    def test_dump_response(self):
        """Test response dump has status line, headers and body."""
        response = httpx.Response(404, text="missing", headers={"X-Id": "7"})
        dump = dump_response(response)
        assert dump.startswith("HTTP/1.1 404 Not Found\n")
        assert "x-id: 7" in dump.lower()
        assert dump.endswith("\n\nmissing")

    def test_dump_binary_body(self):
        """Test binary body is summarized."""
        response = httpx.Response(
            200,
            content=b"\x00\x01\x02",
            headers={"content-type": "application/octet-stream"},
        )
        assert dump_response(response).endswith("<3 bytes of binary content>")

    def test_dump_without_body(self):
        """Test empty body leaves an empty body section."""
        request = httpx.Request("GET", "http://api.test/health")
        assert dump_request(request).endswith("\n\n")
