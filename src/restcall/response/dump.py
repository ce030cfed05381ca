"""Textual dumps of HTTP messages for diagnostics."""

import httpx

from ..codecs.base import charset_of, media_type_of

_TEXTUAL_TYPES = (
    "application/json",
    "application/xml",
    "application/x-www-form-urlencoded",
    "application/javascript",
)


def _is_textual(content_type: str | None) -> bool:
    media_type = media_type_of(content_type)
    return (
        media_type.startswith("text/")
        or media_type in _TEXTUAL_TYPES
        or media_type.endswith(("+json", "+xml"))
    )


def _dump_body(content: bytes, content_type: str | None) -> str:
    if not content:
        return ""
    if content_type is None or _is_textual(content_type):
        try:
            return content.decode(charset_of(content_type))
        except (UnicodeDecodeError, LookupError):
            pass
    return f"<{len(content)} bytes of binary content>"


def _dump_headers(headers: httpx.Headers) -> list[str]:
    return [f"{name}: {value}" for name, value in headers.items()]


def dump_request(request: httpx.Request) -> str:
    """Render a request as start line, headers, blank line and body."""
    lines = [f"{request.method} {request.url} HTTP/1.1"]
    lines.extend(_dump_headers(request.headers))
    try:
        body = _dump_body(request.content, request.headers.get("content-type"))
    except httpx.RequestNotRead:
        body = "<streaming content>"
    return "\n".join(lines) + "\n\n" + body


def dump_response(response: httpx.Response) -> str:
    """Render a response as status line, headers, blank line and body.

    The body must already be read.
    """
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}".rstrip()]
    lines.extend(_dump_headers(response.headers))
    try:
        body = _dump_body(response.content, response.headers.get("content-type"))
    except httpx.ResponseNotRead:
        body = "<streaming content>"
    return "\n".join(lines) + "\n\n" + body
