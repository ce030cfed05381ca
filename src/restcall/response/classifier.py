"""Expected-vs-actual status code classification."""

import codecs
from contextlib import aclosing
from dataclasses import dataclass
from typing import Collection, Union

import httpx

from ..client.exceptions import UnexpectedStatusError

SUCCESS_CODE = 200

# Longest prefix of the response body used as diagnostic message
MESSAGE_PREFIX_LENGTH = 1024


@dataclass(frozen=True)
class Expected:
    """Status code is within the expected set."""
    status_code: int


@dataclass(frozen=True)
class Unexpected:
    """Status code is outside the expected set."""
    status_code: int
    message: str

    def to_error(self) -> UnexpectedStatusError:
        return UnexpectedStatusError(self.message, self.status_code)


Classification = Union[Expected, Unexpected]


def is_unexpected(status_code: int, expected_codes: Collection[int]) -> bool:
    """200 is always expected, whether declared or not."""
    return status_code != SUCCESS_CODE and status_code not in expected_codes


async def read_diagnostic_message(response: httpx.Response, limit: int = MESSAGE_PREFIX_LENGTH) -> str:
    """Short human-readable message for an unexpected response.

    Decodes the body incrementally and stops after ``limit`` characters. A
    blank prefix falls back to the reason phrase. A response that was not
    read yet is only consumed up to that prefix.
    """
    try:
        decoder = codecs.getincrementaldecoder(response.encoding or "utf-8")(errors="replace")
    except LookupError:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    parts: list[str] = []
    remaining = limit
    async with aclosing(response.aiter_bytes(chunk_size=limit)) as chunks:
        async for chunk in chunks:
            text = decoder.decode(chunk)[:remaining]
            parts.append(text)
            remaining -= len(text)
            if remaining <= 0:
                break
        else:
            parts.append(decoder.decode(b"", final=True)[:remaining])
    prefix = "".join(parts)
    if prefix.strip():
        return prefix
    return response.reason_phrase


async def classify(response: httpx.Response, expected_codes: Collection[int]) -> Classification:
    """Classify a response against the expected status codes.

    The result is mode-agnostic: callers decide whether an Unexpected outcome
    becomes a raised UnexpectedStatusError or a flag.
    """
    if not is_unexpected(response.status_code, expected_codes):
        return Expected(response.status_code)
    message = await read_diagnostic_message(response)
    return Unexpected(response.status_code, message)
