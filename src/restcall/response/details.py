"""Result envelope of a detailed call."""

from dataclasses import dataclass
from typing import Generic, TypeVar

import httpx

from ..client.exceptions import ResponseDecodingError, UnexpectedStatusError

T = TypeVar("T")


@dataclass
class CallDetails(Generic[T]):
    """Decoded value plus everything needed to diagnose the call.

    Every field is populated even when the status code was unexpected.
    """

    response_content: T | None
    request: httpx.Request
    response: httpx.Response
    request_dump: str
    response_dump: str
    status_code: int
    is_unexpected_status_code: bool
    unexpected_message: str | None = None
    decode_error: ResponseDecodingError | None = None

    def raise_for_status(self) -> None:
        """Raise UnexpectedStatusError if the status code was unexpected."""
        if self.is_unexpected_status_code:
            raise UnexpectedStatusError(self.unexpected_message or "", self.status_code)
