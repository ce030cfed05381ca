"""Custom exceptions for restcall."""



class RestCallError(Exception):
    """Base exception for all restcall errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConfigurationError(RestCallError):
    """Operation description or call arguments are inconsistent.

    Detected eagerly (at request construction or build time) and never retried.
    """
    pass


class UriConstructionError(RestCallError):
    """Base URL and relative path template do not form a valid URI."""

    def __init__(self, message: str, base_url: str | None, template: str | None):
        super().__init__(message)
        self.base_url = base_url
        self.template = template

    def __str__(self) -> str:
        return f"{self.message} (base_url: {self.base_url!r}, template: {self.template!r})"


class ModificationError(RestCallError):
    """A registered request modifier raised an error.

    The original exception is available as ``__cause__``.
    """
    pass


class TransportError(RestCallError):
    """Request could not be sent or no response was received."""

    def __init__(self, message: str, transport_unavailable: bool = False):
        super().__init__(message)
        self.transport_unavailable = transport_unavailable

    def __str__(self) -> str:
        if self.transport_unavailable:
            return f"{self.message} (transport unavailable)"
        return self.message


class UnexpectedStatusError(RestCallError):
    """Response status code is outside the expected set."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.message}"


class ResponseDecodingError(RestCallError):
    """Response body could not be decoded into the requested type."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message
