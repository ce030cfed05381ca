"""HTTP transport with OAuth and retry/backoff.

This module implements the default transport on top of httpx.AsyncClient.
It owns connection pooling, optional OAuth authentication and retry of
connection-level failures; status codes are passed back untouched.
"""

import logging

import httpx
from httpx_auth import OAuth2ClientCredentials

from .config import RestCallConfig
from .exceptions import TransportError
from .retry import get_retry_decorator, is_retryable_connection_error

logger = logging.getLogger("restcall")


class HTTPTransport:
    """HTTP transport with OAuth and retry/backoff.

    Implements the Transport protocol. Handles the OAuth2 client credentials
    flow and automatic retry with exponential backoff for connection errors
    and timeouts.

    Usage:
        transport = HTTPTransport(config)
        response = await transport.send(httpx.Request("GET", url))
        await transport.aclose()

    Or as async context manager:
        async with HTTPTransport(config) as transport:
            response = await transport.send(request)
    """

    def __init__(
        self,
        config: RestCallConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize HTTP transport.

        Args:
            config: restcall configuration. If None, loads from environment.
            client: Optional pre-configured client (for testing/advanced use).
                A provided client is not closed by aclose().
        """
        self.config = config or RestCallConfig()
        self._client = client
        self._owns_client = client is None
        self._send_with_retry = get_retry_decorator(
            is_retryable_connection_error,
            attempts=self.config.retry_attempts,
        )(self._send_once)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client with optional OAuth."""
        if self._client is None:
            auth = None
            if self.config.oauth_enabled:
                auth = OAuth2ClientCredentials(
                    token_url=self.config.oauth_token_url,
                    client_id=self.config.oauth_client_id,
                    client_secret=self.config.oauth_client_secret,
                    scope=self.config.oauth_scope,
                )
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout,
                auth=auth,
            )
        return self._client

    async def __aenter__(self) -> "HTTPTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close HTTP client and release resources."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _send_once(self, request: httpx.Request) -> httpx.Response:
        return await self.client.send(request)

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send request with retry.

        Args:
            request: Fully built request

        Returns:
            Response with its body read
        """
        logger.debug(f"Sending {request.method} {request.url}")
        try:
            return await self._send_with_retry(request)
        except httpx.ConnectError as e:
            raise TransportError(f"Cannot connect to {request.url.host}: {e}") from e
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timeout to {request.url.host}: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {request.url} failed: {e}") from e
