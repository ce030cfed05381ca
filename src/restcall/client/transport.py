"""Transport protocol for sending built requests.

This module defines the interface that every transport must implement.
ApiRequest only talks to this protocol, so the default httpx transport can be
swapped for a test double or a custom implementation.
"""

from typing import Callable, Protocol, runtime_checkable

import httpx


@runtime_checkable
class Transport(Protocol):
    """Protocol defining the transport interface.

    Transports are responsible for:
    - Sending a fully built request and returning the response
    - Connection pooling, TLS, retries and authentication
    - Honouring task cancellation while the request is in flight
    - Raising TransportError when no response could be obtained
    """

    async def send(self, request: httpx.Request) -> httpx.Response:
        """Send a request and return the response.

        Args:
            request: Fully built request. Must not be mutated.

        Returns:
            Response with the body already read.

        Raises:
            TransportError: If the request could not be sent
            asyncio.CancelledError: If the calling task was cancelled
        """
        ...

    async def aclose(self) -> None:
        """Clean up resources (connection pools, clients, etc.).

        Safe to call multiple times.
        """
        ...


# Zero-argument callable returning the transport to use for one call
TransportProvider = Callable[[], Transport]
