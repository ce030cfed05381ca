"""High-level dispatcher for declared operations.

This module provides the main client interface. Operations are looked up by
id in a ContractRegistry and executed through ApiRequest.
"""

import asyncio
from typing import Any

from ..codecs import CodecRegistry, default_registry
from ..contract.registry import ContractRegistry
from ..request.builder import bind_arguments
from ..request.modifiers import ModifierLike
from ..response.details import CallDetails
from .api_request import ApiRequest
from .config import RestCallConfig
from .factory import create_transport
from .transport import Transport


class ApiClient:
    """Generic dispatcher keyed by operation id.

    Client-wide modifiers are copied into every request created afterwards.

    Usage:
        registry = ContractRegistry.from_file("contracts.json")

        async with ApiClient(registry) as client:
            user = await client.call("get_user", 42, return_type=User)
            details = await client.call_detailed("delete_user", user_id=42)

        # Inject custom transport (for testing)
        client = ApiClient(registry, transport=mock_transport)
    """

    def __init__(
        self,
        registry: ContractRegistry,
        config: RestCallConfig | None = None,
        transport: Transport | None = None,
        codecs: CodecRegistry | None = None,
        base_url: str | None = None,
    ):
        """Initialize API client.

        Args:
            registry: Declared operations
            config: Configuration (loads from environment if None)
            transport: Optional pre-configured transport (for testing/advanced use).
                If provided, config is still stored but not used to create a transport.
            codecs: Codec registry (shared default registry if None)
            base_url: Overrides the registry's and the config's base URL
        """
        self.registry = registry
        self.config = config or RestCallConfig()
        self.base_url = base_url or registry.base_url or self.config.base_url
        self.codecs = codecs or default_registry()
        self.modifiers: list[ModifierLike] = []
        self._transport = transport

    async def __aenter__(self) -> "ApiClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
        return False

    @property
    def transport(self) -> Transport:
        """Lazy-initialize the transport from config."""
        if self._transport is None:
            self._transport = create_transport(self.config)
        return self._transport

    async def aclose(self) -> None:
        """Close the transport and release resources."""
        if self._transport is not None:
            await self._transport.aclose()

    def request(
        self,
        operation_id: str,
        *args: Any,
        return_type: Any = None,
        decode_type: Any = None,
        **kwargs: Any,
    ) -> ApiRequest:
        """Create a request for one call without sending it.

        Args:
            operation_id: Registered operation
            *args: Positional arguments, in declared parameter order
            return_type: Declared result type
            decode_type: Type the body is decoded into (defaults to return_type)
            **kwargs: Arguments by parameter name

        Raises:
            ConfigurationError: If the operation is unknown or the arguments
                do not match its parameters
        """
        description = self.registry.get(operation_id)
        bindings = bind_arguments(description, args, kwargs)
        request: ApiRequest = ApiRequest(
            self.base_url,
            description,
            bindings,
            lambda: self.transport,
            return_type=return_type,
            decode_type=decode_type,
            codecs=self.codecs,
        )
        request.modifiers.extend(self.modifiers)
        return request

    async def call(
        self,
        operation_id: str,
        *args: Any,
        return_type: Any = None,
        cancel: asyncio.Event | None = None,
        **kwargs: Any,
    ) -> Any:
        """Send a request and return the decoded body (see ApiRequest.get_result)."""
        request = self.request(operation_id, *args, return_type=return_type, **kwargs)
        return await request.get_result(cancel)

    async def call_detailed(
        self,
        operation_id: str,
        *args: Any,
        return_type: Any = None,
        cancel: asyncio.Event | None = None,
        **kwargs: Any,
    ) -> CallDetails:
        """Send a request and return full diagnostics (see ApiRequest.get_detailed)."""
        request = self.request(operation_id, *args, return_type=return_type, **kwargs)
        return await request.get_detailed(cancel)
