"""Transport factory for creating configured transports.

This module provides a factory function that creates the default transport
from configuration. It keeps transport construction out of the request
pipeline.
"""

from .config import RestCallConfig
from .transport import Transport


def create_transport(config: RestCallConfig | None = None) -> Transport:
    """Create the default transport based on configuration.

    Args:
        config: restcall configuration. If None, loads from environment.

    Returns:
        Configured transport implementing the Transport protocol.

    Example:
        transport = create_transport()

        config = RestCallConfig(timeout=5.0, retry_attempts=1)
        transport = create_transport(config)
    """
    config = config or RestCallConfig()

    from .http import HTTPTransport

    return HTTPTransport(config)
