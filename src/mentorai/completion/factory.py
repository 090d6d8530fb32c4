from typing import Any

from .base import CompletionClient
from .providers import EchoCompletionClient, HttpCompletionClient


def create_completion_client(provider: str = "http", **config: Any) -> CompletionClient:
    """Create a completion client instance.

    This factory function hides the instantiation logic for different clients.

    Args:
        provider: Client type ('http', 'echo')
        **config: Client-specific configuration
            For http:
                - url: str (required)
                - api_key: str (required)
                - timeout: float (default: 60.0)
            For echo:
                - delay: float (default: 0.0)
                - prefix: str (default: 'You said: ')

    Returns:
        Initialized completion client

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> client = create_completion_client(
        ...     "http",
        ...     url="https://example.supabase.co/functions/v1/ai-chat",
        ...     api_key="..."
        ... )

        >>> client = create_completion_client("echo", delay=0.5)
    """
    provider_lower = provider.lower()

    if provider_lower == "http":
        for required in ("url", "api_key"):
            if not config.get(required):
                raise TypeError(f"HTTP completion client requires '{required}' in config")
        return HttpCompletionClient(**config)

    if provider_lower in ("echo", "offline"):
        return EchoCompletionClient(**config)

    raise ValueError(
        f"Unsupported completion provider: {provider}. "
        f"Supported providers: 'http', 'echo'"
    )
