from abc import ABC, abstractmethod
from typing import Any


class CompletionClient(ABC):
    """Abstract base class for AI completion clients.

    This module hides the design decision of how the tutor's replies are
    produced. Implementations must handle:
    - Transport and authentication
    - Request/response format conversion
    - Mapping failures onto RequestFailed / TransportError

    Clients are stateless per call: only the latest user message is sent,
    and no retries are attempted.

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            reply = await client.complete("What is a derivative?")
    """

    @abstractmethod
    async def complete(self, message: str) -> str:
        """Send one user message and return the assistant's reply text.

        Args:
            message: The user's latest message

        Returns:
            Reply text

        Raises:
            RequestFailed: Non-success status or provider-reported error
            TransportError: No response was received
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    @property
    def name(self) -> str:
        """Short identifier shown in the UI subtitle."""
        return type(self).__name__

    async def __aenter__(self) -> "CompletionClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
