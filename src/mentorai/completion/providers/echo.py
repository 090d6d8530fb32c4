import asyncio

from ..base import CompletionClient


class EchoCompletionClient(CompletionClient):
    """Offline completion client.

    Replies without any network access so the tutor can be tried without
    an endpoint or credential. Never fails.
    """

    def __init__(self, delay: float = 0.0, prefix: str = "You said: "):
        """Initialize the echo client.

        Args:
            delay: Seconds to wait before replying (simulates latency)
            prefix: Text placed before the echoed message
        """
        self._delay = delay
        self._prefix = prefix

    @property
    def name(self) -> str:
        return "offline"

    async def complete(self, message: str) -> str:
        if self._delay > 0:
            await asyncio.sleep(self._delay)
        return f"{self._prefix}{message}"

    async def close(self) -> None:
        pass
