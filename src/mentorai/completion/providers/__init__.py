from .echo import EchoCompletionClient
from .http import HttpCompletionClient

__all__ = ["EchoCompletionClient", "HttpCompletionClient"]
