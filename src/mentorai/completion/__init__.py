from .base import CompletionClient
from .factory import create_completion_client
from .models import CompletionReply, CompletionRequest
from .providers import EchoCompletionClient, HttpCompletionClient

__all__ = [
    "CompletionClient",
    "create_completion_client",
    "CompletionReply",
    "CompletionRequest",
    "EchoCompletionClient",
    "HttpCompletionClient",
]
