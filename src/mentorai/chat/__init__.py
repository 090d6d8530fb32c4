"""Conversation orchestration for mentorai.

Ties the session repository to the completion client: optimistic user
messages, per-session busy state and failure recovery.
"""

from .controller import ConversationController
from .models import FALLBACK_REPLY, SendResult, SendState

__all__ = [
    "ConversationController",
    "FALLBACK_REPLY",
    "SendResult",
    "SendState",
]
