"""
MentorAI: conversational session manager for an AI tutor.

Each module hides one design decision:
- sessions: how chat sessions are represented, mutated and persisted
- completion: how the external AI completion endpoint is reached
- chat: how a send is orchestrated (optimistic update, failure recovery)
- ui: how the conversation is presented in the terminal
"""

__version__ = "0.1.0"

from .chat import ConversationController, SendResult, SendState
from .completion import CompletionClient, create_completion_client
from .errors import (
    CompletionError,
    MentorAIError,
    RequestFailed,
    SessionStoreError,
    TransportError,
)
from .notices import Notice
from .sessions import (
    ChatSession,
    Message,
    SessionRepository,
    SessionStore,
    create_session_store,
)

__all__ = [
    "ChatSession",
    "CompletionClient",
    "CompletionError",
    "ConversationController",
    "MentorAIError",
    "Message",
    "Notice",
    "RequestFailed",
    "SendResult",
    "SendState",
    "SessionRepository",
    "SessionStore",
    "SessionStoreError",
    "TransportError",
    "create_completion_client",
    "create_session_store",
]
