"""Session module for mentorai.

Provides the session data model, the in-memory repository and the
durable stores it writes through to.
"""

from .base import DEFAULT_STORAGE_KEY, SessionStore
from .factory import create_session_store
from .models import DEFAULT_TITLE, ChatSession, Message, Role
from .repository import SessionRepository

__all__ = [
    "ChatSession",
    "DEFAULT_STORAGE_KEY",
    "DEFAULT_TITLE",
    "Message",
    "Role",
    "SessionRepository",
    "SessionStore",
    "create_session_store",
]
