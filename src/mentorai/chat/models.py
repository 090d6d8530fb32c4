"""Data structures for the conversation controller."""

from dataclasses import dataclass
from enum import Enum

from ..errors import CompletionError
from ..sessions.models import Message

FALLBACK_REPLY = "Sorry, I couldn't process that. Please try again."


class SendState(str, Enum):
    """Per-session send state."""

    IDLE = "idle"
    SENDING = "sending"


@dataclass(frozen=True)
class SendResult:
    """Outcome of one accepted send.

    ``reply`` is the assistant message that was appended: the real reply
    when ``ok``, the fallback otherwise. It is None when the session was
    deleted before the reply arrived.
    """

    session_id: str
    user_message: Message
    reply: Message | None
    ok: bool
    error: CompletionError | None = None
