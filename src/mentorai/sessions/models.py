"""Data models for chat sessions.

These models define the structure of messages and sessions independent of
the store that persists them. Field aliases keep the stored JSON in the
camelCase shape the web client wrote (``createdAt``).
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from uuid_extensions import uuid7

DEFAULT_TITLE = "New Chat"


def new_id() -> str:
    """Generate a process-unique, time-ordered identifier."""
    return str(uuid7())


def clean_text(value: str) -> str:
    """Replace lone surrogates (undecodable argv/stdin bytes) with U+FFFD.

    Such text cannot be encoded as UTF-8, so it would poison every later
    write of the collection.
    """
    return value.encode("utf-8", "surrogatepass").decode("utf-8", "replace")


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class Role(str, Enum):
    """Author of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class Message(BaseModel):
    """A single chat message. Immutable once created."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str = Field(default_factory=new_id, description="Client-generated unique id")
    role: Role = Field(description="'user' or 'assistant'")
    content: str = Field(description="Message text")

    @field_validator("content")
    @classmethod
    def _clean_content(cls, value: str) -> str:
        return clean_text(value)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)


class ChatSession(BaseModel):
    """One conversation thread with its ordered message history."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str = Field(default_factory=new_id)
    title: str = Field(default=DEFAULT_TITLE)
    created_at: str = Field(
        default_factory=utc_timestamp,
        alias="createdAt",
        description="ISO-8601 creation time, kept verbatim",
    )
    messages: list[Message] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def _clean_title(cls, value: str) -> str:
        return clean_text(value)

    @field_validator("created_at")
    @classmethod
    def _check_iso_timestamp(cls, value: str) -> str:
        # Stored text is preserved as-is so re-serialization is byte-stable
        datetime.fromisoformat(value)
        return value

    @property
    def created(self) -> datetime:
        """Creation time as a datetime."""
        return datetime.fromisoformat(self.created_at)

    @property
    def last_message(self) -> Message | None:
        return self.messages[-1] if self.messages else None

    def add_message(self, message: Message) -> None:
        """Append a message to the end of the conversation.

        Args:
            message: The message to append
        """
        self.messages.append(message)
