"""Abstract base class for session store backends.

This module defines the interface for durable session storage.
The abstraction hides:
- Storage medium (memory, JSON file, SQLite)
- Connection management
- How "no data" is represented

Every backend stores one serialized collection under a single fixed key.
Encoding and decoding live here so all backends agree byte-for-byte.
"""

from abc import ABC, abstractmethod

from pydantic_core import PydanticSerializationError

from ..errors import SessionStoreError
from .codec import CorruptSessionData, decode_sessions, encode_sessions
from .models import ChatSession

DEFAULT_STORAGE_KEY = "mentorai_sessions"


class SessionStore(ABC):
    """Abstract session store.

    Subclasses implement raw key access (``_read``, ``_write``, ``_remove``);
    this class owns the collection semantics:

    - absent key -> empty collection
    - undecodable value -> empty collection, value left untouched,
      ``last_load_error`` set so the caller can warn once
    - empty collection -> key removed rather than written
    """

    def __init__(self, key: str = DEFAULT_STORAGE_KEY):
        self._key = key
        self.last_load_error: str | None = None

    @property
    def key(self) -> str:
        """The fixed key the collection is stored under."""
        return self._key

    async def connect(self) -> None:
        """Initialize the backend."""

    async def disconnect(self) -> None:
        """Close the backend gracefully."""

    async def load(self) -> list[ChatSession]:
        """Return the persisted collection, newest first.

        Raises:
            SessionStoreError: If the storage medium cannot be read
        """
        self.last_load_error = None
        raw = await self._read()
        if raw is None:
            return []
        try:
            return decode_sessions(raw)
        except CorruptSessionData as e:
            self.last_load_error = str(e)
            return []

    async def save(self, sessions: list[ChatSession]) -> None:
        """Persist the full collection, or remove the key if it is empty.

        Raises:
            SessionStoreError: If the collection cannot be encoded or the
                storage medium cannot be written
        """
        if not sessions:
            await self._remove()
            return
        try:
            value = encode_sessions(sessions)
        except PydanticSerializationError as e:
            raise SessionStoreError(f"Cannot encode sessions: {e}") from e
        await self._write(value)

    async def read_raw(self) -> str | None:
        """Return the stored text as-is (None if the key is absent)."""
        return await self._read()

    @abstractmethod
    async def _read(self) -> str | None:
        """Read the raw value for the key, or None if absent."""

    @abstractmethod
    async def _write(self, value: str) -> None:
        """Replace the raw value for the key."""

    @abstractmethod
    async def _remove(self) -> None:
        """Delete the key. Must not fail if it is already absent."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "SessionStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
