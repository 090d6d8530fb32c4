"""In-memory session repository with write-through persistence.

The repository is the single owner of the session collection and the
active-session pointer for the lifetime of the process. Every mutation:

1. checks that its target exists (absent targets are logged no-ops),
2. applies the change in memory,
3. rewrites the whole collection to the store.

A failed write is reported as a warning notice and never rolled back: the
in-memory state stays authoritative until the next successful write.
"""

import asyncio
from collections.abc import Callable

from ..errors import SessionStoreError
from ..notices import DebugCallback, Notice, NoticeCallback
from .base import SessionStore
from .models import DEFAULT_TITLE, ChatSession, Message

LOAD_FAILED_NOTICE = Notice(
    title="Error",
    description="Could not load your previous chat sessions.",
    severity="warning",
)

SAVE_FAILED_NOTICE = Notice(
    title="Warning",
    description="Could not save your chat sessions. Changes are kept for this run only.",
    severity="warning",
)


class SessionRepository:
    """Owns the session collection (newest first) and the active pointer.

    Args:
        store: Backend the collection is persisted to
        on_notice: Receives user-facing warnings (e.g. persistence failures)
    """

    def __init__(
        self,
        store: SessionStore,
        on_notice: NoticeCallback | None = None
    ) -> None:
        self._store = store
        self._sessions: list[ChatSession] = []
        self._active_id: str | None = None
        self._on_notice = on_notice
        self._debug_callback: DebugCallback | None = None
        self._listeners: list[Callable[[], None]] = []
        self._save_lock = asyncio.Lock()
        self._unavailable = False

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def set_notice_callback(self, callback: NoticeCallback | None) -> None:
        """Set the receiver for user-facing notices."""
        self._on_notice = callback

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for diagnostics.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    def add_listener(self, listener: Callable[[], None]) -> None:
        """Register a callable invoked after every in-memory change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Sessions", message)

    def _notify(self, notice: Notice) -> None:
        if self._on_notice:
            self._on_notice(notice)

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def store(self) -> SessionStore:
        return self._store

    @property
    def sessions(self) -> tuple[ChatSession, ...]:
        """Snapshot of the collection, newest first."""
        return tuple(self._sessions)

    @property
    def active_id(self) -> str | None:
        """The active pointer as set, possibly dangling."""
        return self._active_id

    def get(self, session_id: str | None) -> ChatSession | None:
        """Return the session with the given id, or None."""
        index = self._index_of(session_id)
        return None if index is None else self._sessions[index]

    def get_active(self) -> ChatSession | None:
        """Return the session the active pointer references, or None."""
        return self.get(self._active_id)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return isinstance(session_id, str) and self._index_of(session_id) is not None

    def _index_of(self, session_id: str | None) -> int | None:
        if session_id is None:
            return None
        for i, session in enumerate(self._sessions):
            if session.id == session_id:
                return i
        return None

    # ------------------------------------------------------------------
    # Loading and persistence
    # ------------------------------------------------------------------

    async def connect(self) -> bool:
        """Open the store.

        A store that cannot be opened is not fatal: the repository runs on
        an empty in-memory collection, ``load()`` skips the store, and later
        writes still try and warn if they fail.

        Returns:
            True if the store was opened
        """
        try:
            await self._store.connect()
        except SessionStoreError as e:
            self._debug("error", f"Failed to open {self._store.backend_type} store: {e}")
            self._notify(LOAD_FAILED_NOTICE)
            self._unavailable = True
            return False
        self._unavailable = False
        return True

    async def load(self) -> None:
        """Replace in-memory state with the persisted collection.

        Unreadable or corrupt data yields an empty collection and one
        warning notice. The store itself is not touched.
        """
        if self._unavailable:
            self._sessions = []
            self._debug("info", "Store unavailable, starting with no sessions")
            self._changed()
            return

        try:
            sessions = await self._store.load()
        except SessionStoreError as e:
            self._debug("error", f"Failed to load sessions: {e}")
            self._notify(LOAD_FAILED_NOTICE)
            sessions = []
        else:
            if self._store.last_load_error is not None:
                self._debug(
                    "error",
                    f"Stored sessions are corrupt, starting empty: {self._store.last_load_error}"
                )
                self._notify(LOAD_FAILED_NOTICE)

        self._sessions = list(sessions)
        if self._sessions and self.get_active() is None:
            self._active_id = self._sessions[0].id
        self._debug("info", f"Loaded {len(self._sessions)} session(s) from {self._store.backend_type} store")
        self._changed()

    async def _persist(self) -> bool:
        """Write the current collection through to the store.

        Writes are serialized and always capture the collection at write
        time, so the last write to finish holds the latest state.
        """
        async with self._save_lock:
            try:
                await self._store.save(list(self._sessions))
            except SessionStoreError as e:
                self._debug("error", f"Failed to save sessions: {e}")
                self._notify(SAVE_FAILED_NOTICE)
                return False
        return True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create_session(self) -> str:
        """Create an empty session at the front and make it active.

        Returns:
            The new session's id
        """
        session = ChatSession()
        while session.id in self:
            session = ChatSession()
        self._sessions.insert(0, session)
        self._active_id = session.id
        self._debug("info", f"Created session {session.id}")
        self._changed()
        await self._persist()
        return session.id

    async def delete_session(self, session_id: str) -> bool:
        """Delete a session if present.

        If it was active, the pointer moves to the new front session, or to
        None when the collection becomes empty.

        Returns:
            True if a session was removed
        """
        index = self._index_of(session_id)
        if index is None:
            self._debug("debug", f"Delete ignored, no session {session_id}")
            return False

        del self._sessions[index]
        if self._active_id == session_id:
            self._active_id = self._sessions[0].id if self._sessions else None
        self._debug("info", f"Deleted session {session_id}")
        self._changed()
        await self._persist()
        return True

    async def clear_all(self) -> None:
        """Delete every session and clear the active pointer."""
        count = len(self._sessions)
        self._sessions = []
        self._active_id = None
        self._debug("info", f"Cleared {count} session(s)")
        self._changed()
        await self._persist()

    async def append_message(self, session_id: str, message: Message) -> bool:
        """Append a message to a session.

        A missing session is a benign race (deleted while a request was in
        flight): the append is dropped and logged, never raised.

        Returns:
            True if the message was appended
        """
        session = self.get(session_id)
        if session is None:
            self._debug(
                "warning",
                f"Dropped {message.role} message {message.id}: session {session_id} no longer exists"
            )
            return False

        session.add_message(message)
        self._debug("debug", f"Appended {message.role} message to {session_id}")
        self._changed()
        await self._persist()
        return True

    async def rename_session(self, session_id: str, title: str) -> bool:
        """Rewrite a session's title. Blank titles reset to the placeholder.

        Returns:
            True if the session exists and was renamed
        """
        session = self.get(session_id)
        if session is None:
            self._debug("debug", f"Rename ignored, no session {session_id}")
            return False

        session.title = title.strip() or DEFAULT_TITLE
        self._changed()
        await self._persist()
        return True

    def set_active(self, session_id: str | None) -> None:
        """Point at a session. Unknown ids are accepted and read as "no active chat"."""
        if session_id is not None and session_id not in self:
            self._debug("debug", f"Active pointer set to unknown session {session_id}")
        self._active_id = session_id
        self._changed()
