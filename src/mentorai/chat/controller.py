"""Conversation controller.

Orchestrates the user intents of the chat surface. A send runs through an
explicit per-session state machine:

    IDLE --send--> SENDING --reply or failure--> IDLE

While SENDING, the user's message is already in the session (optimistic
update) and further sends into the same session are ignored. A failed
completion appends a fallback reply instead of rolling the user's message
back.
"""

import asyncio
from collections.abc import Callable

from ..completion import CompletionClient
from ..errors import CompletionError
from ..notices import DebugCallback, Notice, NoticeCallback
from ..sessions import ChatSession, Message, SessionRepository
from .models import FALLBACK_REPLY, SendResult, SendState

SEND_FAILED_NOTICE = Notice(
    title="An error occurred",
    description="Failed to get a response from the AI tutor.",
    severity="error",
)

CHAT_DELETED_NOTICE = Notice(
    title="Chat Deleted",
    description="The chat session has been removed.",
)

CHATS_CLEARED_NOTICE = Notice(
    title="All Chats Cleared",
    description="Your chat history has been wiped.",
)


class ConversationController:
    """Maps presentation intents onto the repository and completion client.

    Args:
        repository: Owner of the sessions; shared with the presentation layer
        client: Completion client used for assistant replies
        on_notice: Receives user-facing notices
    """

    def __init__(
        self,
        repository: SessionRepository,
        client: CompletionClient,
        on_notice: NoticeCallback | None = None
    ) -> None:
        self._repository = repository
        self._client = client
        self._on_notice = on_notice
        self._states: dict[str, SendState] = {}
        self._debug_callback: DebugCallback | None = None
        self._listeners: list[Callable[[], None]] = []
        # Held while a send resolves its target, so a second send cannot
        # slip in while a brand-new session is being created
        self._resolve_lock = asyncio.Lock()

        if on_notice is not None:
            repository.set_notice_callback(on_notice)

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    def set_notice_callback(self, callback: NoticeCallback | None) -> None:
        """Route notices from the controller and its repository."""
        self._on_notice = callback
        self._repository.set_notice_callback(callback)

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the debug callback for detailed execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback
        self._repository.set_debug_callback(callback)

    def add_listener(self, listener: Callable[[], None]) -> None:
        """Register a callable run after any session or busy-state change."""
        self._listeners.append(listener)
        self._repository.add_listener(listener)

    def _debug(self, level: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, "Chat", message)

    def _notify(self, notice: Notice) -> None:
        if self._on_notice:
            self._on_notice(notice)

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()

    # ------------------------------------------------------------------
    # Exposed state
    # ------------------------------------------------------------------

    @property
    def repository(self) -> SessionRepository:
        return self._repository

    @property
    def client(self) -> CompletionClient:
        return self._client

    @property
    def sessions(self) -> tuple[ChatSession, ...]:
        return self._repository.sessions

    @property
    def active_session(self) -> ChatSession | None:
        return self._repository.get_active()

    @property
    def busy(self) -> bool:
        """True while any session has a send in flight."""
        return any(state is SendState.SENDING for state in self._states.values())

    def state_of(self, session_id: str | None) -> SendState:
        if session_id is None:
            return SendState.IDLE
        return self._states.get(session_id, SendState.IDLE)

    def is_busy(self, session_id: str | None) -> bool:
        return self.state_of(session_id) is SendState.SENDING

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def new_chat(self) -> str:
        """Start an empty session and make it active."""
        return await self._repository.create_session()

    def select_session(self, session_id: str) -> None:
        self._repository.set_active(session_id)

    async def delete_session(self, session_id: str) -> bool:
        """Delete a session; an in-flight send into it finishes as a no-op."""
        deleted = await self._repository.delete_session(session_id)
        if deleted:
            self._notify(CHAT_DELETED_NOTICE)
        return deleted

    async def clear_all(self) -> None:
        await self._repository.clear_all()
        self._notify(CHATS_CLEARED_NOTICE)

    async def rename_session(self, session_id: str, title: str) -> bool:
        return await self._repository.rename_session(session_id, title)

    async def send_message(self, text: str) -> SendResult | None:
        """Send a user message into the active session.

        Creates a session first when none is active. Returns None when the
        intent is ignored (blank text, or the target session is already
        sending).

        Args:
            text: The message as typed

        Returns:
            SendResult describing what was appended, or None if ignored
        """
        if not text.strip():
            self._debug("debug", "Ignored empty message")
            return None

        async with self._resolve_lock:
            active = self._repository.get_active()
            if active is not None and self.is_busy(active.id):
                self._debug("debug", f"Ignored send, session {active.id} is busy")
                return None
            session_id = active.id if active is not None else await self._repository.create_session()
            self._states[session_id] = SendState.SENDING

        self._changed()
        user_message = Message.user(text)
        reply: Message | None = None
        error: CompletionError | None = None

        try:
            await self._repository.append_message(session_id, user_message)
            self._debug("info", f"Sending to {self._client.name}: '{user_message.content[:50]}'")

            try:
                reply_text = await self._client.complete(user_message.content)
            except CompletionError as e:
                error = e
                self._debug("error", f"Completion failed: {e}")
                self._notify(SEND_FAILED_NOTICE)
                reply = Message.assistant(FALLBACK_REPLY)
            else:
                reply = Message.assistant(reply_text)

            if not await self._repository.append_message(session_id, reply):
                reply = None
        finally:
            self._states.pop(session_id, None)
            self._changed()

        return SendResult(
            session_id=session_id,
            user_message=user_message,
            reply=reply,
            ok=error is None,
            error=error,
        )
