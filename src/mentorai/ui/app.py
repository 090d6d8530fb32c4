"""Main Textual TUI application.

Presentation surface for the tutor chat: turns key presses and clicks into
controller intents, and re-renders from the repository's state whenever the
controller reports a change.
"""

import asyncio
import contextlib

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Button, Footer, Header, ListView

from ..chat import ConversationController
from ..completion import CompletionClient
from ..notices import Notice
from ..sessions import SessionRepository, SessionStore
from .config import (
    CLEAR_ALL_PROMPT,
    CLEAR_ALL_TITLE,
    ERROR_NOTICE_TIMEOUT,
    NOTICE_TIMEOUT,
    LogLevel,
)
from .screens import ConfirmationScreen, RenameScreen
from .styles import APP_CSS
from .themes import MENTOR_DUSK
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    DebugPanel,
    EmptyState,
    SessionItem,
    SessionList,
    ThinkingIndicator,
)


class MentorTextualApp(App):
    """Textual TUI for the MentorAI tutor chat."""

    CSS = APP_CSS
    TITLE = "MentorAI"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+n", "new_chat", "New Chat", priority=True),
        Binding("ctrl+w", "delete_chat", "Delete Chat", priority=True),
        Binding("ctrl+e", "rename_chat", "Rename", priority=True),
        Binding("ctrl+k", "clear_all", "Clear All", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+b", "toggle_maximize_chat", "Max Chat"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        controller: ConversationController,
        log_level: str | None = None,
        load_on_mount: bool = True,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._log_level = log_level
        self._load_on_mount = load_on_mount
        self._refresh_pending = False

    @property
    def controller(self) -> ConversationController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Vertical(id="sidebar"):
            yield Button("+ New Chat", id="new-chat-btn", variant="primary")
            yield SessionList(id="session-list")
            yield Button("Clear All Chats", id="clear-all-btn", variant="error")

        with Vertical(id="main"):
            yield EmptyState(id="empty-state")
            yield ChatHistoryWidget(id="chat-history")
            yield ThinkingIndicator(id="thinking")
            yield DebugPanel(id="debug-panel")
            yield ChatInputBar(id="chat-input-bar")

        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(MENTOR_DUSK)
        self.theme = "mentor-dusk"

        if self._log_level is not None:
            log_panel = self.query_one("#debug-panel", DebugPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.log_entry("TUI", f"Log panel enabled with level: {self._log_level.upper()}", LogLevel.INFO)

        self._controller.set_notice_callback(self._show_notice)
        self._controller.set_debug_callback(self._debug)
        self._controller.add_listener(self._schedule_refresh)

        store = self._controller.repository.store
        self.sub_title = f"{self._controller.client.name} | {store.backend_type} store"

        if self._load_on_mount:
            self._load_sessions()
        else:
            self._schedule_refresh()

    # ------------------------------------------------------------------
    # Controller wiring
    # ------------------------------------------------------------------

    def _show_notice(self, notice: Notice) -> None:
        timeout = ERROR_NOTICE_TIMEOUT if notice.severity == "error" else NOTICE_TIMEOUT
        self.notify(
            notice.description or notice.title,
            title=notice.title,
            severity=notice.severity,
            timeout=timeout,
        )

    def _debug(self, level: str, component: str, message: str) -> None:
        """Route debug messages to the log panel."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        log_panel.log_entry(component, message, LogLevel.from_string(level))

    def _schedule_refresh(self) -> None:
        """Coalesce change notifications into one refresh per event-loop turn."""
        if self._refresh_pending:
            return
        self._refresh_pending = True
        self.call_later(self._refresh)

    async def _refresh(self) -> None:
        """Re-render every view from the controller's current state."""
        self._refresh_pending = False
        controller = self._controller
        active = controller.active_session
        active_id = active.id if active is not None else None

        session_list = self.query_one("#session-list", SessionList)
        await session_list.show_sessions(controller.sessions, active_id)

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        self.query_one("#empty-state", EmptyState).display = active is None
        chat.display = active is not None
        await chat.show_session(active)

        busy = controller.is_busy(active_id)
        self.query_one("#thinking", ThinkingIndicator).display = busy
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(busy)
        self.query_one("#clear-all-btn", Button).display = bool(controller.sessions)

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------

    @work(exclusive=True, group="load")
    async def _load_sessions(self) -> None:
        repository = self._controller.repository
        await repository.connect()
        await repository.load()
        self._schedule_refresh()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    @work(group="send")
    async def _send(self, text: str) -> None:
        """Run one send as a background async worker.

        Sends are not exclusive: a send into another session keeps running
        while this one starts.
        """
        try:
            await self._controller.send_message(text)
        except Exception as e:
            self._debug("error", "TUI", f"Send failed unexpectedly: {e}")
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=ERROR_NOTICE_TIMEOUT)

    @work(group="sessions")
    async def _new_chat(self) -> None:
        await self._controller.new_chat()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    @work(group="sessions")
    async def _delete_chat(self, session_id: str) -> None:
        await self._controller.delete_session(session_id)

    @work(group="sessions")
    async def _rename_chat(self, session_id: str, title: str) -> None:
        await self._controller.rename_session(session_id, title)

    @work(group="sessions")
    async def _clear_all(self) -> None:
        await self._controller.clear_all()

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._send(event.value)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, SessionItem):
            self._controller.select_session(event.item.session_id)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id in ("new-chat-btn", "start-chat-btn"):
            self.action_new_chat()
        elif event.button.id == "clear-all-btn":
            self.action_clear_all()

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_new_chat(self) -> None:
        """Start a new chat session."""
        self._new_chat()

    def action_delete_chat(self) -> None:
        """Delete the highlighted session (or the active one)."""
        session_list = self.query_one("#session-list", SessionList)
        session_id = session_list.highlighted_session_id
        if session_id is None:
            active = self._controller.active_session
            session_id = active.id if active is not None else None
        if session_id is None:
            self.notify("No chat selected", severity="warning", timeout=2)
            return
        self._delete_chat(session_id)

    def action_rename_chat(self) -> None:
        """Rename the active session."""
        active = self._controller.active_session
        if active is None:
            self.notify("No chat selected", severity="warning", timeout=2)
            return

        session_id = active.id

        def _on_dismiss(title: str | None) -> None:
            if title is not None:
                self._rename_chat(session_id, title)

        self.push_screen(RenameScreen(active.title), _on_dismiss)

    def action_clear_all(self) -> None:
        """Ask for confirmation, then delete every session."""
        if not self._controller.sessions:
            self.notify("No chats to clear", timeout=2)
            return

        def _on_dismiss(confirmed: bool | None) -> None:
            if confirmed:
                self._clear_all()

        self.push_screen(ConfirmationScreen(CLEAR_ALL_TITLE, CLEAR_ALL_PROMPT), _on_dismiss)

    def action_copy_last_response(self) -> None:
        """Copy last tutor response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")

    def action_toggle_maximize_chat(self) -> None:
        """Toggle maximize for the transcript (hides the sidebar)."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        sidebar = self.query_one("#sidebar", Vertical)
        if chat.has_class("-maximized"):
            chat.remove_class("-maximized")
            sidebar.display = True
        else:
            chat.add_class("-maximized")
            sidebar.display = False

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    store: SessionStore,
    client: CompletionClient,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Builds the repository and controller around the given store and client,
    then owns their lifetime: the app opens the store when it mounts, and
    the store is disconnected, with the client closed, when it exits.

    Args:
        store: Session store backend (not yet connected)
        client: Completion client
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    repository = SessionRepository(store)
    controller = ConversationController(repository, client)
    app = MentorTextualApp(controller, log_level=log_level)

    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        with contextlib.suppress(BaseException):
            await client.close()
        await store.disconnect()
