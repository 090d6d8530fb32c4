"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Session list rendering and selection
- Transcript rendering and incremental updates
- Composer input, history and busy state
- Log rendering and level filtering
"""

from datetime import datetime

from textual.containers import Center, Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, Label, ListItem, ListView, Markdown, RichLog, Static, TextArea

from ..sessions import ChatSession, Message
from .config import (
    COMPOSER_PLACEHOLDER,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    SESSION_TITLE_MAX_LENGTH,
    THINKING_TEXT,
    WELCOME_TEXT,
    WELCOME_TITLE,
    LogLevel,
)


def _copy_text(widget, text: str, what: str) -> None:
    """Copy text to the system clipboard, falling back to OSC 52."""
    try:
        import pyperclip
        pyperclip.copy(text)
        widget.app.notify(f"{what} copied", timeout=2)
    except Exception:
        widget.app.copy_to_clipboard(text)
        widget.app.notify(f"{what} copied (terminal)", timeout=2)


class ClickableMessage(Vertical):
    """A chat message container that copies its content when clicked."""

    def __init__(self, content: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._content = content

    def on_click(self, event: Click) -> None:
        event.stop()
        _copy_text(self, self._content, "Message")


class SessionItem(ListItem):
    """One row of the session list."""

    def __init__(self, session: ChatSession) -> None:
        super().__init__(
            Label(self._format_title(session.title), classes="session-title"),
            Label(self._format_meta(session), classes="session-meta"),
        )
        self.session_id = session.id

    @staticmethod
    def _format_title(title: str) -> str:
        if len(title) > SESSION_TITLE_MAX_LENGTH:
            return title[:SESSION_TITLE_MAX_LENGTH - 1] + "…"
        return title

    @staticmethod
    def _format_meta(session: ChatSession) -> str:
        try:
            created = session.created.astimezone().strftime("%b %d %H:%M")
        except ValueError:
            created = session.created_at
        count = len(session.messages)
        return f"{created} · {count} msg{'s' if count != 1 else ''}"


class SessionList(ListView):
    """Session list, newest first, with the active session highlighted."""

    BORDER_TITLE = "Chats"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._signature: tuple[tuple[str, str, int], ...] = ()

    async def show_sessions(
        self,
        sessions: tuple[ChatSession, ...],
        active_id: str | None
    ) -> None:
        """Rebuild rows if the collection changed, then highlight the active one."""
        signature = tuple((s.id, s.title, len(s.messages)) for s in sessions)
        if signature != self._signature:
            self._signature = signature
            await self.clear()
            await self.extend(SessionItem(session) for session in sessions)
            self.border_subtitle = f"{len(sessions)}" if sessions else ""

        for index, session in enumerate(sessions):
            if session.id == active_id:
                self.index = index
                break
        else:
            self.index = None

    @property
    def highlighted_session_id(self) -> str | None:
        item = self.highlighted_child
        return item.session_id if isinstance(item, SessionItem) else None


class EmptyState(Vertical):
    """Shown in place of the transcript when no session is active."""

    def compose(self):
        with Center():
            yield Static(WELCOME_TITLE, id="welcome-title")
        with Center():
            yield Static(WELCOME_TEXT, id="welcome-text")
        with Center():
            yield Button("Start a New Chat", id="start-chat-btn", variant="primary")


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript of the active session.

    Re-renders only what changed: a different session clears and remounts,
    new messages in the same session are appended.
    """

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True
    ALLOW_SELECT = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._session_id: str | None = None
        self._rendered: list[Message] = []

    async def show_session(self, session: ChatSession | None) -> None:
        """Render the given session's messages."""
        if session is None:
            if self._session_id is not None:
                await self.clear_history()
            return

        if session.id != self._session_id:
            await self.clear_history()
            self._session_id = session.id
            self.border_title = session.title
        elif session.title != self.border_title:
            self.border_title = session.title

        new_messages = session.messages[len(self._rendered):]
        for message in new_messages:
            self._rendered.append(message)
            self._render_message(message)

        count = len(self._rendered)
        self.border_subtitle = f"{count} message{'s' if count != 1 else ''}"
        if new_messages:
            self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the last assistant response."""
        for msg in reversed(self._rendered):
            if msg.role == "assistant":
                return msg.content
        return None

    async def clear_history(self) -> None:
        """Clear the rendered transcript."""
        self._rendered = []
        self._session_id = None
        await self.remove_children()
        self.border_title = "Chat"
        self.border_subtitle = "Conversation history"

    def _render_message(self, msg: Message) -> None:
        """Render a single message to the display."""
        if msg.role == "user":
            header_text = "> You"
            border_class = "user-message"
        else:
            header_text = "< Tutor"
            border_class = "assistant-message"

        container = ClickableMessage(content=msg.content, classes=f"chat-message {border_class}")
        container.compose_add_child(Static(header_text, classes="message-header"))

        if msg.role == "assistant":
            container.compose_add_child(Markdown(msg.content, classes="message-content"))
        else:
            container.compose_add_child(Static(msg.content, classes="message-content", markup=False))

        self.mount(container)


class ThinkingIndicator(Static):
    """One-line "thinking" marker shown while the active session is sending."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(THINKING_TEXT, *args, **kwargs)

    def on_mount(self) -> None:
        self.display = False


class ChatInputBar(Horizontal):
    """Composer: TextArea and Send button, disabled while busy."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._busy = False

    def compose(self):
        text_area = TextArea(
            id="chat-input",
            show_line_numbers=False,
            placeholder=COMPOSER_PLACEHOLDER,
        )
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.focus()
        text_area.highlight_cursor_line = False

    @property
    def busy(self) -> bool:
        return self._busy

    def set_busy(self, busy: bool) -> None:
        """Disable or re-enable the composer."""
        if busy == self._busy:
            return
        self._busy = busy
        self.query_one("#chat-input", TextArea).disabled = busy
        self.query_one("#send-btn", Button).disabled = busy
        if not busy:
            self.focus_input()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()
        elif event.key == "up" and self._is_cursor_at_start():
            self._navigate_history(-1)
            event.prevent_default()
            event.stop()
        elif event.key == "down" and self._is_cursor_at_end():
            self._navigate_history(1)
            event.prevent_default()
            event.stop()

    def _is_cursor_at_start(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        return text_area.cursor_location == (0, 0)

    def _is_cursor_at_end(self) -> bool:
        text_area = self.query_one("#chat-input", TextArea)
        lines = text_area.text.split("\n")
        return text_area.cursor_location == (len(lines) - 1, len(lines[-1]))

    def _navigate_history(self, direction: int) -> None:
        if not self._history:
            return
        text_area = self.query_one("#chat-input", TextArea)
        if direction < 0:
            if self._history_index == -1:
                self._history_index = len(self._history) - 1
            elif self._history_index > 0:
                self._history_index -= 1
        else:
            if self._history_index < len(self._history) - 1:
                self._history_index += 1
            else:
                self._history_index = -1
                text_area.text = ""
                return
        text_area.text = self._history[self._history_index]

    def _submit(self) -> None:
        if self._busy:
            return
        text_area = self.query_one("#chat-input", TextArea)
        value = text_area.text
        if value.strip():
            if not self._history or self._history[-1] != value:
                self._history.append(value)
            self._history_index = -1
            text_area.text = ""
            self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class DebugPanel(RichLog):
    """Log panel for diagnostics with level filtering.

    Shows timestamped log messages from all components.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Diagnostics"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=False,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def log_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (TUI, Sessions, Chat, ...)
            message: Log message
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        component_colors = {
            "TUI": "cyan",
            "Sessions": "bright_green",
            "Chat": "magenta",
        }
        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = level_colors.get(level, "white")
        comp_color = component_colors.get(component, "white")

        from rich.markup import escape
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<5}[/] "
            f"[{comp_color}]\\[{component}][/] {escape(message)}"
        )

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
