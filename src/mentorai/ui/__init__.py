"""Terminal UI module for mentorai.

Provides a Textual-based TUI for the tutor chat.

Module structure (each module hides a design decision):
- config.py: Constants and user-visible strings
- widgets.py: Custom widgets (session list, transcript, composer, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- screens.py: Modal dialogs (clear-all confirmation, rename)
- app.py: Application orchestration (intents in, re-render out)
"""

from .app import MentorTextualApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, SessionList

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "MentorTextualApp",
    "SessionList",
    "run_textual_tui",
]
