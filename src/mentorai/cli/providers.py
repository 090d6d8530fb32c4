"""Provider factory functions for CLI.

Centralizes creation of the session store and completion client from
environment variables. Hides configuration details from command
implementations.
"""

import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..completion import CompletionClient, create_completion_client
from ..notices import DebugCallback, Notice, NoticeCallback
from ..sessions import DEFAULT_STORAGE_KEY, SessionStore, create_session_store
from ..ui.config import LogLevel

# Default console for output
_console = Console()

DEFAULT_DATA_DIR = "~/.mentorai"


def get_store(backend: str | None = None, data_dir: str | Path | None = None) -> SessionStore:
    """Create session store from environment variables.

    Args:
        backend: Overrides MENTORAI_STORE
        data_dir: Overrides MENTORAI_DATA_DIR

    Returns:
        Session store instance (not yet connected)

    Environment variables:
        MENTORAI_STORE: Backend type: file, sqlite or memory (default: file)
        MENTORAI_DATA_DIR: Directory for the file/sqlite backends (default: ~/.mentorai)
        MENTORAI_STORAGE_KEY: Key the sessions are stored under (default: mentorai_sessions)
    """
    backend = (backend or os.getenv("MENTORAI_STORE", "file")).lower()
    directory = Path(data_dir or os.getenv("MENTORAI_DATA_DIR", DEFAULT_DATA_DIR)).expanduser()
    key = os.getenv("MENTORAI_STORAGE_KEY", DEFAULT_STORAGE_KEY)

    if backend == "file":
        return create_session_store("file", path=directory, key=key)
    if backend == "sqlite":
        return create_session_store("sqlite", path=directory / "sessions.db", key=key)
    return create_session_store(backend, key=key)


def get_client(console: Console | None = None, offline: bool = False) -> CompletionClient:
    """Create completion client from environment variables.

    Args:
        console: Optional Rich console for output
        offline: Use the offline echo client regardless of configuration

    Returns:
        Completion client instance

    Raises:
        SystemExit: If the http client is selected but not configured

    Environment variables:
        MENTORAI_COMPLETION_PROVIDER: http or echo (default: http)
        MENTORAI_CHAT_URL: Completion endpoint URL (required for http)
        MENTORAI_API_KEY: Bearer credential (required for http)
        MENTORAI_TIMEOUT: Request timeout in seconds (default: 60)
    """
    import typer

    con = console or _console
    provider = "echo" if offline else os.getenv("MENTORAI_COMPLETION_PROVIDER", "http").lower()

    if provider in ("echo", "offline"):
        return create_completion_client("echo")

    if provider == "http":
        url = os.getenv("MENTORAI_CHAT_URL")
        api_key = os.getenv("MENTORAI_API_KEY")
        if not url or not api_key:
            con.print("[red]Error: MENTORAI_CHAT_URL and MENTORAI_API_KEY must be set[/red]")
            con.print("[dim]Use --offline to try the tutor without an endpoint.[/dim]")
            raise typer.Exit(code=1)
        try:
            timeout = float(os.getenv("MENTORAI_TIMEOUT", "60"))
        except ValueError:
            con.print("[red]Error: MENTORAI_TIMEOUT must be a number of seconds[/red]")
            raise typer.Exit(code=1)
        return create_completion_client("http", url=url, api_key=api_key, timeout=timeout)

    con.print(f"[red]Error: Unknown completion provider: {provider}[/red]")
    raise typer.Exit(code=1)


def console_notice_callback(console: Console | None = None) -> NoticeCallback:
    """Print notices to the console, colored by severity."""
    con = console or _console
    colors = {"information": "cyan", "warning": "yellow", "error": "red"}

    def _print(notice: Notice) -> None:
        color = colors.get(notice.severity, "white")
        detail = f" {notice.description}" if notice.description else ""
        con.print(f"[{color}]{notice.title}:[/{color}]{detail}")

    return _print


def console_debug_callback(level: str, console: Console | None = None) -> DebugCallback:
    """Print diagnostics at or above ``level`` to the console."""
    con = console or _console
    threshold = LogLevel.from_string(level)

    def _print(msg_level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(msg_level)
        if numeric < threshold:
            return
        con.print(f"[dim]{LogLevel.name(numeric):<7} \\[{component}] {escape(message)}[/dim]", highlight=False)

    return _print
