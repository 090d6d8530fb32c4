"""Factory for creating session store backends."""

from typing import Any

from .base import SessionStore


def create_session_store(
    backend: str = "file",
    **kwargs: Any
) -> SessionStore:
    """Create a session store backend.

    Args:
        backend: Backend type ("memory", "file" or "sqlite")
        **kwargs: Backend-specific configuration
            For all backends:
                - key: str (default: 'mentorai_sessions')
            For file:
                - path: data directory (default: '~/.mentorai')
            For sqlite:
                - path: database file (default: '~/.mentorai/sessions.db')

    Returns:
        SessionStore instance (call ``connect()`` before use)

    Raises:
        ValueError: If backend type is not supported

    Example:
        >>> store = create_session_store("file", path="/tmp/mentorai")
        >>> await store.connect()
    """
    if backend == "memory":
        from .in_memory import InMemorySessionStore
        return InMemorySessionStore(**kwargs)

    elif backend == "file":
        from .file import FileSessionStore
        return FileSessionStore(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteSessionStore
        return SQLiteSessionStore(**kwargs)

    raise ValueError(
        f"Unsupported session store backend: {backend}. "
        f"Supported backends: memory, file, sqlite"
    )
