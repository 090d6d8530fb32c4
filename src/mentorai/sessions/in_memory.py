"""In-memory session store.

Simple dict-based storage. Data is lost when the application exits.
"""

from .base import DEFAULT_STORAGE_KEY, SessionStore


class InMemorySessionStore(SessionStore):
    """In-memory session store (process-only).

    Suitable for testing and for throwaway sessions. Several stores may
    share one ``data`` dict to simulate a restart against the same medium.
    """

    def __init__(
        self,
        key: str = DEFAULT_STORAGE_KEY,
        data: dict[str, str] | None = None
    ):
        super().__init__(key)
        self._data: dict[str, str] = data if data is not None else {}

    async def _read(self) -> str | None:
        return self._data.get(self._key)

    async def _write(self, value: str) -> None:
        self._data[self._key] = value

    async def _remove(self) -> None:
        self._data.pop(self._key, None)

    @property
    def data(self) -> dict[str, str]:
        """The underlying key-value mapping."""
        return self._data

    @property
    def backend_type(self) -> str:
        return "memory"
