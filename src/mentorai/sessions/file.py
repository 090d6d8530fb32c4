"""JSON file session store.

Keeps one file per key in a data directory, the same way a browser keeps
one localStorage entry per key. Writes go through a temporary file and an
atomic rename so a crash never leaves a half-written collection behind.
"""

import asyncio
import os
import tempfile
from pathlib import Path

from ..errors import SessionStoreError
from .base import DEFAULT_STORAGE_KEY, SessionStore


class FileSessionStore(SessionStore):
    """File-backed session store.

    The collection for key ``k`` lives in ``<directory>/<k>.json``.
    """

    def __init__(
        self,
        path: str | Path = "~/.mentorai",
        key: str = DEFAULT_STORAGE_KEY
    ):
        super().__init__(key)
        self._directory = Path(path).expanduser()

    @property
    def file_path(self) -> Path:
        return self._directory / f"{self._key}.json"

    async def connect(self) -> None:
        """Create the data directory if needed."""
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SessionStoreError(f"Cannot create data directory {self._directory}: {e}") from e

    async def _read(self) -> str | None:
        return await asyncio.to_thread(self._read_sync)

    async def _write(self, value: str) -> None:
        await asyncio.to_thread(self._write_sync, value)

    async def _remove(self) -> None:
        await asyncio.to_thread(self._remove_sync)

    def _read_sync(self) -> str | None:
        try:
            return self.file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise SessionStoreError(f"Cannot read {self.file_path}: {e}") from e

    def _write_sync(self, value: str) -> None:
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory, prefix=f".{self._key}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, self.file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise SessionStoreError(f"Cannot write {self.file_path}: {e}") from e

    def _remove_sync(self) -> None:
        try:
            self.file_path.unlink(missing_ok=True)
        except OSError as e:
            raise SessionStoreError(f"Cannot remove {self.file_path}: {e}") from e

    @property
    def backend_type(self) -> str:
        return "file"

    @property
    def directory(self) -> Path:
        return self._directory
