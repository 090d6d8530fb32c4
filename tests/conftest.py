"""Pytest configuration and shared fixtures."""
import asyncio

import pytest

from mentorai.chat import ConversationController
from mentorai.completion import CompletionClient
from mentorai.sessions import SessionRepository
from mentorai.sessions.in_memory import InMemorySessionStore


class ScriptedCompletionClient(CompletionClient):
    """Completion client that replays scripted replies or errors.

    Each call pops the next item: a string is returned, an exception is
    raised. When ``gate`` is set, every call waits on it first so tests can
    act while a request is in flight.
    """

    def __init__(self, *script: str | Exception, gate: asyncio.Event | None = None):
        self.script = list(script)
        self.gate = gate
        self.calls: list[str] = []
        self.started = asyncio.Event()
        self.closed = False

    async def complete(self, message: str) -> str:
        self.calls.append(message)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        item = self.script.pop(0) if self.script else "ok"
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def storage_data():
    """Backing dict shared by in-memory stores, to simulate restarts."""
    return {}


@pytest.fixture
def memory_store(storage_data):
    return InMemorySessionStore(data=storage_data)


@pytest.fixture
def notices():
    """List collecting notices emitted during a test."""
    return []


@pytest.fixture
def debug_log():
    """List collecting (level, component, message) diagnostics."""
    return []


@pytest.fixture
def repository(memory_store, notices, debug_log):
    repo = SessionRepository(memory_store, on_notice=notices.append)
    repo.set_debug_callback(lambda level, component, message: debug_log.append((level, component, message)))
    return repo


@pytest.fixture
def make_controller(repository, notices):
    """Build a controller over the shared repository with a scripted client."""
    def _make(*script: str | Exception, gate: asyncio.Event | None = None):
        client = ScriptedCompletionClient(*script, gate=gate)
        return ConversationController(repository, client, on_notice=notices.append), client
    return _make
