"""Unit tests for the session store backends."""
import pytest

from mentorai.errors import SessionStoreError
from mentorai.sessions import ChatSession, Message, SessionStore, create_session_store
from mentorai.sessions.file import FileSessionStore
from mentorai.sessions.in_memory import InMemorySessionStore
from mentorai.sessions.sqlite import SQLiteSessionStore


def _collection() -> list[ChatSession]:
    newer = ChatSession(title="Physics")
    newer.add_message(Message.user("What is inertia?"))
    newer.add_message(Message.assistant("Resistance to changes in motion."))
    older = ChatSession(title="Algebra")
    return [newer, older]


@pytest.fixture(params=["memory", "file", "sqlite"])
def any_store(request, tmp_path) -> SessionStore:
    if request.param == "memory":
        return InMemorySessionStore()
    if request.param == "file":
        return FileSessionStore(path=tmp_path / "data")
    return SQLiteSessionStore(path=tmp_path / "sessions.db")


class TestSessionStoreInterface:
    """Tests for SessionStore interface."""

    def test_session_store_is_abstract(self):
        with pytest.raises(TypeError):
            SessionStore()  # type: ignore


class TestStoreBackends:
    """Behaviour every backend shares."""

    @pytest.mark.asyncio
    async def test_absent_key_loads_empty(self, any_store):
        async with any_store:
            assert await any_store.load() == []
            assert any_store.last_load_error is None

    @pytest.mark.asyncio
    async def test_save_then_load_preserves_order_and_messages(self, any_store):
        sessions = _collection()

        async with any_store:
            await any_store.save(sessions)
            loaded = await any_store.load()

        assert [s.id for s in loaded] == [s.id for s in sessions]
        assert loaded[0].messages == sessions[0].messages

    @pytest.mark.asyncio
    async def test_save_of_load_is_byte_identical(self, any_store):
        async with any_store:
            await any_store.save(_collection())
            before = await any_store.read_raw()

            await any_store.save(await any_store.load())
            after = await any_store.read_raw()

        assert before is not None
        assert after == before

    @pytest.mark.asyncio
    async def test_empty_collection_removes_key(self, any_store):
        async with any_store:
            await any_store.save(_collection())
            await any_store.save([])

            assert await any_store.read_raw() is None
            assert await any_store.load() == []

    @pytest.mark.asyncio
    async def test_saving_empty_when_absent_is_fine(self, any_store):
        async with any_store:
            await any_store.save([])
            assert await any_store.read_raw() is None


class TestCorruption:
    """Tests for corrupt stored values."""

    @pytest.mark.asyncio
    async def test_corrupt_value_loads_empty_and_is_left_untouched(self):
        store = InMemorySessionStore(data={"mentorai_sessions": "{not json"})

        assert await store.load() == []
        assert store.last_load_error is not None
        assert store.data["mentorai_sessions"] == "{not json"

    @pytest.mark.asyncio
    async def test_error_flag_resets_on_next_good_load(self):
        data = {"mentorai_sessions": "garbage"}
        store = InMemorySessionStore(data=data)
        await store.load()

        await store.save(_collection())
        await store.load()

        assert store.last_load_error is None

    @pytest.mark.asyncio
    async def test_corrupt_file_loads_empty(self, tmp_path):
        store = FileSessionStore(path=tmp_path)
        await store.connect()
        store.file_path.write_text("[{]", encoding="utf-8")

        assert await store.load() == []
        assert store.file_path.read_text(encoding="utf-8") == "[{]"


class TestUnencodableCollection:
    """Collections that cannot be serialized."""

    @pytest.mark.asyncio
    async def test_save_raises_store_error_and_keeps_previous_value(self):
        store = InMemorySessionStore()
        await store.save(_collection())
        before = store.data["mentorai_sessions"]
        # model_construct skips validation, so the surrogate survives
        session = ChatSession(title="Broken")
        session.messages.append(Message.model_construct(id="m1", role="user", content="\udcff"))

        with pytest.raises(SessionStoreError):
            await store.save([session])

        assert store.data["mentorai_sessions"] == before


class TestFileStore:
    """Tests specific to the JSON file backend."""

    @pytest.mark.asyncio
    async def test_one_file_per_key(self, tmp_path):
        store = FileSessionStore(path=tmp_path, key="tutor")
        await store.connect()
        await store.save(_collection())

        assert store.file_path == tmp_path / "tutor.json"
        assert store.file_path.exists()
        assert [p.name for p in tmp_path.iterdir()] == ["tutor.json"]

    @pytest.mark.asyncio
    async def test_unwritable_directory_raises_store_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        store = FileSessionStore(path=blocker / "data")

        with pytest.raises(SessionStoreError):
            await store.save(_collection())


class TestSQLiteStore:
    """Tests specific to the SQLite backend."""

    @pytest.mark.asyncio
    async def test_unconnected_store_raises_store_error(self, tmp_path):
        store = SQLiteSessionStore(path=tmp_path / "s.db")

        with pytest.raises(SessionStoreError):
            await store.load()

    @pytest.mark.asyncio
    async def test_persists_across_connections(self, tmp_path):
        path = tmp_path / "s.db"
        sessions = _collection()

        async with SQLiteSessionStore(path=path) as store:
            await store.save(sessions)

        async with SQLiteSessionStore(path=path) as store:
            loaded = await store.load()

        assert [s.title for s in loaded] == ["Physics", "Algebra"]


class TestStoreFactory:
    """Tests for session store factory."""

    @pytest.mark.parametrize("backend,cls", [
        ("memory", InMemorySessionStore),
        ("file", FileSessionStore),
        ("sqlite", SQLiteSessionStore),
    ])
    def test_create_backend(self, backend, cls, tmp_path):
        kwargs = {} if backend == "memory" else {"path": tmp_path / "x"}
        store = create_session_store(backend, **kwargs)

        assert isinstance(store, cls)
        assert store.backend_type == backend
        assert store.key == "mentorai_sessions"

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_session_store("redis")
