"""Tests for the command-line interface."""
import asyncio

import pytest
from rich.console import Console
from typer.testing import CliRunner

from mentorai.cli import app as cli_app
from mentorai.sessions.file import FileSessionStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at a temporary file store and a wide console."""
    monkeypatch.setenv("MENTORAI_STORE", "file")
    monkeypatch.setenv("MENTORAI_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("MENTORAI_STORAGE_KEY", raising=False)
    monkeypatch.delenv("MENTORAI_COMPLETION_PROVIDER", raising=False)
    monkeypatch.delenv("MENTORAI_CHAT_URL", raising=False)
    monkeypatch.delenv("MENTORAI_API_KEY", raising=False)
    monkeypatch.setattr(cli_app, "console", Console(width=200))
    return tmp_path


def stored_sessions(directory):
    return asyncio.run(FileSessionStore(path=directory).load())


def ask(*args):
    return runner.invoke(cli_app.app, ["ask", "--offline", *args])


class TestAsk:
    """Tests for the ask command."""

    def test_offline_ask_creates_session(self, cli_env):
        result = ask("Hello")

        assert result.exit_code == 0, result.output
        assert "You said: Hello" in result.output
        sessions = stored_sessions(cli_env)
        assert len(sessions) == 1
        assert [m.content for m in sessions[0].messages] == ["Hello", "You said: Hello"]
        assert f"Session: {sessions[0].id}" in result.output

    def test_ask_without_session_starts_new_one(self, cli_env):
        ask("one")
        ask("two")

        assert len(stored_sessions(cli_env)) == 2

    def test_ask_into_existing_session(self, cli_env):
        ask("one")
        session_id = stored_sessions(cli_env)[0].id

        result = ask("two", "--session", session_id)

        assert result.exit_code == 0, result.output
        sessions = stored_sessions(cli_env)
        assert len(sessions) == 1
        assert len(sessions[0].messages) == 4

    def test_ask_unknown_session_fails(self):
        result = ask("hi", "--session", "nope")

        assert result.exit_code == 1
        assert "No session with id nope" in result.output

    def test_blank_message_fails(self, cli_env):
        result = ask("   ")

        assert result.exit_code == 1
        assert stored_sessions(cli_env) == []

    def test_missing_credentials_exit_with_error(self):
        result = runner.invoke(cli_app.app, ["ask", "Hello"])

        assert result.exit_code == 1
        assert "MENTORAI_CHAT_URL" in result.output

    @pytest.mark.parametrize("backend", ["file", "sqlite"])
    def test_unopenable_data_dir_is_not_fatal(self, cli_env, backend):
        blocker = cli_env / "blocker"
        blocker.write_text("not a directory")

        result = ask("Hello", "--store", backend, "--data-dir", str(blocker / "sub"))

        assert result.exit_code == 0, result.output
        assert "You said: Hello" in result.output
        assert "Could not load your previous chat sessions." in result.output
        assert "Could not save your chat sessions." in result.output

    def test_sessions_with_unopenable_data_dir(self, cli_env):
        blocker = cli_env / "blocker"
        blocker.write_text("not a directory")

        result = runner.invoke(cli_app.app, ["sessions", "--data-dir", str(blocker / "sub")])

        assert result.exit_code == 0
        assert "No chat sessions yet" in result.output

    def test_undecodable_argument_is_saved(self, cli_env):
        result = ask("bad \udcff byte")

        assert result.exit_code == 0, result.output
        sessions = stored_sessions(cli_env)
        assert len(sessions[0].messages) == 2
        assert "\udcff" not in sessions[0].messages[0].content

    def test_sqlite_store(self, cli_env):
        result = ask("Hello", "--store", "sqlite")

        assert result.exit_code == 0, result.output
        assert (cli_env / "sessions.db").exists()
        listing = runner.invoke(cli_app.app, ["sessions", "--store", "sqlite"])
        assert "New Chat" in listing.output


class TestSessionCommands:
    """Tests for sessions/show/rename/delete/clear."""

    def test_sessions_empty(self):
        result = runner.invoke(cli_app.app, ["sessions"])

        assert result.exit_code == 0
        assert "No chat sessions yet" in result.output

    def test_sessions_lists_newest_first(self, cli_env):
        ask("first")
        ask("second")
        newer, older = stored_sessions(cli_env)

        result = runner.invoke(cli_app.app, ["sessions"])

        assert result.exit_code == 0
        assert result.output.index(newer.id) < result.output.index(older.id)

    def test_show_transcript(self, cli_env):
        ask("What is 2+2?")
        session_id = stored_sessions(cli_env)[0].id

        result = runner.invoke(cli_app.app, ["show", session_id])

        assert result.exit_code == 0
        assert "What is 2+2?" in result.output
        assert "Tutor:" in result.output

    def test_show_unknown(self):
        result = runner.invoke(cli_app.app, ["show", "nope"])

        assert result.exit_code == 1

    def test_rename(self, cli_env):
        ask("hi")
        session_id = stored_sessions(cli_env)[0].id

        result = runner.invoke(cli_app.app, ["rename", session_id, "Fractions"])

        assert result.exit_code == 0
        assert stored_sessions(cli_env)[0].title == "Fractions"

    def test_delete(self, cli_env):
        ask("one")
        ask("two")
        newer, older = stored_sessions(cli_env)

        result = runner.invoke(cli_app.app, ["delete", newer.id])

        assert result.exit_code == 0
        assert [s.id for s in stored_sessions(cli_env)] == [older.id]

    def test_delete_unknown_is_not_an_error(self):
        result = runner.invoke(cli_app.app, ["delete", "nope"])

        assert result.exit_code == 0
        assert "No session with id nope" in result.output

    def test_clear_with_yes_removes_file(self, cli_env):
        ask("one")
        ask("two")

        result = runner.invoke(cli_app.app, ["clear", "--yes"])

        assert result.exit_code == 0
        assert "2 deleted" in result.output
        assert not (cli_env / "mentorai_sessions.json").exists()

    def test_clear_declined_keeps_sessions(self, cli_env):
        ask("one")

        result = runner.invoke(cli_app.app, ["clear"], input="n\n")

        assert result.exit_code == 0
        assert "Aborted" in result.output
        assert len(stored_sessions(cli_env)) == 1

    def test_corrupt_store_warns_and_lists_nothing(self, cli_env):
        (cli_env / "mentorai_sessions.json").write_text("{broken")

        result = runner.invoke(cli_app.app, ["sessions"])

        assert result.exit_code == 0
        assert "Could not load your previous chat sessions." in result.output
        assert (cli_env / "mentorai_sessions.json").read_text() == "{broken"
