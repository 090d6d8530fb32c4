"""Unit tests for the session models and codec."""
from datetime import datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mentorai.sessions import DEFAULT_TITLE, ChatSession, Message, Role
from mentorai.sessions.codec import CorruptSessionData, decode_sessions, encode_sessions

# Lone surrogates cannot be encoded as UTF-8
_TEXT = st.characters(blacklist_categories=("Cs",))


class TestMessage:
    """Tests for Message model."""

    def test_user_and_assistant_constructors(self):
        user = Message.user("Hello")
        assistant = Message.assistant("Hi there")

        assert user.role == "user"
        assert user.role == Role.USER
        assert assistant.role == "assistant"
        assert user.content == "Hello"

    def test_message_is_immutable(self):
        message = Message.user("Hello")

        with pytest.raises(ValueError):
            message.content = "changed"  # type: ignore[misc]

    def test_identical_content_never_compares_equal(self):
        assert Message.user("same") != Message.user("same")

    def test_ids_are_unique(self):
        ids = {Message.user("x").id for _ in range(1000)}
        assert len(ids) == 1000

    def test_invalid_role_rejected(self):
        with pytest.raises(ValueError):
            Message(role="system", content="nope")

    def test_lone_surrogates_replaced(self):
        message = Message.user("caf\udce9 \ud800")

        assert "\udce9" not in message.content
        assert "\ud800" not in message.content
        assert message.content.startswith("caf")
        message.content.encode("utf-8")

    def test_valid_text_unchanged(self):
        text = "naïve 数学 🧮"
        assert Message.user(text).content == text


class TestChatSession:
    """Tests for ChatSession model."""

    def test_defaults(self):
        session = ChatSession()

        assert session.title == DEFAULT_TITLE == "New Chat"
        assert session.messages == []
        assert session.created_at.endswith("Z")
        assert isinstance(session.created, datetime)

    def test_add_message_appends_in_order(self):
        session = ChatSession()
        first, second = Message.user("a"), Message.assistant("b")

        session.add_message(first)
        session.add_message(second)

        assert session.messages == [first, second]
        assert session.last_message is second

    def test_title_cleaned_on_assignment(self):
        session = ChatSession()

        session.title = "Alg\udcffebra"

        assert "\udcff" not in session.title
        encode_sessions([session])

    def test_created_at_must_be_iso_8601(self):
        with pytest.raises(ValueError):
            ChatSession(created_at="yesterday")

    def test_accepts_camel_case_alias(self):
        session = ChatSession.model_validate(
            {"id": "abc", "title": "Algebra", "createdAt": "2024-05-01T10:00:00.000Z", "messages": []}
        )
        assert session.created_at == "2024-05-01T10:00:00.000Z"


class TestCodec:
    """Tests for the stored JSON format."""

    def test_encoding_uses_stored_field_names(self):
        session = ChatSession(id="s1", created_at="2024-05-01T10:00:00.000Z")
        session.add_message(Message(id="m1", role="user", content="Hello"))

        text = encode_sessions([session])

        assert text == (
            '[{"id":"s1","title":"New Chat","createdAt":"2024-05-01T10:00:00.000Z",'
            '"messages":[{"id":"m1","role":"user","content":"Hello"}]}]'
        )

    def test_decodes_text_written_by_web_client(self):
        raw = (
            '[{"id":"lz3k9a1b2c","title":"New Chat","createdAt":"2024-05-01T10:00:00.123Z",'
            '"messages":[{"id":"lz3k9a1b2d","role":"user","content":"What is 2+2?"},'
            '{"id":"lz3k9a1b2e","role":"assistant","content":"4"}]}]'
        )

        sessions = decode_sessions(raw)

        assert len(sessions) == 1
        assert [m.content for m in sessions[0].messages] == ["What is 2+2?", "4"]
        assert encode_sessions(sessions) == raw

    @pytest.mark.parametrize("raw", [
        "not json",
        "{}",
        '[{"id": 1}]',
        '[{"id":"a","title":"t","createdAt":"2024-01-01T00:00:00Z","messages":[{"id":"m","role":"bot","content":""}]}]',
    ])
    def test_corrupt_text_rejected(self, raw):
        with pytest.raises(CorruptSessionData):
            decode_sessions(raw)

    def test_duplicate_session_ids_rejected(self):
        session = ChatSession(id="dup")
        raw = encode_sessions([session, session])

        with pytest.raises(CorruptSessionData):
            decode_sessions(raw)

    @given(st.lists(
        st.tuples(
            st.text(alphabet=_TEXT, max_size=30),
            st.lists(st.tuples(st.sampled_from(["user", "assistant"]), st.text(alphabet=_TEXT, max_size=50)), max_size=5),
        ),
        max_size=5,
    ))
    def test_encoding_is_stable_after_decode(self, layout):
        """Property test: re-encoding decoded text reproduces it exactly."""
        sessions = []
        for title, messages in layout:
            session = ChatSession(title=title)
            for role, content in messages:
                session.add_message(Message(role=role, content=content))
            sessions.append(session)

        text = encode_sessions(sessions)
        assert encode_sessions(decode_sessions(text)) == text
