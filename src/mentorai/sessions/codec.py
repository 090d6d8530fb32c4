"""Serialization of the session collection.

Hides the storage format. Every backend stores the exact bytes produced
here, so encoding is deterministic: the same collection always encodes to
the same text, and ``encode(decode(text)) == text`` for any text this module
produced.
"""

from pydantic import TypeAdapter, ValidationError

from .models import ChatSession

_COLLECTION = TypeAdapter(list[ChatSession])


class CorruptSessionData(ValueError):
    """Stored text could not be decoded into a session collection."""


def encode_sessions(sessions: list[ChatSession]) -> str:
    """Encode a collection as compact JSON text.

    Args:
        sessions: Sessions, newest first

    Returns:
        JSON array text using the stored (camelCase) field names
    """
    return _COLLECTION.dump_json(list(sessions), by_alias=True).decode("utf-8")


def decode_sessions(raw: str | bytes) -> list[ChatSession]:
    """Decode stored text into a collection.

    Args:
        raw: JSON array text

    Returns:
        Sessions in stored order

    Raises:
        CorruptSessionData: If the text is not valid JSON or does not match
            the session schema, or if two sessions share an id
    """
    try:
        sessions = _COLLECTION.validate_json(raw)
    except ValidationError as e:
        raise CorruptSessionData(str(e)) from e

    seen: set[str] = set()
    for session in sessions:
        if session.id in seen:
            raise CorruptSessionData(f"Duplicate session id: {session.id}")
        seen.add(session.id)
    return sessions
