"""Exception hierarchy for mentorai.

Persistence and completion failures are recoverable by design of the
callers: the repository and controller catch these at fixed points and
turn them into notices. Nothing here is meant to reach the top level.
"""


class MentorAIError(Exception):
    """Base class for all mentorai errors."""


class SessionStoreError(MentorAIError):
    """The session store could not be read or written."""


class CompletionError(MentorAIError):
    """The AI completion request did not produce a reply."""


class RequestFailed(CompletionError):
    """The completion endpoint answered, but not with a usable reply.

    Raised for non-success HTTP statuses, for a body that carries a
    provider-side ``error`` and for a body without a ``response`` text.
    """

    def __init__(self, status_code: int, reason: str, detail: str | None = None):
        self.status_code = status_code
        self.reason = reason
        self.detail = detail
        message = f"Completion request failed: {status_code} {reason}".rstrip()
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class TransportError(CompletionError):
    """No response was received from the completion endpoint."""
