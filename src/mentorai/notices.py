"""User-facing notices.

Hides how non-fatal problems and confirmations are reported. The core only
builds a Notice and hands it to a callback; the TUI turns it into a toast,
the CLI prints it.
"""

from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["information", "warning", "error"]


class Notice(BaseModel):
    """A short message meant for the user, not for the log."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Short heading, e.g. 'Chat Deleted'")
    description: str = Field(default="", description="One sentence of detail")
    severity: Severity = Field(default="information")


NoticeCallback = Callable[[Notice], None]

# Debug callback signature shared by every component:
# callback(level, component, message) with level in debug/info/warning/error
DebugCallback = Callable[[str, str, str], None]
