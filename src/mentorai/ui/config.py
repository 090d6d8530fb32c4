"""UI configuration constants.

Centralizes magic numbers and user-visible strings for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Session list
SESSION_TITLE_MAX_LENGTH = 28  # Characters before truncating a title in the list

# Notices
NOTICE_TIMEOUT = 3  # Seconds a confirmation toast stays visible
ERROR_NOTICE_TIMEOUT = 5

# Composer
COMPOSER_PLACEHOLDER = "Ask your AI tutor anything..."
THINKING_TEXT = "AI is thinking..."

# Empty state
WELCOME_TITLE = "Welcome to MentorAI"
WELCOME_TEXT = (
    "Select a previous conversation or start a new one "
    "to get help from your personal AI tutor."
)

# Clear-all confirmation
CLEAR_ALL_TITLE = "Are you sure?"
CLEAR_ALL_PROMPT = (
    "This will permanently delete all your chat sessions.\n"
    "This action cannot be undone."
)

# Log panel
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages
