"""UI configuration constants.

Formats, timeouts and the log level scale used by the log panel.
"""

from enum import IntEnum


class LogLevel(IntEnum):
    """Log panel threshold; higher values are less verbose.

    Debug callbacks pass levels as lowercase strings ("debug", "info",
    "warning", "error"); ``from_string`` maps them onto this scale.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """Parse a level name; unknown names map to DEBUG."""
        try:
            return cls[level_str.strip().upper()]
        except KeyError:
            return cls.DEBUG


# Thought list configuration
THOUGHT_TIME_FORMAT = "%a %d %b %Y, %H:%M"

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

# Notification timeouts (seconds)
NOTIFY_SHORT = 2
NOTIFY_LONG = 4
