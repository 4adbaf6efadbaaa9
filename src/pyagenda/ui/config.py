"""UI configuration constants.

Centralizes display text, limits and log levels for the UI module.
"""

import logging
from enum import IntEnum


class LogLevel(IntEnum):
    """Log panel levels, ordered like the standard logging levels.

    A lower value is more verbose: a panel at INFO hides DEBUG entries.
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    @classmethod
    def from_string(cls, level_str: str) -> "LogLevel":
        """Parse a level name; unknown names mean DEBUG."""
        return cls.__members__.get(level_str.upper(), cls.DEBUG)


# Rows from the bottom of the message list still counted as "at the bottom"
NEAR_BOTTOM_THRESHOLD = 3

INPUT_HISTORY_MAX_SIZE = 100

LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_LEVEL_STYLES = {
    LogLevel.DEBUG: "dim",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}

APP_TITLE = "Assistant - Task & Goal Management"
INPUT_PLACEHOLDER = "Ask about your goals or tasks..."
TYPING_INDICATOR_TEXT = "Assistant is typing..."
JUMP_TO_BOTTOM_LABEL = "↓ Scroll to bottom"
