"""UI configuration constants.

Centralizes magic numbers and texts for the UI module.
"""

import logging


class LogLevel:
    """Log level constants shared with the stdlib ``logging`` module.

    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return logging.getLevelName(level)

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Chat display
MESSAGE_TIMESTAMP_FORMAT = "%H:%M:%S"
THINKING_TEXT = "Thinking..."
INPUT_PLACEHOLDER = "Type your message..."
DISCLAIMER_TEXT = "The assistant can make mistakes. Check important information."

# Starter prompts offered on an empty conversation
STARTER_PROMPTS = (
    ("Explain JavaScript promises", "Explain how promises work in JavaScript"),
    ("Find palindromes in Python", "Write a Python function that finds the longest palindrome in a string"),
    ("Compare React and Vue.js", "Compare the React and Vue.js frameworks"),
    ("Explain recursion", "Explain the concept of recursion with examples"),
)
