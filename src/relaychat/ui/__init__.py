"""Terminal UI module for relaychat.

Provides a Textual-based TUI bound to the conversation controller.

Module structure (each module hides a design decision):
- config.py: Constants and texts
- widgets.py: Chat history, input bar, error banner, log panel
- styles.py: CSS styling (layout decisions)
- log_handler.py: How logging records reach the log panel
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatApp, run_chat_tui
from .config import LogLevel
from .log_handler import PanelLogHandler
from .widgets import ChatHistoryWidget, ChatInputBar, ErrorBanner, LogPanel

__all__ = [
    "ChatApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "ErrorBanner",
    "LogLevel",
    "LogPanel",
    "PanelLogHandler",
    "run_chat_tui",
]
