"""Routes stdlib logging records into the TUI log panel.

Records may come from any thread; panel writes are marshalled onto the
app's thread.
"""

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from textual.app import App

    from .widgets import LogPanel


class PanelLogHandler(logging.Handler):
    """Logging handler that writes records to a ``LogPanel``."""

    def __init__(self, panel: "LogPanel", app: "App", level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.panel = panel
        self.app = app

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            component = record.name.rsplit(".", 1)[-1]
            if self.app._thread_id != threading.get_ident():
                self.app.call_from_thread(self.panel.log_record, component, message, record.levelno)
            else:
                self.panel.log_record(component, message, record.levelno)
        except Exception:
            self.handleError(record)
