"""Main Textual TUI application.

Binds the conversation controller to the widgets: controller updates
re-render the chat, widget events drive send and clear.
"""

import asyncio
import contextlib
import logging

import httpx
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from ..client import ConversationController, ConversationState
from ..client.config import DEFAULT_MODEL, REQUEST_TIMEOUT_SECONDS
from .config import DISCLAIMER_TEXT, INPUT_PLACEHOLDER, LogLevel
from .log_handler import PanelLogHandler
from .styles import APP_CSS
from .widgets import ChatHistoryWidget, ChatInputBar, ErrorBanner, LogPanel, StarterPrompts

logger = logging.getLogger(__name__)


class ChatApp(App):
    """Textual TUI for chatting through the completion proxy."""

    CSS = APP_CSS
    TITLE = "AI Assistant"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_log", "Log", priority=True),
    ]

    def __init__(
        self,
        controller: ConversationController,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._log_level = log_level
        self._log_handler: PanelLogHandler | None = None
        self._previous_log_level: int | None = None

    @property
    def controller(self) -> ConversationController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield ErrorBanner(id="error-banner")
        yield LogPanel(id="log-panel")
        yield ChatInputBar(id="chat-input-bar", placeholder=INPUT_PLACEHOLDER)
        yield Static(DISCLAIMER_TEXT, id="disclaimer", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.theme = "catppuccin-mocha"
        self.sub_title = f"model: {self._controller.model}"

        log_panel = self.query_one("#log-panel", LogPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
        self._log_handler = PanelLogHandler(log_panel, self)
        package_logger = logging.getLogger("relaychat")
        package_logger.addHandler(self._log_handler)
        self._previous_log_level = package_logger.level
        package_logger.setLevel(LogLevel.DEBUG)
        logger.info("Chat UI started with model %s", self._controller.model)

        self._controller.set_update_callback(self._render_state)
        self._controller.set_focus_callback(self._focus_input)
        self._render_state(self._controller.state)
        self._focus_input()

    def on_unmount(self) -> None:
        self.detach()

    def detach(self) -> None:
        """Detach from the controller and the loggers. Safe to call twice."""
        self._controller.set_update_callback(None)
        self._controller.set_focus_callback(None)
        package_logger = logging.getLogger("relaychat")
        if self._log_handler is not None:
            package_logger.removeHandler(self._log_handler)
            self._log_handler = None
        if self._previous_log_level is not None:
            package_logger.setLevel(self._previous_log_level)
            self._previous_log_level = None

    def _render_state(self, state: ConversationState) -> None:
        """Re-render everything the controller state drives."""
        self.query_one("#chat-history", ChatHistoryWidget).sync(state.messages, state.is_loading)
        self.query_one("#error-banner", ErrorBanner).show_error(state.last_error)

        input_bar = self.query_one("#chat-input-bar", ChatInputBar)
        if input_bar.text != state.draft:
            input_bar.text = state.draft
        input_bar.set_busy(state.is_loading)

    def _focus_input(self) -> None:
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_chat_input_bar_edited(self, event: ChatInputBar.Edited) -> None:
        self._controller.draft = event.value

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        self._controller.draft = event.value
        self._send()

    def on_starter_prompts_selected(self, event: StarterPrompts.Selected) -> None:
        """Put a suggested prompt into the input field."""
        self.query_one("#chat-input-bar", ChatInputBar).text = event.prompt
        self._focus_input()

    @work(group="send")
    async def _send(self) -> None:
        """Run one send as a background async worker."""
        await self._controller.send()

    def action_clear_chat(self) -> None:
        """Clear the conversation."""
        self._controller.clear()
        self.notify("Chat cleared", timeout=2)

    def action_toggle_log(self) -> None:
        """Toggle the log panel visibility."""
        is_visible = self.query_one("#log-panel", LogPanel).toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        response = self._controller.state.last_assistant_content()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_chat_tui(
    base_url: str,
    model: str = DEFAULT_MODEL,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI against a running proxy.

    Args:
        base_url: Base URL of the proxy, e.g. http://localhost:8000
        model: Logical model name to request
        timeout: Per-send deadline in seconds
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    async with httpx.AsyncClient(base_url=base_url) as client:
        controller = ConversationController(client, model=model, timeout=timeout)
        app = ChatApp(controller, log_level=log_level)
        try:
            with contextlib.suppress(KeyboardInterrupt, asyncio.CancelledError):
                await app.run_async()
        finally:
            app.detach()
