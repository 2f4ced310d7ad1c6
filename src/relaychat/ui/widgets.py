"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Message rendering keyed by message id
- Input bar submit and busy handling
- Error banner and log panel rendering
"""

from datetime import datetime

from rich.markdown import Markdown as RichMarkdown
from rich.text import Text
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message as TextualMessage
from textual.widgets import Button, RichLog, Static, TextArea

from ..client import Message, Role
from .config import (
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    STARTER_PROMPTS,
    THINKING_TEXT,
    LogLevel,
)


class MessageView(Vertical):
    """One rendered chat message. Clicking it copies the raw content."""

    def __init__(self, message: Message, *args, **kwargs) -> None:
        role_class = "user-message" if message.role is Role.USER else "assistant-message"
        super().__init__(*args, classes=f"chat-message {role_class}", **kwargs)
        self._role = message.role
        self._content = ""
        icon, prefix = (">", "You") if message.role is Role.USER else ("<", "Assistant")
        timestamp = message.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)
        self._header = Static(f"{icon} {prefix} [{timestamp}]", classes="message-header", markup=False)
        self._body = Static("", classes="message-content")

    def compose(self):
        yield self._header
        yield self._body

    def set_content(self, content: str, is_loading: bool) -> None:
        """Render new content. An empty reply shows a thinking hint while loading."""
        pending = not content and self._role is Role.ASSISTANT
        self.set_class(pending, "pending")
        if content == self._content and not pending:
            return
        self._content = content
        if pending:
            self._body.update(THINKING_TEXT if is_loading else "")
        elif self._role is Role.USER:
            self._body.update(Text(content))
        else:
            self._body.update(RichMarkdown(content))

    def on_click(self, event: Click) -> None:
        """Copy message content to clipboard when clicked."""
        event.stop()
        if self._content:
            self.app.copy_to_clipboard(self._content)
            self.app.notify("Copied to clipboard", timeout=2)


class StarterPrompts(Vertical):
    """Suggested first prompts, shown while the conversation is empty."""

    class Selected(TextualMessage):
        """Message sent when a suggested prompt is picked."""

        def __init__(self, prompt: str) -> None:
            super().__init__()
            self.prompt = prompt

    def compose(self):
        yield Static("Start a conversation: send a message or pick a suggestion.", markup=False)
        for index, (label, _prompt) in enumerate(STARTER_PROMPTS):
            yield Button(label, id=f"starter-{index}", variant="default")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        index = int((event.button.id or "starter-0").rsplit("-", 1)[1])
        self.post_message(self.Selected(STARTER_PROMPTS[index][1]))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable conversation kept in step with the controller's messages."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._views: dict[str, MessageView] = {}
        self._order: list[str] = []

    def compose(self):
        yield StarterPrompts(id="starter-prompts")

    def sync(self, messages: list[Message], is_loading: bool) -> None:
        """Bring the rendered messages in line with ``messages``.

        New ids are mounted, known ids are updated in place; if any rendered
        message disappeared, everything is rebuilt.
        """
        ids = [message.id for message in messages]
        if self._order != ids[:len(self._order)]:
            self._reset()

        for message in messages:
            view = self._views.get(message.id)
            if view is None:
                view = MessageView(message)
                self._views[message.id] = view
                self._order.append(message.id)
                self.mount(view)
            view.set_content(message.content, is_loading)

        self.query_one("#starter-prompts", StarterPrompts).display = not messages
        self.set_class(is_loading, "loading")
        self.border_subtitle = f"{len(messages)} messages" if messages else "Conversation history"
        if messages:
            self.scroll_end(animate=False)

    def _reset(self) -> None:
        for view in self._views.values():
            view.remove()
        self._views.clear()
        self._order.clear()


class ErrorBanner(Static):
    """Shows the last send error, hidden when there is none."""

    BORDER_TITLE = "Error"

    def on_mount(self) -> None:
        self.display = False

    def show_error(self, error: str | None) -> None:
        if error:
            self.update(Text(error))
            self.display = True
        else:
            self.update("")
            self.display = False


class ChatInputBar(Horizontal):
    """Chat input bar with TextArea and Send button."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class Edited(TextualMessage):
        """Message sent when the input text changes."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def __init__(self, *args, placeholder: str = "", **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._placeholder = placeholder

    def compose(self):
        text_area = TextArea(id="chat-input", show_line_numbers=False, placeholder=self._placeholder)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Ctrl+J)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", TextArea)
        text_area.highlight_cursor_line = False
        self._update_button()

    @property
    def text(self) -> str:
        return self.query_one("#chat-input", TextArea).text

    @text.setter
    def text(self, value: str) -> None:
        self.query_one("#chat-input", TextArea).text = value

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        self._update_button()
        self.post_message(self.Edited(event.text_area.text))

    def on_key(self, event) -> None:
        """Handle keyboard shortcuts.

        Note: ctrl+enter cannot work in terminals (terminal doesn't pass
        ctrl/shift modifiers with Enter). Use ctrl+j as the submit shortcut.
        """
        if event.key == "ctrl+j":
            self._submit()
            event.prevent_default()
            event.stop()

    def set_busy(self, busy: bool) -> None:
        """Disable editing while a request is in flight."""
        self.query_one("#chat-input", TextArea).read_only = busy
        self._update_button(busy)

    def _update_button(self, busy: bool = False) -> None:
        button = self.query_one("#send-btn", Button)
        button.disabled = busy or not self.text.strip()

    def _submit(self) -> None:
        value = self.text
        if value.strip():
            self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", TextArea).focus()


class LogPanel(RichLog):
    """Log panel showing records from the ``relaychat`` loggers.

    Hidden by default, shown with --log-level or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *args, log_level: int = LogLevel.INFO, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def log_record(self, component: str, message: str, level: int) -> None:
        """Add a log entry if it meets the current level threshold."""
        if level < self._log_level:
            return

        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        line = Text()
        line.append(datetime.now().strftime(LOG_TIMESTAMP_FORMAT) + " ", style="dim")
        line.append(f"{LogLevel.name(level):<7} ", style=level_colors.get(level, "bold red"))
        line.append(f"[{component}] ", style="magenta")
        line.append(message)
        self.write(line)

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
        else:
            self.show()
        return bool(self.display)
