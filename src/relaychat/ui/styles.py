"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Single column: conversation on top, error banner and log panel below it,
input bar and disclaimer docked at the bottom.
"""

APP_CSS = """
Screen {
    layout: vertical;
}

#chat-history {
    height: 1fr;
    border: heavy $accent 50%;
    border-title-color: $accent;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;

    &.loading {
        border: heavy $warning 70%;
    }
}

#starter-prompts {
    height: auto;
    padding: 1 4;

    & Static {
        color: $text-muted;
        margin-bottom: 1;
    }

    & Button {
        width: 100%;
        margin-bottom: 1;
    }
}

.chat-message {
    height: auto;
    margin-bottom: 1;
    padding: 0 1;
}

.message-header {
    text-style: bold;
}

.user-message {
    margin-left: 8;
    border-right: outer $success;

    & .message-header {
        color: $success;
        text-align: right;
    }

    & .message-content {
        text-align: right;
    }
}

.assistant-message {
    margin-right: 8;
    border-left: outer $accent;

    & .message-header {
        color: $accent;
    }
}

.assistant-message.pending .message-content {
    color: $text-muted;
    text-style: italic;
}

#error-banner {
    height: auto;
    padding: 0 1;
    border: heavy $error;
    border-title-color: $error;
    color: $error;
}

#log-panel {
    height: 10;
    border: heavy $warning 50%;
    border-title-color: $warning;
    border-subtitle-align: right;
}

ChatInputBar {
    height: 5;
    border: heavy $accent 50%;

    &:focus-within {
        border: heavy $accent;
    }
}

#chat-input {
    width: 1fr;
    border: none;
}

#send-btn {
    width: 10;
    height: 100%;

    &:disabled {
        color: $text-muted;
    }
}

#disclaimer {
    height: 1;
    width: 100%;
    content-align: center middle;
    color: $text-muted;
    text-style: italic;
}
"""
