"""Conversation controller: the client side of ``POST /api/chat``.

Module structure:
- config.py: timeouts, defaults and user-facing texts
- errors.py: failures a send can end in
- state.py: messages, conversation state and the send lifecycle
- controller.py: send/clear and dual-mode response ingestion
"""

from .controller import ConversationController
from .errors import (
    ChatClientError,
    ConnectionFailedError,
    RequestTimeoutError,
    ResponseFormatError,
    ServerError,
    StreamError,
    UpstreamReportedError,
)
from .state import ConversationState, InvalidTransitionError, Message, Role, SendPhase

__all__ = [
    "ChatClientError",
    "ConnectionFailedError",
    "ConversationController",
    "ConversationState",
    "InvalidTransitionError",
    "Message",
    "RequestTimeoutError",
    "ResponseFormatError",
    "Role",
    "SendPhase",
    "ServerError",
    "StreamError",
    "UpstreamReportedError",
]
