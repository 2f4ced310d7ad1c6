"""
relaychat: a chat front-end and completion proxy for hosted language models.

Each sub-package hides one design decision:
- llm: which upstream chat-completion service answers
- protocol: the wire format between controller and proxy
- proxy: the availability policy of POST /api/chat
- client: conversation state and response ingestion
- ui / cli: how a person drives the conversation
"""

__version__ = "0.1.0"

from .client import ConversationController, ConversationState, Message, Role, SendPhase
from .proxy import ChatProxy, ProxySettings, create_app

__all__ = [
    "ChatProxy",
    "ConversationController",
    "ConversationState",
    "Message",
    "ProxySettings",
    "Role",
    "SendPhase",
    "create_app",
]
