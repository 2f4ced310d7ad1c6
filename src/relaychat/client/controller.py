"""Conversation controller.

Owns the conversation state and drives one request/response cycle per send:
- single-flight gating through the send lifecycle
- dispatch under a deadline that cancels the transport
- branching between a buffered JSON body and an incremental event stream
- replacing a failed reply with a fallback message
"""

import asyncio
import logging
import random
from collections.abc import Callable
from contextlib import aclosing

import httpx

from ..protocol import (
    EVENT_STREAM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    ChatRequest,
    iter_frames,
)
from .config import (
    CHAT_ENDPOINT,
    DEFAULT_MODEL,
    FALLBACK_RESPONSES,
    NO_RESPONSE_TEXT,
    REQUEST_TIMEOUT_SECONDS,
    UNEXPECTED_ERROR_MESSAGE,
)
from .errors import (
    ChatClientError,
    ConnectionFailedError,
    RequestTimeoutError,
    ResponseFormatError,
    ServerError,
    StreamError,
    UpstreamReportedError,
)
from .state import ConversationState, Message, Role, SendPhase

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[ConversationState], None]
FocusCallback = Callable[[], None]


class ConversationController:
    """Drives the chat against a ``POST /api/chat`` endpoint.

    The state is mutated only by ``send`` and ``clear``. Observers learn about
    every visible change through the update callback, which receives the live
    state object.

    Example:
        async with httpx.AsyncClient(base_url="http://localhost:8000") as client:
            controller = ConversationController(client)
            controller.set_update_callback(render)
            await controller.send("Explain recursion")
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        endpoint: str = CHAT_ENDPOINT,
        model: str = DEFAULT_MODEL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            http_client: Client used for the chat request (base URL set by caller)
            endpoint: Path or URL of the chat endpoint
            model: Logical model name sent with every request
            timeout: Deadline in seconds for request plus response ingestion
            rng: Random source for picking fallback replies
        """
        self._client = http_client
        self._endpoint = endpoint
        self._model = model
        self._timeout = timeout
        self._rng = rng or random.Random()
        self._state = ConversationState()
        self._update_callback: UpdateCallback | None = None
        self._focus_callback: FocusCallback | None = None

    @property
    def state(self) -> ConversationState:
        return self._state

    @property
    def model(self) -> str:
        return self._model

    @property
    def draft(self) -> str:
        """Current entry field text."""
        return self._state.draft

    @draft.setter
    def draft(self, text: str) -> None:
        self._state.draft = text

    def set_update_callback(self, callback: UpdateCallback | None) -> None:
        """Set the callback invoked after every visible state change."""
        self._update_callback = callback

    def set_focus_callback(self, callback: FocusCallback | None) -> None:
        """Set the callback invoked when focus should return to the entry field."""
        self._focus_callback = callback

    def _notify(self) -> None:
        if self._update_callback is not None:
            self._update_callback(self._state)

    def _request_focus(self) -> None:
        if self._focus_callback is not None:
            self._focus_callback()

    async def send(self, text: str | None = None) -> bool:
        """Send a user message and ingest the reply.

        Args:
            text: Message text (default: the current draft)

        Returns:
            False if the send was rejected (blank text or a send in flight),
            True once an accepted send has finished, successfully or not
        """
        state = self._state
        content = state.draft if text is None else text
        if not content.strip():
            return False
        if state.is_loading:
            logger.debug("Send ignored: a request is already in flight")
            return False

        history = [message.to_wire() for message in state.messages]
        user_message = Message(role=Role.USER, content=content)
        history.append(user_message.to_wire())

        state.messages.append(user_message)
        state.draft = ""
        state.transition(SendPhase.SENDING)
        state.last_error = None
        self._notify()

        try:
            placeholder = Message(role=Role.ASSISTANT, content="")
            state.messages.append(placeholder)
            self._notify()

            request = ChatRequest(messages=history, model=self._model)
            try:
                await self._exchange(request, placeholder.id)
            except ChatClientError as e:
                logger.error("Send failed: %s", e)
                self._fail(placeholder.id, str(e))
            except Exception as e:
                logger.exception("Send failed unexpectedly")
                self._fail(placeholder.id, str(e) or UNEXPECTED_ERROR_MESSAGE)
        finally:
            state.transition(SendPhase.IDLE)
            self._request_focus()
            self._notify()
        return True

    def clear(self) -> None:
        """Drop all messages and the last error. The send lifecycle is left as is."""
        self._state.messages = []
        self._state.last_error = None
        self._notify()
        self._request_focus()

    async def _exchange(self, request: ChatRequest, message_id: str) -> None:
        """POST the request and ingest the response before the deadline."""
        logger.info("Sending %d message(s) to %s", len(request.messages), self._endpoint)
        try:
            async with asyncio.timeout(self._timeout):
                async with self._client.stream(
                    "POST",
                    self._endpoint,
                    json=request.model_dump(),
                    timeout=self._timeout,
                ) as response:
                    await self._ingest(response, message_id)
        except TimeoutError as e:
            raise RequestTimeoutError() from e
        except httpx.TimeoutException as e:
            raise RequestTimeoutError() from e
        except httpx.TransportError as e:
            raise ConnectionFailedError(f"Network error: {str(e) or type(e).__name__}") from e

    async def _ingest(self, response: httpx.Response, message_id: str) -> None:
        if not response.is_success:
            await response.aread()
            raise ServerError(response.status_code, response.text)

        content_type = response.headers.get("content-type", "")
        if JSON_CONTENT_TYPE in content_type:
            await self._ingest_json(response, message_id)
        elif EVENT_STREAM_CONTENT_TYPE in content_type:
            await self._ingest_stream(response, message_id)
        else:
            raise ResponseFormatError()

    async def _ingest_json(self, response: httpx.Response, message_id: str) -> None:
        """Set the whole reply from a single JSON envelope."""
        await response.aread()
        try:
            data = response.json()
        except ValueError as e:
            raise ResponseFormatError(f"Malformed JSON response: {e}") from e
        if not isinstance(data, dict):
            raise ResponseFormatError()

        if data.get("error"):
            raise UpstreamReportedError(str(data["error"]))
        self._write(message_id, str(data.get("content") or NO_RESPONSE_TEXT))

    async def _ingest_stream(self, response: httpx.Response, message_id: str) -> None:
        """Grow the reply frame by frame until the transport closes."""
        self._state.transition(SendPhase.STREAMING)
        accumulated = ""
        async with aclosing(iter_frames(response.aiter_bytes())) as frames:
            async for frame in frames:
                if frame.type == "error":
                    raise StreamError(frame.value or UNEXPECTED_ERROR_MESSAGE)
                accumulated += frame.value
                self._write(message_id, accumulated)

    def _write(self, message_id: str, content: str) -> None:
        if self._state.set_content(message_id, content):
            self._notify()
        else:
            logger.debug("Dropping update for message %s: no longer in conversation", message_id)

    def _fail(self, message_id: str, error: str) -> None:
        # Observers see the failure through the completion notification.
        self._state.last_error = error
        self._state.set_content(message_id, self._rng.choice(FALLBACK_RESPONSES))
