"""Failures the conversation controller can observe while answering a send."""

from .config import TIMEOUT_MESSAGE, UNEXPECTED_FORMAT_MESSAGE


class ChatClientError(Exception):
    """Base class for failures of a single send."""


class ConnectionFailedError(ChatClientError):
    """The request could not be delivered or the connection broke mid-response."""


class RequestTimeoutError(ChatClientError):
    """The request did not complete before the deadline and was cancelled."""

    def __init__(self, message: str = TIMEOUT_MESSAGE) -> None:
        super().__init__(message)


class ServerError(ChatClientError):
    """The endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Server error: {status_code}. {body}")
        self.status_code = status_code
        self.body = body


class UpstreamReportedError(ChatClientError):
    """A JSON response carried an ``error`` field."""


class StreamError(ChatClientError):
    """An event stream delivered an ``error`` frame."""


class ResponseFormatError(ChatClientError):
    """The response could not be interpreted."""

    def __init__(self, message: str = UNEXPECTED_FORMAT_MESSAGE) -> None:
        super().__init__(message)
