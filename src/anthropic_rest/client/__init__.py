"""Shared request dispatch, event streaming and error types."""

from .exceptions import (
    AnthropicClientError,
    ApiError,
    DecodeError,
    InvalidRequestError,
    RequestTimeoutError,
    ResponseReadError,
    SerializationError,
    StreamDecodeError,
    StreamPreconditionError,
    TransportError,
)
from .http import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    DEFAULT_USER_AGENT,
    ClientIdentity,
    Dispatcher,
    HttpDispatcher,
    RequestDescriptor,
)
from .sse import EventStream, ServerSentEvent, SSEDecoder, StreamState

__all__ = [
    "DEFAULT_API_VERSION",
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "AnthropicClientError",
    "ApiError",
    "ClientIdentity",
    "DecodeError",
    "Dispatcher",
    "EventStream",
    "HttpDispatcher",
    "InvalidRequestError",
    "RequestDescriptor",
    "RequestTimeoutError",
    "ResponseReadError",
    "SSEDecoder",
    "SerializationError",
    "ServerSentEvent",
    "StreamDecodeError",
    "StreamPreconditionError",
    "StreamState",
    "TransportError",
]
