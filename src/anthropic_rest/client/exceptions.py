"""Typed client-side exception hierarchy for Anthropic API calls."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ErrorMetadata:
    """Structured metadata for telling error kinds apart without isinstance chains."""

    category: str


class AnthropicClientError(RuntimeError):
    """Base error for anthropic-rest client operations."""

    metadata = ErrorMetadata(category="INTERNAL_ERROR")

    def __init__(
        self,
        *,
        action: str,
        detail: str,
        status_code: int | None = None,
    ) -> None:
        message = f"{action} failed"
        if status_code is not None:
            message = f"{message} with HTTP {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.action = action
        self.detail = detail
        self.status_code = status_code

    @property
    def category(self) -> str:
        return self.metadata.category


class SerializationError(AnthropicClientError):
    """Request body or query could not be serialized; nothing was sent."""

    metadata = ErrorMetadata(category="SERIALIZATION_ERROR")


class InvalidRequestError(AnthropicClientError):
    """Request parameters were rejected locally before any network call."""

    metadata = ErrorMetadata(category="INVALID_REQUEST")


class TransportError(AnthropicClientError):
    """Connection, send or receive failure reported by the HTTP layer."""

    metadata = ErrorMetadata(category="TRANSPORT_ERROR")


class RequestTimeoutError(TransportError):
    """The transport gave up waiting on the server."""

    metadata = ErrorMetadata(category="TIMEOUT")


class ResponseReadError(TransportError):
    """Status line arrived but the response body could not be read."""

    metadata = ErrorMetadata(category="READ_ERROR")


class ApiError(AnthropicClientError):
    """Non-2xx response. ``body`` holds the server text exactly as received."""

    metadata = ErrorMetadata(category="API_ERROR")

    def __init__(self, *, action: str, status_code: int, body: str) -> None:
        super().__init__(action=action, detail=body, status_code=status_code)
        self.body = body


class DecodeError(AnthropicClientError):
    """2xx response whose body did not match the expected schema."""

    metadata = ErrorMetadata(category="DECODE_ERROR")

    def __init__(self, *, action: str, reason: str, body: str) -> None:
        super().__init__(
            action=action,
            detail=f"JSON parsing error: {reason}. Response body: {body}",
        )
        self.reason = reason
        self.body = body


class StreamPreconditionError(AnthropicClientError):
    """Streaming was requested without the ``stream`` flag set on the params."""

    metadata = ErrorMetadata(category="STREAM_PRECONDITION")


class StreamDecodeError(AnthropicClientError):
    """One event frame in an otherwise healthy stream could not be decoded."""

    metadata = ErrorMetadata(category="STREAM_DECODE_ERROR")

    def __init__(self, *, action: str, reason: str, payload: str) -> None:
        super().__init__(
            action=action,
            detail=f"failed to parse SSE event: {reason}. Event data: {payload}",
        )
        self.reason = reason
        self.payload = payload
