"""HTTP dispatch shared by every Anthropic resource facade."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from anthropic_rest import __version__
from anthropic_rest.core.config import DEFAULT_API_VERSION, DEFAULT_BASE_URL
from anthropic_rest.core.schemas import dump_payload

from .exceptions import (
    ApiError,
    DecodeError,
    RequestTimeoutError,
    ResponseReadError,
    SerializationError,
    TransportError,
)
from .sse import EventStream

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_USER_AGENT = f"anthropic-rest/{__version__}"

API_KEY_HEADER = "x-api-key"
VERSION_HEADER = "anthropic-version"
BETA_HEADER = "anthropic-beta"

QueryValue = BaseModel | Mapping[str, Any]
BodyValue = BaseModel | Mapping[str, Any]
FileParts = Mapping[str, tuple[str, bytes, str]]


@dataclass(frozen=True, slots=True)
class ClientIdentity:
    """Credential, protocol version, base URL and transport shared by all calls.

    The standard and the admin credential use the same identity type; only the
    secret presented in ``x-api-key`` differs.
    """

    api_key: str = field(repr=False)
    api_version: str = DEFAULT_API_VERSION
    base_url: str = DEFAULT_BASE_URL
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)
    timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def headers(self, beta: str | None = None) -> dict[str, str]:
        """Return the protocol headers for one request."""
        headers = {
            API_KEY_HEADER: self.api_key,
            VERSION_HEADER: self.api_version,
        }
        if beta:
            headers[BETA_HEADER] = beta
        return headers


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """One outgoing call: method, path relative to the base URL and its payloads."""

    method: str
    path: str
    query: QueryValue | None = None
    body: BodyValue | None = None
    beta: str | None = None
    files: FileParts | None = None
    action: str | None = None

    @property
    def label(self) -> str:
        return self.action or f"{self.method.upper()} {self.path}"


class Dispatcher(Protocol):
    """Capability the resource facades are written against."""

    async def send(self, request: RequestDescriptor, response_type: type[T]) -> T: ...

    async def send_bytes(self, request: RequestDescriptor) -> bytes: ...

    async def stream(self, request: RequestDescriptor, event_type: Any) -> EventStream[Any]: ...


class HttpDispatcher:
    """Dispatcher backed by one ``httpx.AsyncClient``.

    Every call performs exactly one HTTP exchange. There are no retries and no
    deadline beyond what the identity's ``timeout`` asks the transport for.

    Example:
        >>> identity = ClientIdentity(api_key="sk-ant-...")
        >>> async with HttpDispatcher(identity) as dispatcher:
        ...     batch = await dispatcher.send(
        ...         RequestDescriptor("GET", "/messages/batches/msgbatch_01"),
        ...         MessageBatch,
        ...     )
    """

    def __init__(self, identity: ClientIdentity) -> None:
        self._identity = identity
        self._http = httpx.AsyncClient(
            transport=identity.transport,
            timeout=identity.timeout,
            headers={"user-agent": identity.user_agent},
        )

    @property
    def identity(self) -> ClientIdentity:
        return self._identity

    async def __aenter__(self) -> HttpDispatcher:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    async def send(self, request: RequestDescriptor, response_type: type[T]) -> T:
        """Send one request and decode a 2xx JSON body into ``response_type``."""
        response = await self._execute(request)
        text = response.text
        try:
            return TypeAdapter(response_type).validate_json(text)
        except ValidationError as exc:
            raise DecodeError(action=request.label, reason=str(exc), body=text) from exc

    async def send_bytes(self, request: RequestDescriptor) -> bytes:
        """Send one request and return the raw 2xx body."""
        response = await self._execute(request)
        return response.content

    async def stream(self, request: RequestDescriptor, event_type: Any) -> EventStream[Any]:
        """Send one request and return its 2xx body as a typed event stream.

        The response stays open until the returned stream is exhausted, fails
        or is closed by the caller.
        """
        action = request.label
        response = await self._send(self._build_request(request), action=action)
        if not response.is_success:
            await self._read(response, action=action)
            logger.debug("%s returned HTTP %d", action, response.status_code)
            raise ApiError(action=action, status_code=response.status_code, body=response.text)

        logger.debug("%s opened event stream (HTTP %d)", action, response.status_code)
        return EventStream(
            response.aiter_bytes(),
            event_type,
            action=action,
            on_close=response.aclose,
        )

    async def _execute(self, request: RequestDescriptor) -> httpx.Response:
        action = request.label
        outgoing = self._build_request(request)
        response = await self._send(outgoing, action=action)
        await self._read(response, action=action)
        logger.debug("%s returned HTTP %d", action, response.status_code)
        if not response.is_success:
            raise ApiError(action=action, status_code=response.status_code, body=response.text)
        return response

    def _build_request(self, request: RequestDescriptor) -> httpx.Request:
        action = request.label
        headers = self._identity.headers(request.beta)
        params = encode_query(request.query, action=action) if request.query is not None else None
        content: bytes | None = None
        if request.body is not None:
            content = encode_body(request.body, action=action)
            headers["content-type"] = "application/json"

        url = f"{self._identity.base_url}{request.path}"
        return self._http.build_request(
            request.method.upper(),
            url,
            params=params,
            content=content,
            files=request.files,
            headers=headers,
        )

    async def _send(self, outgoing: httpx.Request, *, action: str) -> httpx.Response:
        logger.debug(
            "sending %s %s (beta=%s)",
            outgoing.method,
            outgoing.url.path,
            outgoing.headers.get(BETA_HEADER),
        )
        try:
            return await self._http.send(outgoing, stream=True)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(action=action, detail=str(exc)) from exc
        except httpx.HTTPError as exc:
            raise TransportError(action=action, detail=str(exc)) from exc

    async def _read(self, response: httpx.Response, *, action: str) -> bytes:
        try:
            return await response.aread()
        except httpx.HTTPError as exc:
            raise ResponseReadError(
                action=action,
                detail=f"failed to get response body: {exc}",
                status_code=response.status_code,
            ) from exc
        finally:
            await response.aclose()


def encode_query(query: QueryValue, *, action: str) -> list[tuple[str, str]]:
    """Flatten a query model or mapping into URL-encodable key/value pairs."""
    try:
        if isinstance(query, BaseModel):
            payload = dump_payload(query)
        else:
            payload = {key: value for key, value in query.items() if value is not None}
    except PydanticSerializationError as exc:
        raise SerializationError(action=action, detail=f"failed to serialize query: {exc}") from exc

    pairs: list[tuple[str, str]] = []
    for key, value in payload.items():
        values = value if isinstance(value, list | tuple) else [value]
        for item in values:
            pairs.append((str(key), _query_scalar(item, key=key, action=action)))
    return pairs


def encode_body(body: BodyValue, *, action: str) -> bytes:
    """Serialize a request body to JSON bytes before anything is sent.

    Models nested anywhere inside a mapping body get the same wire form as a
    top-level model.
    """
    try:
        payload: Any = dump_payload(body) if isinstance(body, BaseModel) else dict(body)
        serialized = json.dumps(
            payload,
            default=_jsonable_model,
            ensure_ascii=False,
            separators=(",", ":"),
            allow_nan=False,
        )
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        raise SerializationError(action=action, detail=f"failed to serialize body: {exc}") from exc
    return serialized.encode("utf-8")


def _jsonable_model(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return dump_payload(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _query_scalar(value: Any, *, key: str, action: str) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str | int | float):
        return str(value)
    raise SerializationError(
        action=action,
        detail=f"query parameter {key!r} must be a scalar, got {type(value).__name__}",
    )
