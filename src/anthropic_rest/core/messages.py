"""Messages API schemas: request params, responses and streaming events."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field, JsonValue, PositiveInt, StrictBool, StrictStr

from .schemas import ApiModel, ErrorDetail, ParamsModel

Role = Literal["user", "assistant"]
NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]


class Base64Source(ParamsModel):
    type: Literal["base64"] = "base64"
    media_type: str
    data: str


class UrlSource(ParamsModel):
    type: Literal["url"] = "url"
    url: str


class FileSource(ParamsModel):
    """Reference to a file previously uploaded through the Files API."""

    type: Literal["file"] = "file"
    file_id: str


class PlainTextSource(ParamsModel):
    type: Literal["text"] = "text"
    media_type: Literal["text/plain"] = "text/plain"
    data: str


ImageSource = Annotated[Base64Source | UrlSource | FileSource, Field(discriminator="type")]
DocumentSource = Annotated[
    Base64Source | UrlSource | FileSource | PlainTextSource,
    Field(discriminator="type"),
]


class TextBlock(ApiModel):
    type: Literal["text"] = "text"
    text: str


class ImageBlock(ApiModel):
    type: Literal["image"] = "image"
    source: ImageSource


class DocumentBlock(ApiModel):
    type: Literal["document"] = "document"
    source: DocumentSource
    title: str | None = None


class ToolUseBlock(ApiModel):
    type: Literal["tool_use"] = "tool_use"
    id: str
    name: str
    input: dict[str, JsonValue] = Field(default_factory=dict)


class ToolResultBlock(ApiModel):
    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str
    content: str | list[TextBlock | ImageBlock] | None = None
    is_error: bool | None = None


class ThinkingBlock(ApiModel):
    type: Literal["thinking"] = "thinking"
    thinking: str
    signature: str | None = None


class RedactedThinkingBlock(ApiModel):
    type: Literal["redacted_thinking"] = "redacted_thinking"
    data: str


ContentBlock = Annotated[
    TextBlock
    | ImageBlock
    | DocumentBlock
    | ToolUseBlock
    | ToolResultBlock
    | ThinkingBlock
    | RedactedThinkingBlock,
    Field(discriminator="type"),
]


class Message(ParamsModel):
    """One conversation turn."""

    role: Role
    content: str | list[ContentBlock]

    @classmethod
    def user(cls, text: str) -> Message:
        return cls(role="user", content=text)

    @classmethod
    def assistant(cls, text: str) -> Message:
        return cls(role="assistant", content=text)


class Tool(ParamsModel):
    name: NonEmptyStr
    description: str | None = None
    input_schema: dict[str, JsonValue]


class ToolChoice(ParamsModel):
    type: Literal["auto", "any", "tool", "none"] = "auto"
    name: str | None = None
    disable_parallel_tool_use: StrictBool | None = None


class Metadata(ParamsModel):
    user_id: str | None = None


class ThinkingConfig(ParamsModel):
    type: Literal["enabled", "disabled"] = "enabled"
    budget_tokens: PositiveInt | None = None


class CreateMessageParams(ParamsModel):
    """Body of ``POST /messages``. ``stream`` must be true for streaming calls."""

    model: NonEmptyStr
    messages: list[Message] = Field(min_length=1)
    max_tokens: PositiveInt
    system: str | list[TextBlock] | None = None
    temperature: float | None = None
    top_p: float | None = None
    top_k: PositiveInt | None = None
    stop_sequences: list[str] | None = None
    stream: StrictBool | None = None
    tools: list[Tool] | None = None
    tool_choice: ToolChoice | None = None
    metadata: Metadata | None = None
    thinking: ThinkingConfig | None = None

    def with_stream(self, enabled: bool = True) -> CreateMessageParams:
        return self.model_copy(update={"stream": enabled})

    def with_system(self, system: str) -> CreateMessageParams:
        return self.model_copy(update={"system": system})


class Usage(ApiModel):
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int | None = None
    cache_read_input_tokens: int | None = None


class CreateMessageResponse(ApiModel):
    id: str
    type: Literal["message"] = "message"
    role: Literal["assistant"] = "assistant"
    model: str
    content: list[ContentBlock] = Field(default_factory=list)
    stop_reason: str | None = None
    stop_sequence: str | None = None
    usage: Usage = Field(default_factory=Usage)

    @property
    def text(self) -> str:
        """Concatenate all text blocks of the reply."""
        return "".join(block.text for block in self.content if isinstance(block, TextBlock))


class CountMessageTokensParams(ParamsModel):
    """Body of ``POST /messages/count_tokens``."""

    model: NonEmptyStr
    messages: list[Message] = Field(min_length=1)
    system: str | list[TextBlock] | None = None
    tools: list[Tool] | None = None
    tool_choice: ToolChoice | None = None
    thinking: ThinkingConfig | None = None


class CountMessageTokensResponse(ApiModel):
    input_tokens: int


class TextDelta(ApiModel):
    type: Literal["text_delta"] = "text_delta"
    text: str


class InputJsonDelta(ApiModel):
    type: Literal["input_json_delta"] = "input_json_delta"
    partial_json: str


class ThinkingDelta(ApiModel):
    type: Literal["thinking_delta"] = "thinking_delta"
    thinking: str


class SignatureDelta(ApiModel):
    type: Literal["signature_delta"] = "signature_delta"
    signature: str


ContentDelta = Annotated[
    TextDelta | InputJsonDelta | ThinkingDelta | SignatureDelta,
    Field(discriminator="type"),
]


class MessageDelta(ApiModel):
    stop_reason: str | None = None
    stop_sequence: str | None = None


class MessageDeltaUsage(ApiModel):
    output_tokens: int = 0
    input_tokens: int | None = None


class MessageStartEvent(ApiModel):
    type: Literal["message_start"] = "message_start"
    message: CreateMessageResponse


class ContentBlockStartEvent(ApiModel):
    type: Literal["content_block_start"] = "content_block_start"
    index: int
    content_block: ContentBlock


class ContentBlockDeltaEvent(ApiModel):
    type: Literal["content_block_delta"] = "content_block_delta"
    index: int
    delta: ContentDelta


class ContentBlockStopEvent(ApiModel):
    type: Literal["content_block_stop"] = "content_block_stop"
    index: int


class MessageDeltaEvent(ApiModel):
    type: Literal["message_delta"] = "message_delta"
    delta: MessageDelta
    usage: MessageDeltaUsage = Field(default_factory=MessageDeltaUsage)


class MessageStopEvent(ApiModel):
    type: Literal["message_stop"] = "message_stop"


class PingEvent(ApiModel):
    type: Literal["ping"] = "ping"


class ErrorEvent(ApiModel):
    """Error reported by the server inside an otherwise successful stream."""

    type: Literal["error"] = "error"
    error: ErrorDetail


StreamEvent = Annotated[
    MessageStartEvent
    | ContentBlockStartEvent
    | ContentBlockDeltaEvent
    | ContentBlockStopEvent
    | MessageDeltaEvent
    | MessageStopEvent
    | PingEvent
    | ErrorEvent,
    Field(discriminator="type"),
]
