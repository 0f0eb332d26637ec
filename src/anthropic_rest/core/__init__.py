"""Request/response schemas and settings for the Anthropic API."""

from .config import ClientSettings, ConfigFileError, load_settings, require_api_key
from .schemas import (
    ApiModel,
    ErrorDetail,
    ErrorResponse,
    Page,
    PageParams,
    ParamsModel,
    clamp_limit,
    dump_payload,
    paginate,
)

__all__ = [
    "ApiModel",
    "ClientSettings",
    "ConfigFileError",
    "ErrorDetail",
    "ErrorResponse",
    "Page",
    "PageParams",
    "ParamsModel",
    "clamp_limit",
    "dump_payload",
    "load_settings",
    "paginate",
    "require_api_key",
]
