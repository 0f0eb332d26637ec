"""anthropic-rest package."""

from typing import Any

__all__ = ["AsyncAdminClient", "AsyncAnthropicClient", "__version__"]
__version__ = "0.1.0"


def __getattr__(name: str) -> Any:
    if name in {"AsyncAnthropicClient", "AsyncAdminClient"}:
        from . import sdk

        return getattr(sdk, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
