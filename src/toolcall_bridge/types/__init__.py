from .tool import (
    ChoiceMode,
    JsonObject,
    JsonValue,
    ToolCallResult,
    ToolChoice,
    ToolInvocation,
    ToolSpec,
)

__all__ = [
    "ChoiceMode",
    "JsonObject",
    "JsonValue",
    "ToolCallResult",
    "ToolChoice",
    "ToolInvocation",
    "ToolSpec",
]
