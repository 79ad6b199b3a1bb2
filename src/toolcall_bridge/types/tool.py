"""
Provider‑neutral dataclasses for client‑side tool use.

They are intentionally minimal: everything vendor‑specific lives in the
vendor table.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Union

__all__ = [
    "JsonValue",
    "JsonObject",
    "ChoiceMode",
    "ToolChoice",
    "ToolSpec",
    "ToolInvocation",
    "ToolCallResult",
]

JsonValue = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]
JsonObject = dict[str, JsonValue]


def _empty_object_schema() -> JsonObject:
    return {"type": "object", "properties": {}}


@dataclass(slots=True)
class ToolSpec:
    """A tool the caller offers to the model for one request."""
    name: str
    description: str | None = None
    parameters: JsonObject = field(default_factory=_empty_object_schema)


class ChoiceMode(StrEnum):
    AUTO = "auto"
    NONE = "none"
    FORCED = "forced"


@dataclass(frozen=True, slots=True)
class ToolChoice:
    """Whether, and which, tool the model is allowed to call."""
    mode: ChoiceMode
    name: str | None = None

    @classmethod
    def auto(cls) -> ToolChoice:
        return cls(ChoiceMode.AUTO)

    @classmethod
    def none(cls) -> ToolChoice:
        return cls(ChoiceMode.NONE)

    @classmethod
    def forced(cls, name: str) -> ToolChoice:
        return cls(ChoiceMode.FORCED, name)

    @classmethod
    def coerce(cls, value: ToolChoice | str | None) -> ToolChoice:
        """Accept a ToolChoice, ``"auto"``, ``"none"`` or None (auto)."""
        if value is None:
            return cls.auto()
        if isinstance(value, ToolChoice):
            return value
        if value == ChoiceMode.AUTO:
            return cls.auto()
        if value == ChoiceMode.NONE:
            return cls.none()
        raise TypeError(
            f"tool choice must be ToolChoice, 'auto' or 'none', got {value!r}"
        )


@dataclass(slots=True)
class ToolInvocation:
    """A model‑agnostic request emitted by the LLM to call a local tool."""
    id: str
    name: str
    arguments: JsonObject


@dataclass(slots=True)
class ToolCallResult:
    """Payload to send back to the LLM after the tool finished running."""
    id: str                     # must match the invocation id
    content: str | dict[str, Any]
    name: str | None = None     # required by vendors that correlate by name

    @classmethod
    def for_invocation(
        cls, invocation: ToolInvocation, content: str | dict[str, Any]
    ) -> ToolCallResult:
        return cls(id=invocation.id, content=content, name=invocation.name)
