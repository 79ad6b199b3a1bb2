"""
Vendor table for tool-call translation.

Every vendor difference the adapter knows about is data in a
`VendorProfile`: field names, paths into call objects, choice encodings and
strictness flags. Adding a vendor means adding a table row.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import StrEnum
from functools import partial
from types import MappingProxyType
from typing import Any, Callable, Final, Mapping

from dotenv import load_dotenv

from toolcall_bridge._exceptions import InvalidToolResultError, UnsupportedVendorError
from toolcall_bridge.types import JsonObject, JsonValue, ToolCallResult

load_dotenv()

__all__ = [
    "Vendor",
    "VendorProfile",
    "VENDOR_ENV_VAR",
    "DEFAULT_VENDOR",
    "get_profile",
    "resolve_vendor",
]

VENDOR_ENV_VAR: Final = "TOOLCALL_VENDOR"


class Vendor(StrEnum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    MISTRAL = "mistral"
    GEMINI = "gemini"
    VERTEXAI = "vertexai"
    TOGETHERAI = "togetherai"


DEFAULT_VENDOR: Final = Vendor.OPENAI

Path = tuple[str | int, ...]


def _content_text(content: str | dict[str, Any]) -> str:
    return content if isinstance(content, str) else json.dumps(content)


def _chat_tool_message(result: ToolCallResult, *, include_name: bool = False) -> JsonObject:
    message: JsonObject = {
        "role": "tool",
        "tool_call_id": result.id,
        "content": _content_text(result.content),
    }
    if include_name and result.name:
        message["name"] = result.name
    return message


def _anthropic_tool_message(result: ToolCallResult) -> JsonObject:
    return {
        "role": "user",
        "content": [
            {
                "type": "tool_result",
                "tool_use_id": result.id,
                "content": _content_text(result.content),
            }
        ],
    }


def _gemini_tool_message(result: ToolCallResult) -> JsonObject:
    if not result.name:
        raise InvalidToolResultError("Gemini function responses must carry the tool name")
    response = result.content if isinstance(result.content, dict) else {"result": result.content}
    return {
        "role": "user",
        "parts": [{"functionResponse": {"name": result.name, "response": response}}],
    }


@dataclass(frozen=True, slots=True)
class VendorProfile:
    """How one vendor spells tool declarations, choices and calls."""

    # request side
    tools_field: str
    schema_field: str
    declaration_key: str | None        # wraps each declaration, e.g. "function"
    declaration_extra: Mapping[str, JsonValue]
    declarations_group: str | None     # all declarations under one tools entry
    choice_field: str
    auto_choice: JsonValue
    none_choice: JsonValue
    choice_mode_path: Path             # where the mode lives inside a choice value
    forced_template: Mapping[str, JsonValue]
    forced_name_path: Path
    forced_name_as_list: bool

    # response side, paths relative to one call object
    call_id_path: Path
    call_name_path: Path
    call_arguments_path: Path
    response_calls_path: Path          # from a full response body
    call_marker: tuple[str, str | None] | None
    missing_id_sentinels: frozenset[str] = field(default_factory=lambda: frozenset({""}))

    require_param_descriptions: bool = False
    result_message: Callable[[ToolCallResult], JsonObject] = _chat_tool_message


_CHAT_COMPLETIONS: Final = dict(
    tools_field="tools",
    schema_field="parameters",
    declaration_key="function",
    declaration_extra=MappingProxyType({"type": "function"}),
    declarations_group=None,
    choice_field="tool_choice",
    auto_choice="auto",
    none_choice="none",
    choice_mode_path=(),
    forced_template=MappingProxyType({"type": "function", "function": {}}),
    forced_name_path=("function", "name"),
    forced_name_as_list=False,
    call_id_path=("id",),
    call_name_path=("function", "name"),
    call_arguments_path=("function", "arguments"),
    response_calls_path=("choices", 0, "message", "tool_calls"),
    call_marker=None,
)

_GOOGLE: Final = dict(
    tools_field="tools",
    schema_field="parameters",
    declaration_key=None,
    declaration_extra=MappingProxyType({}),
    declarations_group="functionDeclarations",
    choice_field="toolConfig",
    auto_choice={"functionCallingConfig": {"mode": "AUTO"}},
    none_choice={"functionCallingConfig": {"mode": "NONE"}},
    choice_mode_path=("functionCallingConfig", "mode"),
    forced_template=MappingProxyType({"functionCallingConfig": {"mode": "ANY"}}),
    forced_name_path=("functionCallingConfig", "allowedFunctionNames"),
    forced_name_as_list=True,
    call_id_path=("functionCall", "id"),
    call_name_path=("functionCall", "name"),
    call_arguments_path=("functionCall", "args"),
    response_calls_path=("candidates", 0, "content", "parts"),
    call_marker=("functionCall", None),
    require_param_descriptions=True,
    result_message=_gemini_tool_message,
)

_PROFILES: Final[Mapping[Vendor, VendorProfile]] = MappingProxyType(
    {
        Vendor.OPENAI: VendorProfile(**_CHAT_COMPLETIONS),
        Vendor.TOGETHERAI: VendorProfile(**_CHAT_COMPLETIONS),
        Vendor.MISTRAL: VendorProfile(
            **_CHAT_COMPLETIONS,
            missing_id_sentinels=frozenset({"", "null"}),
            result_message=partial(_chat_tool_message, include_name=True),
        ),
        Vendor.ANTHROPIC: VendorProfile(
            tools_field="tools",
            schema_field="input_schema",
            declaration_key=None,
            declaration_extra=MappingProxyType({}),
            declarations_group=None,
            choice_field="tool_choice",
            auto_choice={"type": "auto"},
            none_choice={"type": "none"},
            choice_mode_path=("type",),
            forced_template=MappingProxyType({"type": "tool"}),
            forced_name_path=("name",),
            forced_name_as_list=False,
            call_id_path=("id",),
            call_name_path=("name",),
            call_arguments_path=("input",),
            response_calls_path=("content",),
            call_marker=("type", "tool_use"),
            result_message=_anthropic_tool_message,
        ),
        Vendor.GEMINI: VendorProfile(**_GOOGLE),
        Vendor.VERTEXAI: VendorProfile(**_GOOGLE),
    }
)


def resolve_vendor(value: Vendor | str | None = None) -> Vendor:
    """Coerce *value* to a Vendor, reading ``TOOLCALL_VENDOR`` when it is None."""
    if value is None:
        value = os.getenv(VENDOR_ENV_VAR) or DEFAULT_VENDOR
    try:
        return Vendor(str(value).strip().lower())
    except ValueError:
        raise UnsupportedVendorError(value) from None


def get_profile(vendor: Vendor | str) -> VendorProfile:
    """Return the table entry for *vendor* or raise UnsupportedVendorError."""
    resolved = resolve_vendor(vendor)
    try:
        return _PROFILES[resolved]
    except KeyError:
        raise UnsupportedVendorError(vendor) from None
