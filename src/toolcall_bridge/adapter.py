"""
Vendor-neutral tool-call adapter.

`ToolCallAdapter` translates between the canonical tool model
(`ToolSpec`, `ToolChoice`, `ToolInvocation`) and each vendor's wire JSON.
It performs no I/O and keeps no state between calls, so a single instance
can be shared freely across threads and tasks. All vendor differences come
from the table in `toolcall_bridge.vendors`.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Final, Iterable, Mapping, Optional, Sequence

from toolcall_bridge._exceptions import (
    InvalidToolSpecError,
    MalformedArgumentsError,
    MalformedToolCallError,
    MissingDescriptionError,
    UnknownToolError,
)
from toolcall_bridge.schema import check_schema, check_tool_name, iter_parameter_nodes
from toolcall_bridge.sdk import to_body
from toolcall_bridge.types import (
    ChoiceMode,
    JsonObject,
    JsonValue,
    ToolCallResult,
    ToolChoice,
    ToolInvocation,
    ToolSpec,
)
from toolcall_bridge.vendors import Path, Vendor, VendorProfile, get_profile, resolve_vendor

__all__ = [
    "ToolCallAdapter",
    "encode_request",
    "decode_response",
    "validate_spec",
    "decode_request",
    "translate_request",
    "extract_tool_calls",
    "tool_result_message",
]

_MISSING: Final = object()


def _get_path(obj: Any, path: Path) -> Any:
    current = obj
    for part in path:
        if isinstance(part, int):
            if not isinstance(current, Sequence) or isinstance(current, (str, bytes)):
                return _MISSING
            try:
                current = current[part]
            except IndexError:
                return _MISSING
        elif isinstance(current, Mapping) and part in current:
            current = current[part]
        else:
            return _MISSING
    return current


def _set_path(obj: dict[str, Any], path: Path, value: JsonValue) -> None:
    *parents, leaf = path
    current = obj
    for part in parents:
        current = current.setdefault(part, {})
    current[leaf] = value


def _reject_constant(name: str) -> None:
    raise ValueError(f"non-standard JSON constant {name}")


def _synthesize_id(vendor_id: Vendor, index: int, taken: set[str]) -> str:
    """Return ``<vendor>:<index>``, suffixed with ``.<n>`` if a vendor id already uses it."""
    candidate = f"{vendor_id}:{index}"
    suffix = 1
    while candidate in taken:
        candidate = f"{vendor_id}:{index}.{suffix}"
        suffix += 1
    return candidate


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _parse_arguments(index: int, raw: Any) -> JsonObject:
    """Decode one call's arguments payload into a JSON object."""
    if raw is _MISSING or raw is None:
        return {}
    if isinstance(raw, Mapping):
        return copy.deepcopy(dict(raw))
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            value = json.loads(raw, parse_constant=_reject_constant)
        except ValueError as exc:
            raise MalformedArgumentsError(index, raw, str(exc)) from exc
        if not isinstance(value, dict):
            raise MalformedArgumentsError(index, raw, "not a JSON object")
        return value
    raise MalformedArgumentsError(index, raw, f"unsupported payload type {type(raw).__name__}")


class ToolCallAdapter:
    """
    Translate tool declarations, tool choices and tool calls to and from
    vendor wire formats.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        name: Optional[str] = None,
    ) -> None:
        """
        Args:
            logger: Optional logger instance. If None, a logger named after
                    this module will be used.
            name: Optional name used as a prefix in log messages.
                  If None, defaults to the class name.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.name = name if name is not None else self.__class__.__name__

    # ------------------------------------------------------------------ #
    # request side
    # ------------------------------------------------------------------ #
    def validate_spec(self, tool: ToolSpec, vendor: Vendor | str | None = None) -> None:
        """
        Check *tool* against the structural rules and the vendor's
        mandatory-field rules.

        Raises:
            InvalidToolSpecError: bad name or malformed parameter schema.
            MissingDescriptionError: the vendor requires descriptions on the
                tool and every parameter node, and one is absent.
            UnsupportedVendorError: unknown vendor.
        """
        vendor_id, profile = self._lookup(vendor)
        check_tool_name(tool.name)
        if tool.description is not None and not isinstance(tool.description, str):
            raise InvalidToolSpecError(f"Tool {tool.name!r}: description must be a string")
        check_schema(tool.name, tool.parameters)

        if not profile.require_param_descriptions:
            return
        if not _has_text(tool.description):
            raise MissingDescriptionError(tool.name, None, vendor_id)
        for path, node in iter_parameter_nodes(tool.parameters):
            if not _has_text(node.get("description")):
                raise MissingDescriptionError(tool.name, path, vendor_id)

    def encode_request(
        self,
        tools: Iterable[ToolSpec],
        choice: ToolChoice | str | None = None,
        vendor: Vendor | str | None = None,
    ) -> JsonObject:
        """
        Build the ``tools`` / tool-choice fragment of a vendor request body.

        An empty tool set with an ``auto`` choice yields ``{}`` so nothing is
        merged into the request.

        Raises:
            UnknownToolError: a forced choice names a tool not in *tools*.
            InvalidToolSpecError: invalid or duplicate tools, or a ``none``
                choice with no tools.
            MissingDescriptionError: see `validate_spec`.
        """
        vendor_id, profile = self._lookup(vendor)
        tools = list(tools)
        policy = ToolChoice.coerce(choice)

        names = [tool.name for tool in tools]
        if policy.mode is ChoiceMode.FORCED and policy.name not in names:
            raise UnknownToolError(policy.name, names)
        for tool in tools:
            self.validate_spec(tool, vendor_id)
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise InvalidToolSpecError(f"Duplicate tool names: {duplicates!r}")
        if not tools:
            if policy.mode is ChoiceMode.NONE:
                raise InvalidToolSpecError("Tool choice 'none' requires at least one tool")
            return {}

        declarations = [self._declaration(tool, profile) for tool in tools]
        if profile.declarations_group:
            tools_value: list[JsonValue] = [{profile.declarations_group: declarations}]
        else:
            tools_value = declarations

        self._log(f"Encoded {len(tools)} tool(s) for {vendor_id} with choice {policy.mode}")
        return {
            profile.tools_field: tools_value,
            profile.choice_field: self._encode_choice(policy, profile),
        }

    def decode_request(
        self, fragment: Mapping[str, Any], vendor: Vendor | str | None = None
    ) -> tuple[list[ToolSpec], ToolChoice]:
        """Read the tools and tool choice back out of a vendor request body."""
        _, profile = self._lookup(vendor)
        entries = fragment.get(profile.tools_field) or []
        if profile.declarations_group:
            declarations = [
                declaration
                for entry in entries
                if isinstance(entry, Mapping)
                for declaration in entry.get(profile.declarations_group, [])
            ]
        else:
            declarations = list(entries)

        tools: list[ToolSpec] = []
        for entry in declarations:
            declaration = entry
            if profile.declaration_key and isinstance(entry, Mapping):
                declaration = entry.get(profile.declaration_key)
            if not isinstance(declaration, Mapping) or "name" not in declaration:
                raise InvalidToolSpecError(f"Unrecognised tool declaration: {entry!r}")
            tools.append(
                ToolSpec(
                    name=declaration["name"],
                    description=declaration.get("description"),
                    parameters=copy.deepcopy(
                        declaration.get(profile.schema_field, {"type": "object", "properties": {}})
                    ),
                )
            )
        return tools, self._decode_choice(fragment.get(profile.choice_field), profile)

    def translate_request(
        self,
        fragment: Mapping[str, Any],
        source: Vendor | str,
        target: Vendor | str,
    ) -> JsonObject:
        """Re-encode a request fragment written for *source* for *target*."""
        tools, choice = self.decode_request(fragment, source)
        return self.encode_request(tools, choice, target)

    # ------------------------------------------------------------------ #
    # response side
    # ------------------------------------------------------------------ #
    def decode_response(
        self, raw: Sequence[Any] | None, vendor: Vendor | str | None = None
    ) -> list[ToolInvocation]:
        """
        Normalize a vendor's ordered list of tool-call objects.

        Output order equals input order. Calls without a usable id get
        ``"<vendor>:<index>"``; when the vendor already used that string for
        another call in the same payload, a ``.1``, ``.2`` ... suffix is
        added. Ids the vendor sends are passed through unchanged. If any
        call is malformed the whole decode fails; no partial list is returned.

        Raises:
            MalformedArgumentsError: a call's arguments are not a JSON object.
            MalformedToolCallError: a call object lacks a tool name.
        """
        vendor_id, profile = self._lookup(vendor)
        if raw is None:
            return []
        if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Sequence):
            raise TypeError(f"Expected a sequence of tool calls, got {type(raw).__name__}")

        decoded = [self._decode_call(index, call, profile) for index, call in enumerate(raw)]
        taken = {call_id for call_id, _, _ in decoded if call_id is not None}
        invocations: list[ToolInvocation] = []
        for index, (call_id, name, arguments) in enumerate(decoded):
            if call_id is None:
                call_id = _synthesize_id(vendor_id, index, taken)
                taken.add(call_id)
            invocations.append(ToolInvocation(id=call_id, name=name, arguments=arguments))
        self._log(f"Decoded {len(invocations)} tool call(s) from {vendor_id}")
        return invocations

    def extract_tool_calls(self, body: Any, vendor: Vendor | str | None = None) -> list[ToolInvocation]:
        """
        Decode the tool calls found in a complete vendor response body.

        *body* may be a decoded JSON mapping or an SDK response object
        (``openai`` ``ChatCompletion``, ``anthropic`` ``Message``).

        For vendors that mix tool calls with other content (Anthropic
        ``content`` blocks, Gemini ``parts``) non-call entries are dropped
        first, so the ``index`` on a raised error and in a synthesized id
        counts tool calls only, not content blocks or parts.
        """
        vendor_id, profile = self._lookup(vendor)
        calls = _get_path(to_body(body), profile.response_calls_path)
        if calls is _MISSING or calls is None:
            return []
        if profile.call_marker is not None:
            key, expected = profile.call_marker
            calls = [
                call
                for call in calls
                if isinstance(call, Mapping)
                and key in call
                and (expected is None or call[key] == expected)
            ]
        return self.decode_response(calls, vendor_id)

    def tool_result_message(self, result: ToolCallResult, vendor: Vendor | str | None = None) -> JsonObject:
        """Convert a ToolCallResult to the vendor's tool-result message."""
        _, profile = self._lookup(vendor)
        return profile.result_message(result)

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def _lookup(vendor: Vendor | str | None) -> tuple[Vendor, VendorProfile]:
        vendor_id = resolve_vendor(vendor)
        return vendor_id, get_profile(vendor_id)

    @staticmethod
    def _declaration(tool: ToolSpec, profile: VendorProfile) -> JsonObject:
        declaration: JsonObject = {"name": tool.name}
        if tool.description is not None:
            declaration["description"] = tool.description
        declaration[profile.schema_field] = copy.deepcopy(tool.parameters)
        if profile.declaration_key:
            return {**profile.declaration_extra, profile.declaration_key: declaration}
        return declaration

    @staticmethod
    def _encode_choice(policy: ToolChoice, profile: VendorProfile) -> JsonValue:
        if policy.mode is ChoiceMode.AUTO:
            return copy.deepcopy(profile.auto_choice)
        if policy.mode is ChoiceMode.NONE:
            return copy.deepcopy(profile.none_choice)
        encoded = copy.deepcopy(dict(profile.forced_template))
        name: JsonValue = [policy.name] if profile.forced_name_as_list else policy.name
        _set_path(encoded, profile.forced_name_path, name)
        return encoded

    @staticmethod
    def _decode_choice(value: Any, profile: VendorProfile) -> ToolChoice:
        if value is None:
            return ToolChoice.auto()
        # sibling options such as disable_parallel_tool_use are ignored
        mode = _get_path(value, profile.choice_mode_path)
        if mode == _get_path(profile.auto_choice, profile.choice_mode_path):
            return ToolChoice.auto()
        if mode == _get_path(profile.none_choice, profile.choice_mode_path):
            return ToolChoice.none()
        name = _get_path(value, profile.forced_name_path)
        if profile.forced_name_as_list and isinstance(name, list) and len(name) == 1:
            name = name[0]
        if not isinstance(name, str):
            raise InvalidToolSpecError(f"Unrecognised tool choice: {value!r}")
        return ToolChoice.forced(name)

    @staticmethod
    def _decode_call(index: int, call: Any, profile: VendorProfile) -> tuple[str | None, str, JsonObject]:
        if not isinstance(call, Mapping):
            if not hasattr(call, "model_dump"):
                raise MalformedToolCallError(index, f"expected an object, got {type(call).__name__}")
            call = call.model_dump(mode="json")

        name = _get_path(call, profile.call_name_path)
        if not _has_text(name):
            raise MalformedToolCallError(index, "missing tool name")
        arguments = _parse_arguments(index, _get_path(call, profile.call_arguments_path))

        call_id = _get_path(call, profile.call_id_path)
        if not isinstance(call_id, str) or call_id in profile.missing_id_sentinels:
            call_id = None
        return call_id, name, arguments

    def _log(self, message: str, level: int = logging.DEBUG) -> None:
        self.logger.log(level, f"[{self.name}] {message}")


_default_adapter: Final = ToolCallAdapter()

encode_request = _default_adapter.encode_request
decode_response = _default_adapter.decode_response
validate_spec = _default_adapter.validate_spec
decode_request = _default_adapter.decode_request
translate_request = _default_adapter.translate_request
extract_tool_calls = _default_adapter.extract_tool_calls
tool_result_message = _default_adapter.tool_result_message
