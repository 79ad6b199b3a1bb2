"""
Errors raised by the tool-call adapter.

Every failure is terminal for the call in progress: the adapter neither
retries nor returns partial results. Each exception class carries its
`ErrorKind` so callers can branch on the kind without isinstance chains.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

__all__: tuple[str, ...] = (
    "ErrorKind",
    "ToolBridgeError",
    "UnknownToolError",
    "MissingDescriptionError",
    "MalformedArgumentsError",
    "MalformedToolCallError",
    "UnsupportedVendorError",
    "InvalidToolSpecError",
    "InvalidToolResultError",
)


class ErrorKind(StrEnum):
    UNKNOWN_TOOL = "unknown_tool"
    MISSING_DESCRIPTION = "missing_description"
    MALFORMED_ARGUMENTS = "malformed_arguments"
    MALFORMED_TOOL_CALL = "malformed_tool_call"
    UNSUPPORTED_VENDOR = "unsupported_vendor"
    INVALID_TOOL_SPEC = "invalid_tool_spec"
    INVALID_TOOL_RESULT = "invalid_tool_result"


class ToolBridgeError(ValueError):
    """Base class for every adapter error."""

    kind: ClassVar[ErrorKind]


class UnknownToolError(ToolBridgeError):
    """A forced tool choice names a tool that is not offered."""

    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, name: str, offered: list[str]) -> None:
        super().__init__(
            f"Forced tool {name!r} is not among the offered tools {offered!r}"
        )
        self.name = name
        self.offered = offered


class MissingDescriptionError(ToolBridgeError):
    """The vendor requires a description the tool does not provide.

    Attributes:
        tool: Name of the offending tool.
        path: Dotted path of the parameter node lacking a description,
            or None when the tool itself has none.
    """

    kind = ErrorKind.MISSING_DESCRIPTION

    def __init__(self, tool: str, path: str | None, vendor: str) -> None:
        where = f"parameter {path!r}" if path else "the tool itself"
        super().__init__(
            f"{vendor} requires a description on every node; "
            f"tool {tool!r} lacks one on {where}"
        )
        self.tool = tool
        self.path = path
        self.vendor = vendor


class MalformedToolCallError(ToolBridgeError):
    """A vendor call object does not have the expected shape."""

    kind = ErrorKind.MALFORMED_TOOL_CALL

    def __init__(self, index: int, message: str) -> None:
        super().__init__(f"Tool call #{index}: {message}")
        self.index = index


class MalformedArgumentsError(MalformedToolCallError):
    """A tool call's arguments payload is not a JSON object.

    Attributes:
        index: Position of the call in the vendor payload.
        raw: The offending payload, verbatim.
    """

    kind = ErrorKind.MALFORMED_ARGUMENTS

    def __init__(self, index: int, raw: object, reason: str) -> None:
        super().__init__(index, f"malformed arguments {raw!r} ({reason})")
        self.raw = raw
        self.reason = reason


class UnsupportedVendorError(ToolBridgeError):
    """No vendor table entry exists for the requested vendor."""

    kind = ErrorKind.UNSUPPORTED_VENDOR

    def __init__(self, vendor: object) -> None:
        super().__init__(f"Unsupported vendor: {vendor!r}")
        self.vendor = vendor


class InvalidToolSpecError(ToolBridgeError):
    """A tool declaration or tool set violates the structural rules."""

    kind = ErrorKind.INVALID_TOOL_SPEC


class InvalidToolResultError(ToolBridgeError):
    """A tool result lacks a field the vendor needs to correlate it."""

    kind = ErrorKind.INVALID_TOOL_RESULT
