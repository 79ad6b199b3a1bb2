"""
Toolcall Bridge - vendor-neutral tool/function-call translation for LLM APIs.
"""

import logging

from .adapter import (
    ToolCallAdapter,
    decode_request,
    decode_response,
    encode_request,
    extract_tool_calls,
    tool_result_message,
    translate_request,
    validate_spec,
)
from ._exceptions import (
    ErrorKind,
    InvalidToolResultError,
    InvalidToolSpecError,
    MalformedArgumentsError,
    MalformedToolCallError,
    MissingDescriptionError,
    ToolBridgeError,
    UnknownToolError,
    UnsupportedVendorError,
)
from .types import ChoiceMode, ToolCallResult, ToolChoice, ToolInvocation, ToolSpec
from .vendors import Vendor, resolve_vendor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ToolCallAdapter",
    "encode_request",
    "decode_response",
    "validate_spec",
    "decode_request",
    "translate_request",
    "extract_tool_calls",
    "tool_result_message",
    "ChoiceMode",
    "ToolChoice",
    "ToolSpec",
    "ToolInvocation",
    "ToolCallResult",
    "Vendor",
    "resolve_vendor",
    "ErrorKind",
    "ToolBridgeError",
    "UnknownToolError",
    "MissingDescriptionError",
    "MalformedArgumentsError",
    "MalformedToolCallError",
    "UnsupportedVendorError",
    "InvalidToolSpecError",
    "InvalidToolResultError",
]
