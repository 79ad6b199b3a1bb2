"""Structural checks on tool declarations and their parameter schemas."""

from __future__ import annotations

import re
from typing import Any, Final, Iterator, Mapping

from toolcall_bridge._exceptions import InvalidToolSpecError

__all__ = ["TOOL_NAME_PATTERN", "NODE_TYPES", "check_tool_name", "check_schema", "iter_parameter_nodes"]

TOOL_NAME_PATTERN: Final = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

NODE_TYPES: Final = frozenset(
    {"object", "array", "string", "number", "integer", "boolean", "null"}
)


def check_tool_name(name: Any) -> None:
    if not isinstance(name, str) or not TOOL_NAME_PATTERN.match(name):
        raise InvalidToolSpecError(
            f"Tool name {name!r} must match {TOOL_NAME_PATTERN.pattern}"
        )


def check_schema(tool: str, schema: Any) -> None:
    """
    Validate the structural shape of a parameter schema.

    The root must be an object node. Every parameter node must be a mapping
    whose ``type`` (if given) is a known node type, and every ``required``
    entry must name a declared property.

    Raises:
        InvalidToolSpecError: on the first violation found.
    """
    if not isinstance(schema, Mapping) or schema.get("type") != "object":
        raise InvalidToolSpecError(
            f"Tool {tool!r}: parameter schema root must be an object node"
        )
    _check_object(tool, schema, "")
    for path, node in iter_parameter_nodes(schema):
        _check_node_type(tool, path, node)
        if node.get("type") == "object" or "properties" in node:
            _check_object(tool, node, path)
        _check_items(tool, node, path)


def _check_object(tool: str, node: Mapping[str, Any], path: str) -> None:
    where = f"{path!r}" if path else "root"
    properties = node.get("properties", {})
    if not isinstance(properties, Mapping):
        raise InvalidToolSpecError(f"Tool {tool!r}: properties of {where} must be a mapping")
    for key, child in properties.items():
        if not isinstance(child, Mapping):
            raise InvalidToolSpecError(
                f"Tool {tool!r}: parameter {_join(path, key)!r} must be a schema mapping"
            )
    required = node.get("required", [])
    if not isinstance(required, (list, tuple)):
        raise InvalidToolSpecError(f"Tool {tool!r}: required of {where} must be a list")
    missing = [key for key in required if key not in properties]
    if missing:
        raise InvalidToolSpecError(
            f"Tool {tool!r}: {where} requires undeclared properties {missing!r}"
        )


def _check_items(tool: str, node: Mapping[str, Any], path: str) -> None:
    items = node.get("items")
    if items is None:
        return
    item_path = f"{path}[]"
    if not isinstance(items, Mapping):
        raise InvalidToolSpecError(
            f"Tool {tool!r}: items of {path!r} must be a schema mapping"
        )
    _check_node_type(tool, item_path, items)
    if items.get("type") == "object" or "properties" in items:
        _check_object(tool, items, item_path)
    _check_items(tool, items, item_path)


def _check_node_type(tool: str, path: str, node: Mapping[str, Any]) -> None:
    declared = node.get("type")
    if declared is None:  # enum nodes and untyped nodes
        return
    kinds = declared if isinstance(declared, (list, tuple)) else [declared]
    unknown = [kind for kind in kinds if kind not in NODE_TYPES]
    if unknown:
        raise InvalidToolSpecError(
            f"Tool {tool!r}: parameter {path!r} has unknown type {unknown!r}"
        )


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def iter_parameter_nodes(schema: Mapping[str, Any], path: str = "") -> Iterator[tuple[str, Mapping[str, Any]]]:
    """
    Yield ``(dotted_path, node)`` for every parameter node below *schema*.

    Nested object properties are joined with ``.``; array items are entered
    through ``[]``, so ``tags[].label`` is the ``label`` property of each
    element of ``tags``. The root itself is not yielded.
    """
    properties = schema.get("properties")
    if isinstance(properties, Mapping):
        for key, node in properties.items():
            if not isinstance(node, Mapping):
                continue
            child = _join(path, key)
            yield child, node
            yield from iter_parameter_nodes(node, child)
    items = schema.get("items")
    if isinstance(items, Mapping) and path:
        yield from iter_parameter_nodes(items, f"{path}[]")
