"""Turn vendor SDK response objects into the plain JSON bodies the adapter reads."""

from __future__ import annotations

from typing import Any, Mapping

from anthropic.types import Message
from openai.types.chat import ChatCompletion

from toolcall_bridge.types import JsonObject

__all__ = ["to_body"]


def to_body(raw: ChatCompletion | Message | Mapping[str, Any]) -> JsonObject:
    """
    Return *raw* as a JSON-compatible dict.

    Accepts an OpenAI-compatible ``ChatCompletion`` (OpenAI, Mistral and
    TogetherAI share this shape), an Anthropic ``Message`` or an already
    decoded response body. Any other pydantic model is dumped the same way.
    """
    if isinstance(raw, (ChatCompletion, Message)):
        return raw.model_dump(mode="json")
    if isinstance(raw, Mapping):
        return dict(raw)
    if hasattr(raw, "model_dump"):
        return raw.model_dump(mode="json")
    raise TypeError(
        f"Expected a response body mapping or SDK response, got {type(raw).__name__}"
    )
