"""Re-target a tool request written for one vendor at every other vendor."""

from __future__ import annotations

import json

from toolcall_bridge import ToolBridgeError, Vendor, translate_request

OPENAI_WEATHER_REQUEST: dict[str, object] = {
    "tools": [
        {
            "type": "function",
            "function": {
                "name": "get_current_weather",
                "description": "Get the current weather in a given location",
                "parameters": {
                    "type": "object",
                    "properties": {
                        "location": {
                            "type": "string",
                            "description": "The city and state, e.g. San Francisco, CA",
                        },
                    },
                    "required": ["location"],
                },
            },
        }
    ],
    "tool_choice": {"type": "function", "function": {"name": "get_current_weather"}},
}


if __name__ == "__main__":
    for vendor in Vendor:
        try:
            fragment = translate_request(OPENAI_WEATHER_REQUEST, Vendor.OPENAI, vendor)
        except ToolBridgeError as exc:
            print(f"{vendor}: {exc.kind}: {exc}")
            continue
        print(f"--- {vendor}")
        print(json.dumps(fragment, indent=2))
