import pytest

from toolcall_bridge import ToolCallAdapter, ToolSpec


@pytest.fixture
def adapter():
    """Create a ToolCallAdapter instance for testing."""
    return ToolCallAdapter()


@pytest.fixture(autouse=True)
def no_vendor_env(monkeypatch):
    """Keep a developer's TOOLCALL_VENDOR from leaking into tests."""
    monkeypatch.delenv("TOOLCALL_VENDOR", raising=False)


@pytest.fixture
def calculator():
    return ToolSpec(
        name="calculator",
        description="A simple calculator tool",
        parameters={
            "type": "object",
            "properties": {
                "operation": {"enum": ["add", "subtract", "multiply", "divide"]},
                "number1": {"type": "number"},
                "number2": {"type": "number"},
            },
            "required": ["operation", "number1", "number2"],
        },
    )


@pytest.fixture
def weather():
    return ToolSpec(
        name="get_current_weather",
        description="Get the current weather in a given location",
        parameters={
            "type": "object",
            "properties": {
                "location": {
                    "type": "string",
                    "description": "The city and state, e.g. San Francisco, CA",
                },
                "unit": {
                    "type": "string",
                    "enum": ["celsius", "fahrenheit"],
                    "description": "Temperature unit",
                },
            },
            "required": ["location"],
        },
    )
