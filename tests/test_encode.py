"""Tests for encoding tool declarations and tool choices into vendor requests."""

import pytest

from toolcall_bridge import (
    ErrorKind,
    InvalidToolSpecError,
    MissingDescriptionError,
    ToolChoice,
    ToolSpec,
    UnknownToolError,
    UnsupportedVendorError,
    Vendor,
)


class TestOpenAIEncoding:
    """Test encoding for OpenAI-compatible vendors."""

    def test_calculator_auto(self, adapter, calculator):
        """The documented calculator tool encodes into OpenAI's tools shape."""
        fragment = adapter.encode_request([calculator], ToolChoice.auto(), Vendor.OPENAI)

        assert fragment["tools"][0]["type"] == "function"
        assert fragment["tools"][0]["function"]["name"] == "calculator"
        assert fragment["tools"][0]["function"]["description"] == "A simple calculator tool"
        assert fragment["tools"][0]["function"]["parameters"] == calculator.parameters
        assert fragment.get("tool_choice", "auto") == "auto"

    def test_none_choice(self, adapter, calculator):
        fragment = adapter.encode_request([calculator], ToolChoice.none(), "openai")
        assert fragment["tool_choice"] == "none"

    def test_forced_choice(self, adapter, calculator, weather):
        fragment = adapter.encode_request(
            [calculator, weather], ToolChoice.forced("get_current_weather"), "openai"
        )
        assert fragment["tool_choice"] == {
            "type": "function",
            "function": {"name": "get_current_weather"},
        }

    def test_string_choices_accepted(self, adapter, calculator):
        assert adapter.encode_request([calculator], "none", "openai")["tool_choice"] == "none"
        assert adapter.encode_request([calculator], None, "openai")["tool_choice"] == "auto"

    def test_order_preserved(self, adapter, calculator, weather):
        fragment = adapter.encode_request([weather, calculator], "auto", "togetherai")
        names = [tool["function"]["name"] for tool in fragment["tools"]]
        assert names == ["get_current_weather", "calculator"]

    def test_missing_description_omitted(self, adapter):
        tool = ToolSpec(name="ping")
        fragment = adapter.encode_request([tool], "auto", "openai")
        assert "description" not in fragment["tools"][0]["function"]

    def test_fragment_does_not_alias_schema(self, adapter, calculator):
        fragment = adapter.encode_request([calculator], "auto", "openai")
        fragment["tools"][0]["function"]["parameters"]["properties"].clear()
        assert "operation" in calculator.parameters["properties"]

    def test_mistral_uses_chat_completions_shape(self, adapter, weather):
        fragment = adapter.encode_request([weather], ToolChoice.forced(weather.name), "mistral")
        assert fragment["tools"][0]["function"]["name"] == weather.name
        assert fragment["tool_choice"]["function"]["name"] == weather.name


class TestAnthropicEncoding:
    """Test encoding for Anthropic."""

    def test_declaration_shape(self, adapter, weather):
        fragment = adapter.encode_request([weather], "auto", Vendor.ANTHROPIC)

        assert fragment["tools"] == [
            {
                "name": weather.name,
                "description": weather.description,
                "input_schema": weather.parameters,
            }
        ]
        assert fragment["tool_choice"] == {"type": "auto"}

    def test_choices(self, adapter, weather):
        assert adapter.encode_request([weather], "none", "anthropic")["tool_choice"] == {
            "type": "none"
        }
        forced = adapter.encode_request([weather], ToolChoice.forced(weather.name), "anthropic")
        assert forced["tool_choice"] == {"type": "tool", "name": weather.name}


class TestGoogleEncoding:
    """Test encoding for Gemini and Vertex AI."""

    @pytest.mark.parametrize("vendor", ["gemini", "vertexai"])
    def test_declarations_grouped(self, adapter, weather, vendor):
        fragment = adapter.encode_request([weather], "auto", vendor)

        assert fragment["tools"] == [
            {
                "functionDeclarations": [
                    {
                        "name": weather.name,
                        "description": weather.description,
                        "parameters": weather.parameters,
                    }
                ]
            }
        ]
        assert fragment["toolConfig"] == {"functionCallingConfig": {"mode": "AUTO"}}

    def test_forced_choice(self, adapter, weather):
        fragment = adapter.encode_request([weather], ToolChoice.forced(weather.name), "gemini")
        assert fragment["toolConfig"] == {
            "functionCallingConfig": {
                "mode": "ANY",
                "allowedFunctionNames": [weather.name],
            }
        }

    def test_forced_choice_does_not_leak_between_requests(self, adapter, weather, calculator):
        """Choice templates are copied, never mutated in place."""
        calculator.parameters["properties"]["number1"]["description"] = "First operand"
        calculator.parameters["properties"]["number2"]["description"] = "Second operand"
        calculator.parameters["properties"]["operation"]["description"] = "Operation"

        adapter.encode_request([weather], ToolChoice.forced(weather.name), "gemini")
        fragment = adapter.encode_request(
            [calculator], ToolChoice.forced(calculator.name), "gemini"
        )
        config = fragment["toolConfig"]["functionCallingConfig"]
        assert config["allowedFunctionNames"] == ["calculator"]

    def test_strict_descriptions_enforced(self, adapter, calculator):
        """Gemini rejects parameters without descriptions before any request is sent."""
        with pytest.raises(MissingDescriptionError) as exc_info:
            adapter.encode_request([calculator], "auto", "vertexai")
        assert exc_info.value.kind is ErrorKind.MISSING_DESCRIPTION
        assert exc_info.value.path == "operation"


class TestEncodeErrors:
    """Test error handling in encode_request."""

    @pytest.mark.parametrize("vendor", list(Vendor))
    def test_forced_unknown_tool(self, adapter, weather, vendor):
        with pytest.raises(UnknownToolError) as exc_info:
            adapter.encode_request([weather], ToolChoice.forced("calculator"), vendor)
        assert exc_info.value.kind is ErrorKind.UNKNOWN_TOOL
        assert exc_info.value.name == "calculator"

    @pytest.mark.parametrize("vendor", ["gemini", "vertexai"])
    def test_forced_unknown_tool_checked_before_descriptions(self, adapter, calculator, vendor):
        """An absent forced tool is reported even when the offered tools lack descriptions."""
        with pytest.raises(UnknownToolError) as exc_info:
            adapter.encode_request([calculator], ToolChoice.forced("nope"), vendor)
        assert exc_info.value.kind is ErrorKind.UNKNOWN_TOOL
        assert exc_info.value.offered == ["calculator"]

    def test_forced_with_no_tools(self, adapter):
        with pytest.raises(UnknownToolError):
            adapter.encode_request([], ToolChoice.forced("calculator"), "openai")

    def test_empty_tools_auto(self, adapter):
        assert adapter.encode_request([], "auto", "anthropic") == {}

    def test_empty_tools_none(self, adapter):
        with pytest.raises(InvalidToolSpecError):
            adapter.encode_request([], "none", "openai")

    def test_duplicate_names(self, adapter, calculator):
        with pytest.raises(InvalidToolSpecError, match="Duplicate"):
            adapter.encode_request([calculator, calculator], "auto", "openai")

    def test_unsupported_vendor(self, adapter, calculator):
        with pytest.raises(UnsupportedVendorError) as exc_info:
            adapter.encode_request([calculator], "auto", "cohere")
        assert exc_info.value.kind is ErrorKind.UNSUPPORTED_VENDOR

    def test_invalid_choice_string(self, adapter, calculator):
        with pytest.raises(TypeError):
            adapter.encode_request([calculator], "required", "openai")


class TestRequestRoundTrip:
    """Encoded fragments decode back to the original tools and choice."""

    @pytest.mark.parametrize("vendor", list(Vendor))
    @pytest.mark.parametrize(
        "choice",
        [ToolChoice.auto(), ToolChoice.none(), ToolChoice.forced("get_current_weather")],
    )
    def test_round_trip(self, adapter, weather, vendor, choice):
        second = ToolSpec(
            name="lookup_city",
            description="Find a city by name",
            parameters={
                "type": "object",
                "properties": {"name": {"type": "string", "description": "City name"}},
                "required": ["name"],
            },
        )
        fragment = adapter.encode_request([weather, second], choice, vendor)

        tools, decoded_choice = adapter.decode_request(fragment, vendor)

        assert tools == [weather, second]
        assert decoded_choice == choice

    def test_translate_openai_to_anthropic(self, adapter, calculator):
        openai_fragment = adapter.encode_request(
            [calculator], ToolChoice.forced("calculator"), "openai"
        )

        translated = adapter.translate_request(openai_fragment, "openai", "anthropic")

        assert translated["tools"][0]["input_schema"] == calculator.parameters
        assert translated["tool_choice"] == {"type": "tool", "name": "calculator"}

    def test_decode_request_without_choice_is_auto(self, adapter, calculator):
        fragment = adapter.encode_request([calculator], "auto", "openai")
        del fragment["tool_choice"]
        _, choice = adapter.decode_request(fragment, "openai")
        assert choice == ToolChoice.auto()

    @pytest.mark.parametrize(
        "choice, expected",
        [
            ({"type": "auto", "disable_parallel_tool_use": True}, ToolChoice.auto()),
            ({"type": "none"}, ToolChoice.none()),
            (
                {"type": "tool", "name": "calculator", "disable_parallel_tool_use": True},
                ToolChoice.forced("calculator"),
            ),
        ],
    )
    def test_decode_anthropic_choice_with_options(self, adapter, calculator, choice, expected):
        fragment = adapter.encode_request([calculator], "auto", "anthropic")
        fragment["tool_choice"] = choice
        _, decoded = adapter.decode_request(fragment, "anthropic")
        assert decoded == expected

    def test_translate_anthropic_request_with_options(self, adapter, calculator):
        fragment = adapter.encode_request([calculator], "auto", "anthropic")
        fragment["tool_choice"]["disable_parallel_tool_use"] = True

        translated = adapter.translate_request(fragment, "anthropic", "openai")

        assert translated["tool_choice"] == "auto"
        assert translated["tools"][0]["function"]["name"] == "calculator"

    def test_decode_gemini_choice_by_mode(self, adapter, weather):
        fragment = adapter.encode_request([weather], "none", "gemini")
        fragment["toolConfig"]["functionCallingConfig"]["allowedFunctionNames"] = []
        _, decoded = adapter.decode_request(fragment, "gemini")
        assert decoded == ToolChoice.none()

    def test_decode_request_unknown_choice(self, adapter, calculator):
        fragment = adapter.encode_request([calculator], "auto", "openai")
        fragment["tool_choice"] = "required"
        with pytest.raises(InvalidToolSpecError):
            adapter.decode_request(fragment, "openai")
