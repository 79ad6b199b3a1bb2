from __future__ import annotations

import argparse
import logging

from anthropic import Anthropic
from openai import OpenAI

from toolcall_bridge import (
    ToolCallAdapter,
    ToolCallResult,
    ToolChoice,
    ToolInvocation,
    ToolSpec,
    Vendor,
)

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

CALCULATOR = ToolSpec(
    name="calculator",
    description="A simple calculator tool",
    parameters={
        "type": "object",
        "properties": {
            "operation": {
                "enum": ["add", "subtract", "multiply", "divide"],
                "description": "The type of operation to execute",
            },
            "number1": {"type": "number", "description": "The first number to operate on"},
            "number2": {"type": "number", "description": "The second number to operate on"},
        },
        "required": ["operation", "number1", "number2"],
    },
)

_OPERATIONS = {
    "add": lambda a, b: a + b,
    "subtract": lambda a, b: a - b,
    "multiply": lambda a, b: a * b,
    "divide": lambda a, b: a / b,
}


def run_calculator(call: ToolInvocation) -> str:
    args = call.arguments
    return str(_OPERATIONS[args["operation"]](args["number1"], args["number2"]))


def openai_roundtrip(adapter: ToolCallAdapter, model: str, vendor: Vendor) -> None:
    """
    1) Send the prompt with the calculator tool offered
    2) Execute every tool call the model makes
    3) Feed the results back and print the final answer
    """
    client = OpenAI()
    messages: list[dict] = [{"role": "user", "content": "What is 3 * 12? Also, what is 11 + 49?"}]
    fragment = adapter.encode_request([CALCULATOR], ToolChoice.auto(), vendor)

    completion = client.chat.completions.create(model=model, messages=messages, **fragment)
    calls = adapter.extract_tool_calls(completion, vendor)
    if not calls:
        logger.warning("Model answered directly: %s", completion.choices[0].message.content)
        return

    messages.append(completion.choices[0].message.model_dump(exclude_none=True))
    for call in calls:
        result = ToolCallResult.for_invocation(call, run_calculator(call))
        messages.append(adapter.tool_result_message(result, vendor))

    final = client.chat.completions.create(model=model, messages=messages, **fragment)
    logger.info("%s says: %s", vendor, final.choices[0].message.content)


def anthropic_roundtrip(adapter: ToolCallAdapter, model: str) -> None:
    client = Anthropic()
    messages: list[dict] = [{"role": "user", "content": "What is 3 * 12?"}]
    fragment = adapter.encode_request(
        [CALCULATOR], ToolChoice.forced("calculator"), Vendor.ANTHROPIC
    )

    message = client.messages.create(model=model, max_tokens=1024, messages=messages, **fragment)
    calls = adapter.extract_tool_calls(message, Vendor.ANTHROPIC)

    messages.append({"role": "assistant", "content": message.model_dump()["content"]})
    for call in calls:
        result = ToolCallResult.for_invocation(call, run_calculator(call))
        messages.append(adapter.tool_result_message(result, Vendor.ANTHROPIC))

    final = client.messages.create(model=model, max_tokens=1024, messages=messages, tools=fragment["tools"])
    logger.info("Anthropic says: %s", "".join(b.text for b in final.content if b.type == "text"))


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--vendor",
        choices=[Vendor.OPENAI.value, Vendor.ANTHROPIC.value],
        default=Vendor.OPENAI.value,
    )
    parser.add_argument("--model", default="gpt-4o-mini")  # "claude-3-5-haiku-20241022"
    args = parser.parse_args()

    bridge = ToolCallAdapter(logger=logger)
    if args.vendor == Vendor.ANTHROPIC:
        anthropic_roundtrip(bridge, args.model)
    else:
        openai_roundtrip(bridge, args.model, Vendor(args.vendor))
