import inspect
import json
import logging
from collections.abc import Sequence
from time import monotonic
from typing import Any

from pydantic import BaseModel

from openrouter_kit.chat.base import Message, Role, ToolCall
from openrouter_kit.observability import names
from openrouter_kit.observability.base import MetricsHook, NoOpMetricsHook

from .tool_registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolEngine:
    """Runs the tool calls a model emits against registered handlers."""

    def __init__(
        self,
        tool_registry: ToolRegistry,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.tool_registry = tool_registry
        self.metrics_hook = metrics_hook

    async def call_tool(self, tool_call: ToolCall) -> Any:
        logger.debug("Calling tool: %s", tool_call.function_name)
        start = monotonic()
        tool = self.tool_registry.get(tool_call.function_name)
        validated_args = tool.input_schema(**tool_call.parsed_arguments())

        try:
            # Check if handler is async
            if inspect.iscoroutinefunction(tool.handler):
                result = await tool.handler(validated_args)
            else:
                result = tool.handler(validated_args)
        except Exception:
            self.metrics_hook.increment(
                names.TOOL_ERRORS_TOTAL, labels={"tool": tool_call.function_name}
            )
            raise

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.TOOL_CALL_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.TOOL_CALLS_TOTAL, labels={"tool": tool_call.function_name}
        )
        return result

    async def run_tool_calls(self, tool_calls: Sequence[ToolCall]) -> list[Message]:
        """Run calls one after another, in emission order.

        Returns:
            One tool-role message per call, in the same order, ready to be
            appended to the conversation for the next request.
        """
        messages = []
        for tool_call in tool_calls:
            result = await self.call_tool(tool_call)
            messages.append(
                Message(
                    role=Role.TOOL,
                    content=_render_result(result),
                    name=tool_call.function_name,
                    tool_call_id=tool_call.id,
                )
            )
        return messages


def _render_result(result: Any) -> str:
    if isinstance(result, str):
        return result
    if isinstance(result, BaseModel):
        return result.model_dump_json()
    return json.dumps(result, default=str)
