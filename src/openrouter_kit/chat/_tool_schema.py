# src/openrouter_kit/chat/_tool_schema.py

"""Internal module for converting tool definitions to the wire schema.

This is infrastructure, not behavior. Pure data transformation.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Union

from openrouter_kit.errors import InvalidToolSchema

from .schema import FunctionTool, ToolDescriptor

if TYPE_CHECKING:
    from openrouter_kit.tools.tool import Tool

ToolLike = Union[FunctionTool, ToolDescriptor, "Tool"]


def tools_to_openrouter_schema(tools: Sequence[ToolLike]) -> list[FunctionTool]:
    """Convert tool definitions to the function calling format.

    Args:
        tools: Wire-ready ``FunctionTool`` values, bare ``ToolDescriptor``
            values, or executable ``Tool`` objects.

    Returns:
        List of ``FunctionTool`` values in input order.
    """
    result: list[FunctionTool] = []
    for tool in tools:
        if isinstance(tool, FunctionTool):
            result.append(tool)
        elif isinstance(tool, ToolDescriptor):
            result.append(FunctionTool(function=tool))
        elif hasattr(tool, "descriptor"):
            result.append(FunctionTool(function=tool.descriptor()))
        else:
            raise InvalidToolSchema(repr(tool), "unsupported tool definition")
    return result
