from __future__ import annotations

import logging

from openrouter_kit.chat.assembler import validate_tools
from openrouter_kit.chat.schema import FunctionTool, ToolDescriptor
from openrouter_kit.errors import DuplicateToolName

from .tool import Tool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Name-keyed set of executable tools.

    Tools are checked on registration with the same rules the request
    assembler applies, so ``descriptors()`` is always safe to send.
    """

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}

    def register(self, tool: Tool) -> None:
        if tool.name in self._tools:
            raise DuplicateToolName(tool.name)
        validate_tools([FunctionTool(function=tool.descriptor())])

        self._tools[tool.name] = tool
        logger.debug("Registered tool: %s", tool.name)

    def get(self, name: str) -> Tool:
        tool = self._tools.get(name)
        if tool is None:
            logger.error("Tool not found: %s", name)
            raise KeyError(f"Tool '{name}' not found")
        return tool

    def remove(self, name: str) -> None:
        if self._tools.pop(name, None) is None:
            logger.error("Cannot remove tool, not found: %s", name)
            raise KeyError(f"Tool '{name}' not found")
        logger.debug("Removed tool: %s", name)

    def list(self) -> dict[str, Tool]:
        # shallow copy; callers may mutate it freely
        return dict(self._tools)

    def descriptors(self) -> list[ToolDescriptor]:
        """Descriptors for every registered tool, in registration order."""
        return [tool.descriptor() for tool in self._tools.values()]
