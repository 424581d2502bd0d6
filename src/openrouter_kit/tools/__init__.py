from .tool import Tool
from .tool_engine import ToolEngine
from .tool_registry import ToolRegistry

__all__ = [
    "Tool",
    "ToolEngine",
    "ToolRegistry",
]
