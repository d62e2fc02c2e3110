"""Tools — the tool protocol, the registry, and the bundled example tools."""

from minimcp.tools.base import Tool, ToolDescriptor
from minimcp.tools.builtin import SumTool, TimeTool
from minimcp.tools.registry import ToolRegistry

__all__ = [
    "SumTool",
    "TimeTool",
    "Tool",
    "ToolDescriptor",
    "ToolRegistry",
    "default_registry",
]


def default_registry() -> ToolRegistry:
    """Return a registry holding the bundled tools."""
    return ToolRegistry([TimeTool(), SumTool()])
