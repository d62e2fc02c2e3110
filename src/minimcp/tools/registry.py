"""ToolRegistry — name-to-tool bindings fixed at construction."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from minimcp.errors import DuplicateToolError
from minimcp.tools.base import Tool, ToolDescriptor
from minimcp.utils.telemetry import ATTR_TOOL_NAME, get_tracer

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class ToolRegistry:
    """Holds tools in registration order and executes them by name.

    The registry is read-only after construction.

    Usage::

        registry = ToolRegistry([TimeTool(), SumTool()])

        registry.list_tools()                        # descriptors, fresh schemas
        registry.execute("calculate_sum", {"a": 1, "b": 2})
    """

    def __init__(self, tools: Iterable[Tool] = ()) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise DuplicateToolError(tool.name)
            self._tools[tool.name] = tool

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(self._tools.values())

    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def list_tools(self) -> list[ToolDescriptor]:
        """Describe every tool.  Input schemas are recomputed on each call."""
        return [
            ToolDescriptor(
                name=tool.name,
                description=tool.description,
                input_schema=tool.input_schema(),
            )
            for tool in self._tools.values()
        ]

    def execute(self, name: str, arguments: Any) -> Any:
        """Run the named tool and return its result unchanged.

        An unknown name yields a descriptive string instead of raising.
        Exceptions raised by the tool itself propagate.
        """
        tool = self._tools.get(name)
        if tool is None:
            logger.warning("Tool not found: %s", name)
            return f"Tool '{name}' not found"

        with _tracer.start_as_current_span("tool.execute") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            logger.debug("Executing tool %s", name)
            return tool.execute(arguments)
