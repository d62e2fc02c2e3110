"""Tool protocol — the contract every invokable tool satisfies.

A tool has a unique ``name``, a free-text ``description``, an input schema
derived from its request model, and an ``execute`` method taking the raw
``arguments`` value from a ``tools/call`` request.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel


@runtime_checkable
class Tool(Protocol):
    """A named capability with a declared input shape."""

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    def input_schema(self) -> dict[str, Any]:
        """Return the object schema describing the tool's arguments."""
        ...

    def execute(self, arguments: Any) -> Any:
        """Run the tool.  Whatever is returned becomes the JSON-RPC ``result``."""
        ...


class ToolDescriptor(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    name: str
    description: str = ""
    input_schema: dict[str, Any] = {}
