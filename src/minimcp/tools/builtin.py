"""Example tools: current server time and integer addition."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from minimcp.schema import build_schema

DEFAULT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class TimeRequest(BaseModel):
    """Arguments accepted by ``get_time``."""

    Format: str = Field(default=DEFAULT_TIME_FORMAT, description="strftime format for the result")


class SumRequest(BaseModel):
    """Arguments accepted by ``calculate_sum``."""

    a: int
    b: int


class TimeTool:
    """Returns the current server time, formatted with ``Format`` if given."""

    name = "get_time"
    description = "Returns current server time"

    def input_schema(self) -> dict[str, Any]:
        return build_schema(TimeRequest)

    def execute(self, arguments: Any) -> Any:
        fmt = DEFAULT_TIME_FORMAT
        if isinstance(arguments, dict) and isinstance(arguments.get("Format"), str):
            fmt = arguments["Format"]
        return {"current_time": datetime.now().strftime(fmt)}


class SumTool:
    """Adds the integers ``a`` and ``b``.

    Both operands must be JSON integers.  Anything else raises
    ``ValidationError``, which the transport reports as an error line.
    """

    name = "calculate_sum"
    description = "Adds two numbers"

    def input_schema(self) -> dict[str, Any]:
        return build_schema(SumRequest)

    def execute(self, arguments: Any) -> Any:
        if arguments is None:
            return "Invalid params"
        request = SumRequest.model_validate(arguments, strict=True)
        return request.a + request.b
