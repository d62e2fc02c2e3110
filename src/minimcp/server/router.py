"""RequestRouter — maps JSON-RPC methods onto the tool registry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from minimcp.server.models import JsonRpcRequest, JsonRpcResponse, ToolCallParams
from minimcp.utils.telemetry import ATTR_RPC_ID, ATTR_RPC_METHOD, get_tracer

if TYPE_CHECKING:
    from minimcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

INVALID_TOOL_CALL = "Invalid tool call"
UNKNOWN_METHOD = "Unknown method"


class RequestRouter:
    """Dispatches a request by ``method`` and wraps the outcome in a response.

    - ``tools/list`` → ``{"tools": [...]}``
    - ``tools/call`` → the tool's result, or a descriptive string when the
      call is malformed or names an unknown tool
    - anything else → ``{"message": "Unknown method"}``

    The router never fills ``error``; only faults raised by a tool escape.
    """

    def __init__(self, registry: ToolRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def handle(self, request: JsonRpcRequest) -> JsonRpcResponse:
        with _tracer.start_as_current_span("rpc.request") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            span.set_attribute(ATTR_RPC_ID, request.id)
            logger.debug("Handling %s (id=%s)", request.method, request.id)

            result: Any
            if request.method == "tools/list":
                result = {"tools": [tool.model_dump() for tool in self._registry.list_tools()]}
            elif request.method == "tools/call":
                result = self._handle_tool_call(request)
            else:
                logger.warning("Unknown method: %s", request.method)
                result = {"message": UNKNOWN_METHOD}

        return JsonRpcResponse(id=request.id, result=result)

    def _handle_tool_call(self, request: JsonRpcRequest) -> Any:
        params = parse_tool_call(request)
        if params is None or not params.name:
            logger.warning("Invalid tool call (id=%s)", request.id)
            return INVALID_TOOL_CALL
        return self._registry.execute(params.name, params.arguments)


def parse_tool_call(request: JsonRpcRequest) -> ToolCallParams | None:
    """Read ``name`` and ``arguments`` from the request params.

    Returns ``None`` when ``params`` is missing, not an object, or has a
    ``name`` that is not a string.  ``arguments`` is passed through as-is.
    """
    if not isinstance(request.params, dict):
        return None
    try:
        return ToolCallParams.model_validate(request.params)
    except ValidationError:
        return None
