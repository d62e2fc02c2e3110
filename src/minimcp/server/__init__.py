"""JSON-RPC server — wire models, request routing, and the stdio transport loop."""

from minimcp.server.models import (
    JsonRpcRequest,
    JsonRpcResponse,
    ToolCallParams,
    TransportError,
)
from minimcp.server.router import RequestRouter
from minimcp.server.transport import StdioServer

__all__ = [
    "JsonRpcRequest",
    "JsonRpcResponse",
    "RequestRouter",
    "StdioServer",
    "ToolCallParams",
    "TransportError",
]
