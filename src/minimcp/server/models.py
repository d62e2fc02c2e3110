"""JSON-RPC 2.0 envelopes and tool payloads exchanged over the stdio transport.

Implements the message format used for tool discovery (``tools/list``) and
execution (``tools/call``).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_serializer, model_validator

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request message.

    ``params`` is kept as raw JSON data; the router decides how to read it.
    Numeric ids are accepted and normalised to strings.
    Top-level keys match case-insensitively, so ``"Method"`` reads as
    ``method``.
    """

    jsonrpc: str = "2.0"
    method: str = ""
    params: Any = None
    id: str = ""

    @model_validator(mode="before")
    @classmethod
    def _fold_key_case(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key.lower() if isinstance(key, str) else key: value for key, value in data.items()}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message.

    ``result`` is always written; ``error`` only when populated.
    """

    jsonrpc: str = "2.0"
    id: str = ""
    result: Any = None
    error: Any = None

    @model_serializer(mode="wrap")
    def _omit_empty_error(self, handler: Any) -> dict[str, Any]:
        data: dict[str, Any] = handler(self)
        if self.error is None:
            data.pop("error", None)
        return data


class TransportError(BaseModel):
    """Error line written when a request could not be parsed or processed.

    Carries no ``id`` — that distinguishes it from a routed response.
    """

    jsonrpc: str = "2.0"
    error: str


# ---------------------------------------------------------------------------
# Tool payloads
# ---------------------------------------------------------------------------


class ToolCallParams(BaseModel):
    """The ``params`` object of a ``tools/call`` request."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    arguments: Any = None

