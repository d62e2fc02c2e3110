"""minimcp — a line-delimited JSON-RPC tool server with schema generation."""

from __future__ import annotations

__version__ = "0.1.0"
