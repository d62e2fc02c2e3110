"""OpenTelemetry tracing for minimcp.

Every request is wrapped in an ``rpc.request`` span and every tool run in a
``tool.execute`` span.  Without a configured SDK the API hands out no-op
tracers, so these spans cost nothing unless ``serve --telemetry`` (or
``telemetry.enabled`` in the config file) installs a provider.

Usage::

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("rpc.request") as span:
        span.set_attribute(ATTR_RPC_METHOD, request.method)
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

from opentelemetry import trace

if TYPE_CHECKING:
    from minimcp.config import TelemetrySettings

ATTR_RPC_METHOD = "minimcp.rpc.method"
ATTR_RPC_ID = "minimcp.rpc.id"
ATTR_TOOL_NAME = "minimcp.tool.name"

_INSTRUMENTATION_NAME = "minimcp"


def get_tracer(name: str | None = None) -> trace.Tracer:
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(settings: TelemetrySettings, *, service_name: str = _INSTRUMENTATION_NAME) -> None:
    """Install a global tracer provider exporting spans as *settings* asks.

    Console spans go to stderr; stdout is reserved for protocol lines.
    Raises ``ImportError`` when the ``otel`` extra is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            ConsoleSpanExporter,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = "opentelemetry-sdk is required for telemetry. Install it with: pip install minimcp[otel]"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    if settings.export_to_console:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stderr)))
    if settings.otlp_endpoint:
        provider.add_span_processor(BatchSpanProcessor(_otlp_exporter(settings.otlp_endpoint)))

    trace.set_tracer_provider(provider)


def _otlp_exporter(endpoint: str) -> Any:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        msg = "opentelemetry-exporter-otlp is required for telemetry.otlp_endpoint. Install minimcp[otel]"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=endpoint)
