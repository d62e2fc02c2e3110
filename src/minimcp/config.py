"""Server configuration — pydantic models and the YAML loader behind ``minimcp serve --config``."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from minimcp.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    export_to_console: bool = False
    otlp_endpoint: str | None = None


class ServerConfig(BaseModel):
    """Top-level server configuration parsed from YAML."""

    name: str = "minimcp"
    log_level: LogLevel = "WARNING"
    log_file: str | None = None
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)


class ConfigLoader:
    """Load and validate a YAML config file into a :class:`ServerConfig`."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def load(self) -> ServerConfig:
        """Read YAML, interpolate env vars, and validate.

        Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
        using :func:`os.path.expandvars` before YAML parsing.  An empty file
        yields the defaults.

        Raises:
            ConfigError: On read errors, YAML parse errors or validation failures.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read {self._path}: {exc}") from exc

        expanded = os.path.expandvars(raw)

        try:
            data: Any = yaml.safe_load(expanded)
        except yaml.YAMLError as exc:
            raise ConfigError(f"YAML parse error: {exc}") from exc

        if data is None:
            return ServerConfig()
        if not isinstance(data, dict):
            raise ConfigError("Config YAML must be a mapping")

        try:
            return ServerConfig.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
