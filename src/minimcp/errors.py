"""Shared error types for minimcp."""


class MinimcpError(Exception):
    """Base error for all minimcp failures."""


class SchemaError(MinimcpError):
    """Schema generation failed."""


class UnsupportedSchemaType(SchemaError):
    """A type shape that cannot be described, e.g. a mapping with non-string keys."""

    def __init__(self, key_type: object) -> None:
        self.key_type = key_type
        name = getattr(key_type, "__name__", repr(key_type))
        super().__init__(f"Only mappings with string keys are supported, got key type: {name}")


class RegistryError(MinimcpError):
    """Base error for tool registry failures."""


class DuplicateToolError(RegistryError):
    """Two tools were registered under the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool already registered: {name}")


class ConfigError(MinimcpError):
    """Raised when a server config file fails parsing or validation."""
