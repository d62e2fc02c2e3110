"""Declarative validation markers attached to fields via ``typing.Annotated``.

The schema builder reads these to emit ``minimum``/``maximum``, ``pattern``,
``errorMessage`` and the ``required`` list.  They describe constraints only;
nothing here validates input.

Usage::

    class Booking(BaseModel):
        seats: Annotated[int, Range(1, 8, error_message="1 to 8 seats")]
        code: Annotated[str, Pattern(r"^[A-Z]{3}$"), Required()]
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Constraint:
    """Base marker.  Any subclass may carry a custom ``error_message``."""

    error_message: str | None = field(default=None, kw_only=True)


@dataclass(frozen=True)
class Range(Constraint):
    """Inclusive numeric range."""

    minimum: float | None = None
    maximum: float | None = None


@dataclass(frozen=True)
class Pattern(Constraint):
    """Regular expression the string value should match."""

    regex: str


@dataclass(frozen=True)
class Required(Constraint):
    """Marks a field as required regardless of its type."""
