"""Schema builder — turns a Python type into a JSON Schema-like document.

Handles pydantic models, dataclasses, TypedDicts and annotated plain classes,
recursing through optionals, collections, enums, string-keyed mappings and
polymorphic contracts.  Field constraints come from ``Annotated`` metadata
(see :mod:`minimcp.schema.constraints`) and from pydantic's own ``Field``
bounds.

Self-referencing types do not recurse forever: a type already being
expanded further up the current chain is described as ``{}``.

Usage::

    class SumRequest(BaseModel):
        a: int
        b: int

    build_schema(SumRequest)
    # {"type": "object",
    #  "properties": {"a": {"type": "integer"}, "b": {"type": "integer"}},
    #  "required": ["a", "b"],
    #  "additionalProperties": False}
"""

from __future__ import annotations

import collections
import collections.abc
import dataclasses
import datetime
import types
import typing
import uuid
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Annotated, Any, ClassVar, Literal, Union

import annotated_types
from pydantic import BaseModel
from pydantic_core import PydanticUndefined

from minimcp.errors import UnsupportedSchemaType
from minimcp.schema.constraints import Constraint, Pattern, Range, Required
from minimcp.schema.variants import VariantRegistry, default_variants

SchemaNode = dict[str, Any]

_PRIMITIVES: dict[type, str] = {
    bool: "boolean",
    int: "integer",
    float: "number",
    Decimal: "number",
    str: "string",
    bytes: "string",
    datetime.datetime: "string",
    datetime.date: "string",
    datetime.time: "string",
    uuid.UUID: "string",
}

# Types that can never hold an absent value unless wrapped in ``| None``.
_VALUE_TYPES = frozenset({bool, int, float, Decimal, datetime.datetime, datetime.date, datetime.time})

_SEQUENCE_ORIGINS = frozenset(
    {
        list,
        tuple,
        set,
        frozenset,
        collections.deque,
        collections.abc.Iterable,
        collections.abc.Collection,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
    }
)

_MAPPING_ORIGINS = frozenset(
    {
        dict,
        collections.OrderedDict,
        collections.defaultdict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    }
)


@dataclasses.dataclass(frozen=True)
class FieldDescription:
    """One publicly readable field of a structured type."""

    name: str
    annotation: Any
    metadata: tuple[Any, ...] = ()
    default: Any = None
    description: str | None = None


class SchemaBuilder:
    """Generates schema nodes, resolving polymorphic contracts through *variants*."""

    def __init__(self, variants: VariantRegistry | None = None) -> None:
        self._variants = variants or default_variants

    def build(self, tp: type, visited: set[type] | None = None) -> SchemaNode:
        """Describe a structured type as a closed ``object`` node."""
        if visited is None:
            visited = set()
        if tp in visited:
            return {}

        visited.add(tp)
        try:
            properties: dict[str, SchemaNode] = {}
            required: list[str] = []

            for field in describe_fields(tp):
                node = self.generate(field.annotation, visited)
                if node:
                    _apply_constraints(node, field.metadata)
                    if field.description:
                        node["description"] = field.description
                    if field.default is not None and _is_primitive(field.annotation):
                        node["default"] = _json_default(field.default)

                if _is_required(field):
                    required.append(field.name)
                properties[field.name] = node
        finally:
            visited.discard(tp)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
            "additionalProperties": False,
        }

    def generate(self, tp: Any, visited: set[type] | None = None) -> SchemaNode:
        """Describe any supported type.  Unknown shapes fall back to ``{"type": "object"}``."""
        if visited is None:
            visited = set()

        tp = _strip_annotated(tp)
        if tp is Any:
            return {"type": "object"}

        origin = typing.get_origin(tp)
        args = typing.get_args(tp)

        if origin is Union or origin is types.UnionType:
            members = [arg for arg in args if arg is not type(None)]
            if len(members) == 1:
                return self.generate(members[0], visited)
            return {"type": "object"}

        if tp in _PRIMITIVES:
            return {"type": _PRIMITIVES[tp]}

        if isinstance(tp, type) and issubclass(tp, PurePath):
            return {"type": "string"}

        if (origin or tp) in _SEQUENCE_ORIGINS:
            item = args[0] if args else Any
            return {"type": "array", "items": self.generate(item, visited)}

        if isinstance(tp, type) and issubclass(tp, Enum):
            return {"type": "string", "enum": [member.name for member in tp]}

        if origin is Literal and args and all(isinstance(arg, str) for arg in args):
            return {"type": "string", "enum": list(args)}

        if (origin or tp) in _MAPPING_ORIGINS:
            key, value = args if len(args) == 2 else (str, Any)
            if not (isinstance(key, type) and issubclass(key, str)):
                raise UnsupportedSchemaType(key)
            return {"type": "object", "additionalProperties": self.generate(value, visited)}

        if self._variants.is_contract(tp):
            return {
                "oneOf": [
                    {"type": "object", "properties": self.build(variant, visited)}
                    for variant in self._variants.variants(tp)
                ]
            }

        if _is_structured(tp):
            return self.build(tp, visited)

        return {"type": "object"}


_default_builder = SchemaBuilder()


def build_schema(tp: type, visited: set[type] | None = None) -> SchemaNode:
    """Build the object schema for *tp* with the default variant registry."""
    return _default_builder.build(tp, visited)


def schema_for_type(tp: Any, visited: set[type] | None = None) -> SchemaNode:
    """Generate the schema node for any type with the default variant registry."""
    return _default_builder.generate(tp, visited)


# ---------------------------------------------------------------------------
# Field discovery
# ---------------------------------------------------------------------------


def describe_fields(tp: type) -> list[FieldDescription]:
    """Return the publicly readable fields of *tp* in declaration order."""
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return _model_fields(tp)
    if dataclasses.is_dataclass(tp):
        return _dataclass_fields(tp)
    return _annotated_fields(tp)


def _model_fields(tp: type[BaseModel]) -> list[FieldDescription]:
    fields: list[FieldDescription] = []
    for name, info in tp.model_fields.items():
        if name.startswith("_"):
            continue
        if info.default is not PydanticUndefined:
            default = info.default
        elif info.default_factory is not None and not info.default_factory_takes_validated_data:
            default = info.default_factory()  # type: ignore[call-arg]
        else:
            default = None
        fields.append(
            FieldDescription(
                name=name,
                annotation=info.annotation,
                metadata=tuple(info.metadata),
                default=default,
                description=info.description,
            )
        )
    for name, computed in tp.model_computed_fields.items():
        if name.startswith("_"):
            continue
        fields.append(
            FieldDescription(name=name, annotation=computed.return_type, description=computed.description)
        )
    return fields


def _dataclass_fields(tp: type) -> list[FieldDescription]:
    hints = typing.get_type_hints(tp, include_extras=True)
    fields: list[FieldDescription] = []
    for field in dataclasses.fields(tp):
        if field.name.startswith("_"):
            continue
        annotation, metadata = _split_annotated(hints.get(field.name, Any))
        if field.default is not dataclasses.MISSING:
            default = field.default
        elif field.default_factory is not dataclasses.MISSING:
            default = field.default_factory()
        else:
            default = None
        fields.append(FieldDescription(name=field.name, annotation=annotation, metadata=metadata, default=default))
    return fields


def _annotated_fields(tp: type) -> list[FieldDescription]:
    hints = typing.get_type_hints(tp, include_extras=True)
    fields: list[FieldDescription] = []
    for name, hint in hints.items():
        if name.startswith("_") or typing.get_origin(hint) is ClassVar:
            continue
        annotation, metadata = _split_annotated(hint)
        fields.append(
            FieldDescription(name=name, annotation=annotation, metadata=metadata, default=getattr(tp, name, None))
        )
    return fields


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _split_annotated(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    if typing.get_origin(hint) is Annotated:
        return hint.__origin__, tuple(hint.__metadata__)
    return hint, ()


def _strip_annotated(hint: Any) -> Any:
    return _split_annotated(hint)[0]


def _is_primitive(annotation: Any) -> bool:
    return _strip_annotated(annotation) in _PRIMITIVES


def _json_default(value: Any) -> Any:
    # Keeps ``number`` defaults numeric on the wire.
    if isinstance(value, Decimal):
        return float(value)
    return value


def _is_required(field: FieldDescription) -> bool:
    if any(isinstance(item, Required) for item in field.metadata):
        return True
    annotation = _strip_annotated(field.annotation)
    if annotation in _VALUE_TYPES:
        return True
    return isinstance(annotation, type) and issubclass(annotation, Enum)


def _is_structured(tp: Any) -> bool:
    return isinstance(tp, type) and tp.__module__ != "builtins"


def _apply_constraints(node: SchemaNode, metadata: tuple[Any, ...]) -> None:
    """Copy range, pattern and error-message metadata onto *node*."""
    for item in metadata:
        if isinstance(item, Range):
            if item.minimum is not None:
                node["minimum"] = item.minimum
            if item.maximum is not None:
                node["maximum"] = item.maximum
        elif isinstance(item, annotated_types.Ge):
            node["minimum"] = item.ge
        elif isinstance(item, annotated_types.Le):
            node["maximum"] = item.le
        elif isinstance(item, annotated_types.Gt):
            node["exclusiveMinimum"] = item.gt
        elif isinstance(item, annotated_types.Lt):
            node["exclusiveMaximum"] = item.lt

    for item in metadata:
        if isinstance(item, Pattern):
            node["pattern"] = item.regex
            break
        pattern = getattr(item, "pattern", None)
        if isinstance(pattern, str):
            node["pattern"] = pattern
            break

    # Last message in declaration order wins.
    for item in metadata:
        if isinstance(item, Constraint) and item.error_message:
            node["errorMessage"] = item.error_message
