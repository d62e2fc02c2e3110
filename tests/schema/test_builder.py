"""Tests for the schema builder."""

import json
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Annotated, Any, ClassVar, Literal, Optional

import pytest
from pydantic import BaseModel, Field, computed_field

from minimcp.errors import UnsupportedSchemaType
from minimcp.schema import Constraint, Pattern, Range, Required, build_schema, schema_for_type
from minimcp.schema.builder import describe_fields


class Color(Enum):
    RED = "r"
    GREEN = "g"
    BLUE = "b"


class Scalars(BaseModel):
    flag: bool
    count: int
    ratio: float
    price: Decimal
    label: str


class WithDefaults(BaseModel):
    retries: int = 3
    name: str = "worker"
    enabled: bool = False
    note: Optional[str] = "hi"
    label: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class Priced(BaseModel):
    price: Decimal = Decimal("1.5")


class Collections(BaseModel):
    names: list[str]
    matrix: list[list[int]]
    pair: tuple[int, ...]
    unique: set[str]
    scores: dict[str, float]
    anything: list  # type: ignore[type-arg]


class BadKeys(BaseModel):
    lookup: dict[int, str]


class Choices(BaseModel):
    color: Color
    mode: Literal["fast", "slow"] = "fast"
    maybe_color: Optional[Color] = None


class TreeNode(BaseModel):
    value: int
    parent: "TreeNode | None" = None
    children: list["TreeNode"] = []


class Address(BaseModel):
    street: str
    zip_code: Annotated[str, Pattern(r"^\d{5}$")]


class Person(BaseModel):
    name: str
    home: Address
    work: Optional[Address] = None


@dataclass
class Left:
    right: "Optional[Right]" = None


@dataclass
class Right:
    left: Optional[Left] = None


class Constrained(BaseModel):
    age: Annotated[int, Range(0, 150, error_message="age out of range")]
    code: Annotated[str, Pattern(r"^[A-Z]{3}$", error_message="bad code")]
    stacked: Annotated[int, Range(1, 10, error_message="first"), Constraint(error_message="second")]
    ordered: Annotated[str, Constraint(error_message="custom"), Pattern("^x", error_message="pattern msg")]
    kept: Annotated[int, Range(0, 1, error_message="keep"), Required()]
    floor: Annotated[float, Range(minimum=0)]
    native: int = Field(ge=1, le=5)
    strict: float = Field(gt=0, lt=1)
    slug: str = Field(pattern=r"^[a-z-]+$")
    nickname: Annotated[str, Required()]
    described: str = Field(default="x", description="A described field")


class WithComputed(BaseModel):
    width: int
    height: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass
class Point:
    x: float
    y: float
    label: str = "origin"
    tags: list[str] | None = None
    _hidden: int = 0


class PlainSettings:
    retries: int = 2
    verbose: bool
    VERSION: ClassVar[str] = "1"
    _secret: str = "x"


class TestPrimitiveMapping:
    @pytest.mark.parametrize(
        ("tp", "expected"),
        [
            (bool, "boolean"),
            (int, "integer"),
            (float, "number"),
            (Decimal, "number"),
            (str, "string"),
            (bytes, "string"),
            (datetime, "string"),
            (date, "string"),
            (uuid.UUID, "string"),
            (Path, "string"),
        ],
    )
    def test_leaf_type(self, tp: type, expected: str) -> None:
        assert schema_for_type(tp) == {"type": expected}

    def test_model_scalars(self) -> None:
        schema = build_schema(Scalars)
        assert schema["properties"] == {
            "flag": {"type": "boolean"},
            "count": {"type": "integer"},
            "ratio": {"type": "number"},
            "price": {"type": "number"},
            "label": {"type": "string"},
        }

    def test_value_types_are_required(self) -> None:
        schema = build_schema(Scalars)
        assert schema["required"] == ["flag", "count", "ratio", "price"]

    def test_closed_object_shape(self) -> None:
        schema = build_schema(Scalars)
        assert schema["type"] == "object"
        assert schema["additionalProperties"] is False


class TestOptional:
    def test_optional_unwraps(self) -> None:
        assert schema_for_type(Optional[int]) == {"type": "integer"}
        assert schema_for_type(int | None) == {"type": "integer"}

    def test_optional_value_type_not_required(self) -> None:
        schema = build_schema(Choices)
        assert "maybe_color" not in schema["required"]

    def test_annotated_is_unwrapped(self) -> None:
        assert schema_for_type(Annotated[int, Range(0, 1)]) == {"type": "integer"}


class TestDefaults:
    def test_primitive_defaults_attached(self) -> None:
        props = build_schema(WithDefaults)["properties"]
        assert props["retries"] == {"type": "integer", "default": 3}
        assert props["name"] == {"type": "string", "default": "worker"}
        assert props["enabled"] == {"type": "boolean", "default": False}

    def test_non_primitive_defaults_skipped(self) -> None:
        props = build_schema(WithDefaults)["properties"]
        assert props["note"] == {"type": "string"}
        assert props["tags"] == {"type": "array", "items": {"type": "string"}}

    def test_none_default_skipped(self) -> None:
        props = build_schema(WithDefaults)["properties"]
        assert props["label"] == {"type": "string"}

    def test_defaults_do_not_make_value_types_optional(self) -> None:
        assert build_schema(WithDefaults)["required"] == ["retries", "enabled"]

    def test_decimal_default_is_a_json_number(self) -> None:
        price = build_schema(Priced)["properties"]["price"]
        assert price == {"type": "number", "default": 1.5}
        assert isinstance(price["default"], float)
        assert json.loads(json.dumps(price)) == {"type": "number", "default": 1.5}


class TestCollections:
    def test_arrays(self) -> None:
        props = build_schema(Collections)["properties"]
        assert props["names"] == {"type": "array", "items": {"type": "string"}}
        assert props["matrix"] == {
            "type": "array",
            "items": {"type": "array", "items": {"type": "integer"}},
        }
        assert props["pair"] == {"type": "array", "items": {"type": "integer"}}
        assert props["unique"] == {"type": "array", "items": {"type": "string"}}

    def test_untyped_list_items_fall_back(self) -> None:
        props = build_schema(Collections)["properties"]
        assert props["anything"] == {"type": "array", "items": {"type": "object"}}

    def test_string_keyed_mapping(self) -> None:
        props = build_schema(Collections)["properties"]
        assert props["scores"] == {"type": "object", "additionalProperties": {"type": "number"}}

    def test_bare_dict(self) -> None:
        assert schema_for_type(dict) == {"type": "object", "additionalProperties": {"type": "object"}}

    def test_non_string_keys_raise(self) -> None:
        with pytest.raises(UnsupportedSchemaType, match="int") as exc_info:
            build_schema(BadKeys)
        assert exc_info.value.key_type is int

    def test_strings_are_not_arrays(self) -> None:
        assert schema_for_type(str) == {"type": "string"}


class TestEnums:
    def test_enum_names_in_declaration_order(self) -> None:
        props = build_schema(Choices)["properties"]
        assert props["color"] == {"type": "string", "enum": ["RED", "GREEN", "BLUE"]}

    def test_enum_is_required(self) -> None:
        assert build_schema(Choices)["required"] == ["color"]

    def test_string_literal(self) -> None:
        props = build_schema(Choices)["properties"]
        assert props["mode"] == {"type": "string", "enum": ["fast", "slow"]}

    def test_non_string_literal_falls_back(self) -> None:
        assert schema_for_type(Literal[1, 2]) == {"type": "object"}


class TestNestedObjects:
    def test_nested_model_expanded(self) -> None:
        props = build_schema(Person)["properties"]
        assert props["home"] == {
            "type": "object",
            "properties": {
                "street": {"type": "string"},
                "zip_code": {"type": "string", "pattern": r"^\d{5}$"},
            },
            "required": [],
            "additionalProperties": False,
        }

    def test_sibling_fields_of_same_type_both_expand(self) -> None:
        props = build_schema(Person)["properties"]
        assert props["work"] == props["home"]


class TestCycles:
    def test_self_reference_terminates(self) -> None:
        schema = build_schema(TreeNode)
        assert schema["properties"]["value"] == {"type": "integer"}
        assert schema["properties"]["parent"] == {}
        assert schema["properties"]["children"] == {"type": "array", "items": {}}

    def test_mutual_reference_terminates(self) -> None:
        schema = build_schema(Left)
        right = schema["properties"]["right"]
        assert right["type"] == "object"
        assert right["properties"]["left"] == {}

    def test_visited_type_returns_empty(self) -> None:
        assert build_schema(TreeNode, {TreeNode}) == {}

    def test_visited_set_restored_after_build(self) -> None:
        visited: set[type] = set()
        build_schema(Person, visited)
        assert visited == set()


class TestConstraints:
    def test_range_and_message(self) -> None:
        props = build_schema(Constrained)["properties"]
        assert props["age"] == {
            "type": "integer",
            "minimum": 0,
            "maximum": 150,
            "errorMessage": "age out of range",
        }

    def test_pattern_and_message(self) -> None:
        props = build_schema(Constrained)["properties"]
        assert props["code"] == {"type": "string", "pattern": "^[A-Z]{3}$", "errorMessage": "bad code"}

    def test_last_error_message_wins(self) -> None:
        props = build_schema(Constrained)["properties"]
        assert props["stacked"]["errorMessage"] == "second"
        assert props["ordered"]["errorMessage"] == "pattern msg"

    def test_marker_without_message_keeps_earlier_one(self) -> None:
        props = build_schema(Constrained)["properties"]
        assert props["kept"]["errorMessage"] == "keep"

    def test_half_open_range(self) -> None:
        props = build_schema(Constrained)["properties"]
        assert props["floor"] == {"type": "number", "minimum": 0}

    def test_pydantic_field_bounds(self) -> None:
        props = build_schema(Constrained)["properties"]
        assert props["native"] == {"type": "integer", "minimum": 1, "maximum": 5}
        assert props["strict"] == {"type": "number", "exclusiveMinimum": 0, "exclusiveMaximum": 1}

    def test_pydantic_field_pattern(self) -> None:
        props = build_schema(Constrained)["properties"]
        assert props["slug"] == {"type": "string", "pattern": "^[a-z-]+$"}

    def test_required_marker(self) -> None:
        required = build_schema(Constrained)["required"]
        assert "nickname" in required
        assert "code" not in required
        assert "slug" not in required

    def test_description(self) -> None:
        props = build_schema(Constrained)["properties"]
        assert props["described"] == {"type": "string", "description": "A described field", "default": "x"}


class TestFieldSources:
    def test_computed_fields_are_listed(self) -> None:
        schema = build_schema(WithComputed)
        assert list(schema["properties"]) == ["width", "height", "area"]
        assert schema["properties"]["area"] == {"type": "integer"}
        assert schema["required"] == ["width", "height", "area"]

    def test_dataclass(self) -> None:
        schema = build_schema(Point)
        assert schema["properties"] == {
            "x": {"type": "number"},
            "y": {"type": "number"},
            "label": {"type": "string", "default": "origin"},
            "tags": {"type": "array", "items": {"type": "string"}},
        }
        assert schema["required"] == ["x", "y"]

    def test_plain_class(self) -> None:
        schema = build_schema(PlainSettings)
        assert schema["properties"] == {
            "retries": {"type": "integer", "default": 2},
            "verbose": {"type": "boolean"},
        }
        assert schema["required"] == ["retries", "verbose"]

    def test_describe_fields_order(self) -> None:
        names = [f.name for f in describe_fields(Scalars)]
        assert names == ["flag", "count", "ratio", "price", "label"]


class TestFallback:
    @pytest.mark.parametrize("tp", [Any, object, int | str, None])
    def test_fallback_leaf(self, tp: Any) -> None:
        assert schema_for_type(tp) == {"type": "object"}


class TestInvariants:
    @pytest.mark.parametrize("model", [Scalars, WithDefaults, Collections, Choices, Person, Constrained])
    def test_properties_match_fields(self, model: type[BaseModel]) -> None:
        schema = build_schema(model)
        assert list(schema["properties"]) == list(model.model_fields)
        required = schema["required"]
        assert len(required) == len(set(required))
        assert set(required) <= set(schema["properties"])

    def test_fresh_document_per_call(self) -> None:
        first = build_schema(Person)
        second = build_schema(Person)
        assert first == second
        first["properties"]["home"]["properties"].clear()
        assert build_schema(Person) == second
