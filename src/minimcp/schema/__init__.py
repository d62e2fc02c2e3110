"""Schema generation — describe Python types as JSON Schema-like documents."""

from minimcp.schema.builder import SchemaBuilder, SchemaNode, build_schema, schema_for_type
from minimcp.schema.constraints import Constraint, Pattern, Range, Required
from minimcp.schema.variants import VariantRegistry, default_variants, register_variant

__all__ = [
    "Constraint",
    "Pattern",
    "Range",
    "Required",
    "SchemaBuilder",
    "SchemaNode",
    "VariantRegistry",
    "build_schema",
    "default_variants",
    "register_variant",
    "schema_for_type",
]
