# formwright/schema/__init__.py

from formwright.schema.loader import (
    list_bundled_schemas,
    load_bundled_schema,
    load_schema,
    load_schema_text,
    parse_schema,
)
from formwright.schema.models import Branch, Conditional, FieldDef, FieldType, Schema

__all__ = [
    "Branch",
    "Conditional",
    "FieldDef",
    "FieldType",
    "Schema",
    "list_bundled_schemas",
    "load_bundled_schema",
    "load_schema",
    "load_schema_text",
    "parse_schema",
]
