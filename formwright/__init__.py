# formwright/__init__.py
"""
formwright: schema-driven conditional forms.

Usage:
    from formwright import FormInterpreter, ConsoleInputSource, load_bundled_schema

    schema = load_bundled_schema("source")
    config = FormInterpreter(ConsoleInputSource()).run(schema)
"""

from formwright.config import FormConfig, load_form_config
from formwright.exceptions import (
    ConfigNotFoundError,
    FormAborted,
    FormwrightError,
    SchemaError,
    ValidationError,
)
from formwright.interpreter import ConfigValue, FormInterpreter, run_form
from formwright.output import dump_config
from formwright.schema import (
    Branch,
    Conditional,
    FieldDef,
    FieldType,
    Schema,
    list_bundled_schemas,
    load_bundled_schema,
    load_schema,
    load_schema_text,
    parse_schema,
)
from formwright.sources import (
    SKIP,
    ConsoleInputSource,
    FieldPrompt,
    InputSource,
    MappingInputSource,
    ScriptedInputSource,
)

__version__ = "0.1.0"

__all__ = [
    "SKIP",
    "Branch",
    "ConfigNotFoundError",
    "ConfigValue",
    "Conditional",
    "ConsoleInputSource",
    "FieldDef",
    "FieldPrompt",
    "FieldType",
    "FormAborted",
    "FormConfig",
    "FormInterpreter",
    "FormwrightError",
    "InputSource",
    "MappingInputSource",
    "Schema",
    "SchemaError",
    "ScriptedInputSource",
    "ValidationError",
    "dump_config",
    "list_bundled_schemas",
    "load_bundled_schema",
    "load_form_config",
    "load_schema",
    "load_schema_text",
    "parse_schema",
    "run_form",
]
