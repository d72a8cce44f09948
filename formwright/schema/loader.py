# formwright/schema/loader.py
"""
Schema loader.

Loads YAML form schemas and validates them against the pydantic models.
Malformed schemas fail fast with a SchemaError; no interpreter ever sees
a half-valid tree.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from formwright.exceptions import SchemaError
from formwright.logging.logger import get_logger
from formwright.logging.tags import SCHEMA
from formwright.schema.models import Schema

logger = get_logger(__name__)

# Schemas shipped with the package (formwright/schemas/*.yaml)
BUNDLED_SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"


# =============================================================================
# Internal Helpers
# =============================================================================


def _check_acyclic(node: Any, trail: List[int], where: str) -> None:
    """
    Reject self-referencing YAML (anchors that contain their own alias).

    Shared, non-recursive aliases are fine; only a container that appears
    inside itself is a cycle.
    """
    if not isinstance(node, (dict, list)):
        return
    if id(node) in trail:
        raise SchemaError("schema contains a reference cycle", source=where)

    trail.append(id(node))
    children = node.values() if isinstance(node, dict) else node
    for child in children:
        _check_acyclic(child, trail, where)
    trail.pop()


def _parse_yaml(text: str, where: str) -> dict:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SchemaError(f"invalid YAML syntax: {e}", source=where) from e

    if not isinstance(data, dict):
        raise SchemaError(
            f"schema must be a mapping, got {type(data).__name__}", source=where
        )
    return data


# =============================================================================
# Public API
# =============================================================================


def parse_schema(data: dict, source: Optional[str] = None) -> Schema:
    """
    Validate an already-parsed schema document.

    Args:
        data: Mapping with a top-level ``fields`` key
        source: Where the data came from, used in error messages

    Returns:
        Validated, frozen Schema

    Raises:
        SchemaError: If the document is malformed
    """
    where = source or "<mapping>"
    _check_acyclic(data, [], where)

    try:
        schema = Schema.model_validate(data)
    except PydanticValidationError as e:
        raise SchemaError("schema failed validation", source=where, errors=e.errors()) from e

    logger.debug(f"{SCHEMA} Loaded schema from {where} ({len(schema.fields)} root fields)")
    return schema


def load_schema_text(text: str, source: Optional[str] = None) -> Schema:
    """Parse and validate a YAML schema given as text."""
    where = source or "<string>"
    return parse_schema(_parse_yaml(text, where), source=where)


def load_schema(path: str | Path) -> Schema:
    """Load and validate a YAML schema file."""
    path = Path(path)
    if not path.exists():
        raise SchemaError(f"schema file not found: {path}")

    logger.debug(f"{SCHEMA} Reading schema file {path}")
    text = path.read_text(encoding="utf-8")
    return load_schema_text(text, source=str(path))


@lru_cache(maxsize=16)
def load_bundled_schema(name: str) -> Schema:
    """
    Load a schema shipped with formwright by name (e.g. "source").

    Results are cached; schemas are frozen so sharing them is safe.
    """
    path = BUNDLED_SCHEMAS_DIR / f"{name}.yaml"
    if not path.exists():
        available = sorted(p.stem for p in BUNDLED_SCHEMAS_DIR.glob("*.yaml"))
        raise SchemaError(f"unknown bundled schema {name!r}; available: {available}")
    return load_schema(path)


def list_bundled_schemas() -> List[str]:
    return sorted(p.stem for p in BUNDLED_SCHEMAS_DIR.glob("*.yaml"))
