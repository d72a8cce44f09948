# formwright/output.py
"""Serialize a finished configuration value for downstream consumers."""

from __future__ import annotations

import json
from typing import Any, Dict

import yaml


def dump_config(value: Dict[str, Any], fmt: str = "yaml") -> str:
    """
    Render ``value`` as YAML (default) or JSON, keeping visit order.
    """
    if fmt == "yaml":
        return yaml.safe_dump(value, sort_keys=False, allow_unicode=True)
    if fmt == "json":
        return json.dumps(value, indent=2, ensure_ascii=False) + "\n"
    raise ValueError(f"Unknown output format: {fmt!r}. Must be one of: ['json', 'yaml']")
