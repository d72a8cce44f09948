# formwright/interpreter/checks.py
"""
Per-type answer checks.

Each check takes a raw answer, coerces it to the field's type and enforces
the field's constraints, returning the accepted value or raising
ValidationError. Checks are pure: no I/O, no retries.
"""

from __future__ import annotations

import math
import re
from typing import Any, List

from formwright.config import FormConfig
from formwright.exceptions import ValidationError
from formwright.schema.models import FieldDef, FieldType, is_member
from formwright.sources.base import SKIP, Check


def _fail(path: str, constraint: str, value: Any, message: str, **kwargs: Any) -> ValidationError:
    return ValidationError(path, constraint, value, message, **kwargs)


def check_string(field: FieldDef, path: str, raw: Any) -> str:
    if not isinstance(raw, str):
        raise _fail(path, "type", raw, f"Value {raw!r} is not a string")

    if len(raw) < field.min_length:
        raise _fail(
            path,
            "min_length",
            raw,
            f"Value {raw!r} does not meet the minimum required length ({field.min_length})",
        )
    if field.max_length is not None and len(raw) > field.max_length:
        raise _fail(
            path,
            "max_length",
            raw,
            f"Value {raw!r} exceeds the maximum allowed length ({field.max_length})",
        )
    if field.regex is not None and re.fullmatch(field.regex, raw) is None:
        raise _fail(
            path, "regex", raw, f"Value {raw!r} does not match regex pattern: {field.regex!r}"
        )
    return raw


def check_bool(field: FieldDef, path: str, raw: Any, config: FormConfig) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        token = raw.strip().lower()
        if token in (t.lower() for t in config.true_tokens):
            return True
        if token in (t.lower() for t in config.false_tokens):
            return False
    raise _fail(
        path,
        "bool",
        raw,
        f"Value {raw!r} is not a yes/no answer "
        f"(expected one of {config.true_tokens + config.false_tokens})",
    )


def check_number(field: FieldDef, path: str, raw: Any) -> Any:
    kind = field.type.scalar.value
    value: Any

    if isinstance(raw, bool):
        raise _fail(path, "type", raw, f"Value {raw!r} is not a valid number")

    if field.type.is_integer:
        if isinstance(raw, int):
            value = raw
        elif isinstance(raw, str):
            try:
                value = int(raw.strip())
            except ValueError:
                raise _fail(path, "type", raw, f"Value {raw!r} is not a valid {kind} integer")
        else:
            raise _fail(path, "type", raw, f"Value {raw!r} is not a valid {kind} integer")
    else:
        if isinstance(raw, (int, float)):
            try:
                value = float(raw)
            except OverflowError:
                low, high = field.bounds
                if raw < 0:
                    raise _fail(path, "min", raw, f"Value {raw!r} cannot be less than {low}")
                raise _fail(path, "max", raw, f"Value {raw!r} cannot be greater than {high}")
        elif isinstance(raw, str):
            try:
                value = float(raw.strip())
            except ValueError:
                raise _fail(path, "type", raw, f"Value {raw!r} is not a valid {kind} float")
        else:
            raise _fail(path, "type", raw, f"Value {raw!r} is not a valid {kind} float")
        if math.isnan(value):
            raise _fail(path, "type", raw, f"Value {raw!r} is not a valid {kind} float")

    low, high = field.bounds
    if value < low:
        raise _fail(path, "min", raw, f"Value {raw!r} cannot be less than {low}")
    if value > high:
        raise _fail(path, "max", raw, f"Value {raw!r} cannot be greater than {high}")
    return value


def check_select(field: FieldDef, path: str, raw: Any) -> Any:
    items = field.items or []
    if not is_member(raw, items):
        raise _fail(
            path,
            "items",
            raw,
            f"Value {raw!r} is not one of the allowed items {items}",
            allowed=items,
        )
    return raw


def check_multi_select(field: FieldDef, path: str, raw: Any) -> List[Any]:
    if not isinstance(raw, (list, tuple)):
        raise _fail(path, "type", raw, f"Value {raw!r} is not a list of selections")

    chosen: List[Any] = []
    for value in raw:
        check_select(field, path, value)
        if is_member(value, chosen):
            raise _fail(path, "unique", raw, f"Value {value!r} is selected more than once")
        chosen.append(value)
    return chosen


def check_item(field: FieldDef, path: str, raw: Any) -> Any:
    """Check one entry of a list field against the element type's constraints."""
    if field.type.scalar is FieldType.STRING:
        return check_string(field, path, raw)
    return check_number(field, path, raw)


def check_list(field: FieldDef, path: str, raw: Any) -> List[Any]:
    if not isinstance(raw, (list, tuple)):
        raise _fail(path, "type", raw, f"Value {raw!r} is not a list")

    values = [check_item(field, f"{path}[{i}]", item) for i, item in enumerate(raw)]

    if len(values) < field.min_items:
        raise _fail(
            path,
            "min_items",
            raw,
            f"This field requires a minimum of {field.min_items} values to be provided",
        )
    if field.max_items is not None and len(values) > field.max_items:
        raise _fail(
            path,
            "max_items",
            raw,
            f"This field allows at most {field.max_items} values",
        )
    return values


def build_check(field: FieldDef, path: str, config: FormConfig) -> Check:
    """
    Return the check for ``field``, with skip handling folded in.

    SKIP is accepted (and passed through) only for can_skip fields; for any
    other field it fails with the ``required`` constraint.
    """
    kind = field.type

    if kind is FieldType.STRING:
        def convert(raw: Any) -> Any:
            return check_string(field, path, raw)
    elif kind is FieldType.BOOL:
        def convert(raw: Any) -> Any:
            return check_bool(field, path, raw, config)
    elif kind is FieldType.SELECT and field.select_many:
        def convert(raw: Any) -> Any:
            return check_multi_select(field, path, raw)
    elif kind is FieldType.SELECT:
        def convert(raw: Any) -> Any:
            return check_select(field, path, raw)
    elif kind.is_list:
        def convert(raw: Any) -> Any:
            return check_list(field, path, raw)
    elif kind.is_numeric:
        def convert(raw: Any) -> Any:
            return check_number(field, path, raw)
    else:
        raise ValueError(f"no answer check for {kind.value!r} fields")

    def check(raw: Any) -> Any:
        if raw is SKIP:
            if field.can_skip:
                return SKIP
            raise _fail(path, "required", raw, "This field is required and cannot be skipped")
        return convert(raw)

    return check
