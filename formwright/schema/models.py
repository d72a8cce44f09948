# formwright/schema/models.py
"""
Pydantic models for form schemas.

A schema is a tree of FieldDef nodes:
- scalar fields (string, bool, numbers) ask for one value
- select fields pick from a fixed list and may reveal more fields (then/if)
- object fields group nested fields under their own key
- list fields ("string[]", "u32[]", ...) collect zero or more values

Rules:
- Strict validation, no unknown keys
- Constraint keys only on the types they apply to
- Models are frozen; a loaded tree is never mutated by a run

Freezing covers model attributes only. The ``fields`` dicts and ``items``
lists inside a model are plain containers, so callers sharing a schema
must treat them as read-only themselves.
"""

from __future__ import annotations

import re
import sys
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Scalar = Union[bool, int, float, str]


class FieldType(str, Enum):
    STRING = "string"
    BOOL = "bool"
    SELECT = "select"
    OBJECT = "object"

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    F32 = "f32"
    F64 = "f64"

    STRING_LIST = "string[]"
    U8_LIST = "u8[]"
    U16_LIST = "u16[]"
    U32_LIST = "u32[]"
    U64_LIST = "u64[]"
    I8_LIST = "i8[]"
    I16_LIST = "i16[]"
    I32_LIST = "i32[]"
    I64_LIST = "i64[]"
    F32_LIST = "f32[]"
    F64_LIST = "f64[]"

    @property
    def is_list(self) -> bool:
        return self.value.endswith("[]")

    @property
    def scalar(self) -> "FieldType":
        """Element type for lists, the type itself otherwise."""
        return FieldType(self.value[:-2]) if self.is_list else self

    @property
    def is_integer(self) -> bool:
        return self.scalar.value in INTEGER_BOUNDS

    @property
    def is_float(self) -> bool:
        return self.scalar.value in FLOAT_BOUNDS

    @property
    def is_numeric(self) -> bool:
        return self.is_integer or self.is_float


INTEGER_BOUNDS: Dict[str, tuple] = {
    "u8": (0, 2**8 - 1),
    "u16": (0, 2**16 - 1),
    "u32": (0, 2**32 - 1),
    "u64": (0, 2**64 - 1),
    "i8": (-(2**7), 2**7 - 1),
    "i16": (-(2**15), 2**15 - 1),
    "i32": (-(2**31), 2**31 - 1),
    "i64": (-(2**63), 2**63 - 1),
}

_F32_MAX = 3.4028234663852886e38

FLOAT_BOUNDS: Dict[str, tuple] = {
    "f32": (-_F32_MAX, _F32_MAX),
    "f64": (-sys.float_info.max, sys.float_info.max),
}

# Which optional keys each kind of field accepts.
_STRING_KEYS = {"min_length", "max_length", "regex"}
_NUMBER_KEYS = {"minimum", "maximum"}
_LIST_KEYS = {"min_items", "max_items"}
_SELECT_KEYS = {"items", "select_many", "then"}
_OBJECT_KEYS = {"fields"}


def same_value(a: Any, b: Any) -> bool:
    """Exact equality that does not treat True as 1 or 1 as 1.0."""
    return type(a) is type(b) and a == b


def is_member(value: Any, items: List[Any]) -> bool:
    return any(same_value(value, item) for item in items)


def _inject_names(value: Any) -> Any:
    """Copy each mapping key into its field definition as ``name``."""
    if not isinstance(value, dict):
        return value
    named = {}
    for key, field in value.items():
        if isinstance(field, dict) and "name" not in field:
            field = {**field, "name": key}
        named[key] = field
    return named


def _scope_keys(fields: Dict[str, "FieldDef"]) -> Set[str]:
    """
    Every key a run over ``fields`` can write into its scope.

    Branches with insert_at_root write into the same scope as their select
    field, so their keys must not collide with anything else written there.
    Branches of a single-choice select are mutually exclusive and may share
    keys; with select_many several branches can run, so they may not.
    """
    keys = set(fields)
    for field in fields.values():
        if field.then is None or not field.then.insert_at_root:
            continue
        revealed: Set[str] = set()
        for branch in field.then.branches:
            branch_keys = _scope_keys(branch.fields)
            shared = branch_keys & revealed
            if field.select_many and shared:
                raise ValueError(
                    f"branches of multi-select {field.name!r} reveal the same keys: "
                    f"{sorted(shared)}"
                )
            revealed |= branch_keys
        clash = revealed & keys
        if clash:
            raise ValueError(
                f"fields revealed by {field.name!r} collide with the enclosing scope: "
                f"{sorted(clash)}"
            )
        keys |= revealed
    return keys


class FieldDef(BaseModel):
    """One answerable field."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str = ""
    type: FieldType
    display_name: Optional[str] = None
    description: str = ""
    prompt: Optional[str] = None
    can_skip: bool = False

    min_length: int = Field(default=0, ge=0)
    max_length: Optional[int] = Field(default=None, ge=0)
    regex: Optional[str] = None

    minimum: Optional[Union[int, float]] = Field(default=None, alias="min")
    maximum: Optional[Union[int, float]] = Field(default=None, alias="max")

    min_items: int = Field(default=0, ge=0)
    max_items: Optional[int] = Field(default=None, ge=0)

    items: Optional[List[Scalar]] = None
    select_many: bool = False
    then: Optional["Conditional"] = None

    fields: Optional[Dict[str, "FieldDef"]] = None

    @field_validator("fields", mode="before")
    @classmethod
    def _name_fields(cls, value: Any) -> Any:
        return _inject_names(value)

    @property
    def label(self) -> str:
        """Prompt text: explicit prompt, else display name, else the title-cased key."""
        if self.prompt:
            return self.prompt
        if self.display_name:
            return self.display_name
        return re.sub(r"[_\-]+", " ", self.name).strip().title()

    @property
    def bounds(self) -> tuple:
        """Effective (min, max) for numeric fields."""
        kind = self.type.scalar.value
        low, high = INTEGER_BOUNDS.get(kind) or FLOAT_BOUNDS[kind]
        if self.minimum is not None:
            low = self.minimum
        if self.maximum is not None:
            high = self.maximum
        return low, high

    @model_validator(mode="after")
    def _check_field(self) -> "FieldDef":
        kind = self.type
        allowed: Set[str] = set()
        if kind.scalar is FieldType.STRING:
            allowed |= _STRING_KEYS
        if kind.is_numeric:
            allowed |= _NUMBER_KEYS
        if kind.is_list:
            allowed |= _LIST_KEYS
        if kind is FieldType.SELECT:
            allowed |= _SELECT_KEYS
        if kind is FieldType.OBJECT:
            allowed |= _OBJECT_KEYS

        misplaced = sorted(
            key
            for key in self.model_fields_set
            if key in _STRING_KEYS | _NUMBER_KEYS | _LIST_KEYS | _SELECT_KEYS | _OBJECT_KEYS
            and key not in allowed
        )
        if misplaced:
            raise ValueError(f"{misplaced} not allowed on a {kind.value!r} field")

        if kind is FieldType.SELECT:
            self._check_select()
        if kind is FieldType.OBJECT:
            if self.fields is None:
                raise ValueError("object field requires 'fields'")
            if self.can_skip:
                raise ValueError("object fields cannot be skipped; mark their members can_skip")
            _scope_keys(self.fields)

        if self.max_length is not None and self.min_length > self.max_length:
            raise ValueError(f"min_length {self.min_length} exceeds max_length {self.max_length}")
        if self.max_items is not None and self.min_items > self.max_items:
            raise ValueError(f"min_items {self.min_items} exceeds max_items {self.max_items}")
        if self.regex is not None:
            try:
                re.compile(self.regex)
            except re.error as e:
                raise ValueError(f"regex {self.regex!r} does not compile: {e}") from e
        if kind.is_numeric:
            self._check_bounds()

        return self

    def _check_select(self) -> None:
        if not self.items:
            raise ValueError("select field requires a non-empty 'items' list")
        for i, item in enumerate(self.items):
            if is_member(item, self.items[:i]):
                raise ValueError(f"duplicate select item {item!r}")

        if self.then is None:
            return
        seen: List[Any] = []
        for branch in self.then.branches:
            if not is_member(branch.picked, self.items):
                raise ValueError(f"branch picks {branch.picked!r}, which is not in items")
            if is_member(branch.picked, seen):
                raise ValueError(f"more than one branch picks {branch.picked!r}")
            seen.append(branch.picked)

    def _check_bounds(self) -> None:
        kind = self.type.scalar.value
        type_low, type_high = INTEGER_BOUNDS.get(kind) or FLOAT_BOUNDS[kind]
        low, high = self.bounds
        for bound in (self.minimum, self.maximum):
            if bound is None:
                continue
            if isinstance(bound, bool) or (self.type.is_integer and not isinstance(bound, int)):
                raise ValueError(f"bound {bound!r} is not valid for {kind}")
            if not type_low <= bound <= type_high:
                raise ValueError(f"bound {bound!r} is outside the {kind} range")
        if low > high:
            raise ValueError(f"min {low} exceeds max {high}")


class Branch(BaseModel):
    """Fields revealed when the owning select takes the ``picked`` value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    picked: Scalar
    fields: Dict[str, FieldDef]

    @field_validator("fields", mode="before")
    @classmethod
    def _name_fields(cls, value: Any) -> Any:
        return _inject_names(value)

    @model_validator(mode="after")
    def _check_scope(self) -> "Branch":
        _scope_keys(self.fields)
        return self


class Conditional(BaseModel):
    """Ordered decision table attached to a select field."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    insert_at_root: bool = False
    branches: List[Branch] = Field(default_factory=list, alias="if")

    def branch_for(self, value: Any) -> Optional[Branch]:
        for branch in self.branches:
            if same_value(branch.picked, value):
                return branch
        return None


class Schema(BaseModel):
    """A complete form: the root field scope."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    description: str = ""
    fields: Dict[str, FieldDef]

    @field_validator("fields", mode="before")
    @classmethod
    def _name_fields(cls, value: Any) -> Any:
        return _inject_names(value)

    @model_validator(mode="after")
    def _check_scope(self) -> "Schema":
        _scope_keys(self.fields)
        return self


for _model in (FieldDef, Branch, Conditional, Schema):
    _model.model_rebuild()
