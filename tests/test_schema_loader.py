# tests/test_schema_loader.py
"""
Tests for formwright.schema loading.

Malformed schemas must fail at load time with SchemaError, never later
during a run.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from formwright.exceptions import SchemaError
from formwright.schema import (
    FieldType,
    list_bundled_schemas,
    load_bundled_schema,
    load_schema,
    load_schema_text,
    parse_schema,
)


def test_field_order_is_preserved():
    schema = load_schema_text(
        """
fields:
  zeta:
    type: string
  alpha:
    type: bool
  mid:
    type: u16
"""
    )
    assert list(schema.fields) == ["zeta", "alpha", "mid"]


def test_mapping_keys_become_field_names():
    schema = load_schema_text(
        """
fields:
  outer:
    type: object
    fields:
      inner_value:
        type: string
"""
    )
    outer = schema.fields["outer"]
    assert outer.name == "outer"
    assert outer.fields["inner_value"].name == "inner_value"
    assert outer.fields["inner_value"].label == "Inner Value"


def test_list_types_parse():
    schema = load_schema_text(
        """
fields:
  tags:
    type: string[]
    min_items: 1
  ports:
    type: u16[]
    max_items: 3
"""
    )
    assert schema.fields["tags"].type is FieldType.STRING_LIST
    assert schema.fields["ports"].type.scalar is FieldType.U16


@pytest.mark.parametrize(
    "body",
    [
        # unknown type
        "a:\n    type: integer\n",
        # then on a non-select field
        "a:\n    type: string\n    then:\n      if: []\n",
        # regex that does not compile
        "a:\n    type: string\n    regex: '[unclosed'\n",
        # select without items
        "a:\n    type: select\n    items: []\n",
        # branch picking a value that is not an item
        "a:\n    type: select\n    items: [x]\n    then:\n      if:\n        - picked: y\n          fields: {}\n",
        # two branches picking the same value
        "a:\n    type: select\n    items: [x]\n    then:\n      if:\n"
        "        - picked: x\n          fields: {}\n"
        "        - picked: x\n          fields: {}\n",
        # unknown key
        "a:\n    type: string\n    colour: red\n",
        # string constraint on a bool
        "a:\n    type: bool\n    regex: '^y$'\n",
        # object without fields
        "a:\n    type: object\n",
        # skippable object
        "a:\n    type: object\n    can_skip: true\n    fields: {}\n",
        # inverted length bounds
        "a:\n    type: string\n    min_length: 5\n    max_length: 2\n",
        # bound outside the type range
        "a:\n    type: u8\n    max: 300\n",
        # duplicate select items
        "a:\n    type: select\n    items: [x, x]\n",
    ],
)
def test_malformed_schemas_raise_schema_error(body):
    with pytest.raises(SchemaError):
        load_schema_text("fields:\n  " + body)


def test_root_merge_collision_is_rejected():
    text = """
fields:
  name:
    type: string
  kind:
    type: select
    items: [a]
    then:
      insert_at_root: true
      if:
        - picked: a
          fields:
            name:
              type: string
"""
    with pytest.raises(SchemaError, match="collide"):
        load_schema_text(text)


def test_sibling_branches_may_share_keys():
    schema = load_schema_text(
        """
fields:
  kind:
    type: select
    items: [a, b]
    then:
      insert_at_root: true
      if:
        - picked: a
          fields:
            params:
              type: string
        - picked: b
          fields:
            params:
              type: bool
"""
    )
    assert [b.picked for b in schema.fields["kind"].then.branches] == ["a", "b"]


def test_multi_select_branches_may_not_share_root_keys():
    text = """
fields:
  sinks:
    type: select
    select_many: true
    items: [a, b]
    then:
      insert_at_root: true
      if:
        - picked: a
          fields:
            params:
              type: string
        - picked: b
          fields:
            params:
              type: string
"""
    with pytest.raises(SchemaError, match="same keys"):
        load_schema_text(text)


def test_reference_cycle_is_rejected():
    node = {"type": "object"}
    node["fields"] = {"again": node}

    with pytest.raises(SchemaError, match="cycle"):
        parse_schema({"fields": {"root": node}})


def test_invalid_yaml_and_non_mapping():
    with pytest.raises(SchemaError, match="YAML"):
        load_schema_text("fields: [unclosed")

    with pytest.raises(SchemaError, match="mapping"):
        load_schema_text("- a\n- b\n")


def test_schema_error_lists_locations():
    with pytest.raises(SchemaError) as exc:
        load_schema_text("fields:\n  a:\n    type: nope\n")
    assert exc.value.errors
    assert "a" in str(exc.value)


def test_missing_file(tmp_path):
    with pytest.raises(SchemaError, match="not found"):
        load_schema(tmp_path / "missing.yaml")


def test_load_schema_from_file(tmp_path):
    path = tmp_path / "form.yaml"
    path.write_text("fields:\n  host:\n    type: string\n", encoding="utf-8")

    schema = load_schema(path)
    assert list(schema.fields) == ["host"]


def test_bundled_source_schema():
    assert "source" in list_bundled_schemas()

    schema = load_bundled_schema("source")
    assert list(schema.fields) == ["source_id", "source_type"]
    assert schema.fields["source_type"].items == ["file", "kafka", "kinesis", "pulsar"]
    assert schema.fields["source_type"].then.insert_at_root is True


def test_unknown_bundled_schema():
    with pytest.raises(SchemaError, match="unknown bundled schema"):
        load_bundled_schema("does-not-exist")


def test_loaded_schema_is_frozen():
    schema = load_bundled_schema("source")
    with pytest.raises(PydanticValidationError):
        schema.fields["source_id"].regex = ".*"
