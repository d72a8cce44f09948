# tests/test_form_interpreter.py
"""
Tests for formwright.interpreter.engine.

Key tests verify that:
1. Fields are visited and emitted in declared order
2. Skipped fields leave no key behind
3. Conditional branches either merge into the scope or nest under the select
4. The interpreter validates every answer and never retries on its own
"""

from typing import Any, List

import pytest

from formwright.config import FormConfig
from formwright.exceptions import FormAborted, ValidationError
from formwright.interpreter import FormInterpreter, run_form
from formwright.schema import load_schema_text
from formwright.sources import SKIP, MappingInputSource, ScriptedInputSource

BRANCHING = """
fields:
  name:
    type: string
    min_length: 1
  mode:
    type: select
    items: [simple, advanced, plain]
    then:
      insert_at_root: true
      if:
        - picked: simple
          fields:
            level:
              type: u8
        - picked: advanced
          fields:
            settings:
              type: object
              fields:
                retries:
                  type: u8
                  max: 5
                verbose:
                  type: bool
  auth:
    type: select
    can_skip: true
    items: [token, none]
    then:
      if:
        - picked: token
          fields:
            token:
              type: string
"""


class RetryingSource:
    """Source that keeps offering answers until ``check`` accepts one."""

    def __init__(self, answers: List[Any]):
        self.answers = list(answers)
        self.rejected: List[Any] = []

    def _ask(self, check):
        while True:
            raw = self.answers.pop(0)
            try:
                return check(raw)
            except ValidationError:
                self.rejected.append(raw)

    def ask_string(self, prompt, check):
        return self._ask(check)

    def ask_bool(self, prompt, check):
        return self._ask(check)

    def ask_number(self, prompt, check):
        return self._ask(check)

    def ask_select(self, prompt, items, check):
        return self._ask(check)

    def ask_multi_select(self, prompt, items, check):
        return self._ask(check)

    def ask_list(self, prompt, check_item, check):
        return self._ask(check)


class LyingSource(ScriptedInputSource):
    """Ignores ``check`` and hands back whatever it was given."""


@pytest.fixture
def schema():
    return load_schema_text(BRANCHING)


def test_root_branch_merges_into_scope(schema):
    source = ScriptedInputSource(["job", "simple", "3", SKIP])
    result = FormInterpreter(source).run(schema)

    assert result == {"name": "job", "mode": "simple", "level": 3}
    assert list(result) == ["name", "mode", "level"]


def test_root_branch_with_nested_object(schema):
    source = ScriptedInputSource(["job", "advanced", 2, "no", SKIP])
    result = run_form(schema, source)

    assert result == {
        "name": "job",
        "mode": "advanced",
        "settings": {"retries": 2, "verbose": False},
    }


def test_select_without_matching_branch_reveals_nothing(schema):
    result = run_form(schema, ScriptedInputSource(["job", "plain", SKIP]))
    assert result == {"name": "job", "mode": "plain"}


def test_nested_branch_takes_the_select_key(schema):
    result = run_form(schema, ScriptedInputSource(["job", "plain", "token", "s3cret"]))
    assert result["auth"] == {"token": "s3cret"}


def test_nested_select_without_branch_keeps_scalar(schema):
    result = run_form(schema, ScriptedInputSource(["job", "plain", "none"]))
    assert result["auth"] == "none"


def test_skipped_select_reveals_nothing(schema):
    source = ScriptedInputSource(["job", "plain", SKIP])
    result = run_form(schema, source)

    assert "auth" not in result
    assert source.remaining == 0
    assert source.asked == ["name", "mode", "auth"]


def test_branch_paths_follow_output_shape(schema):
    source = ScriptedInputSource(["job", "advanced", 1, True, "token", "t"])
    run_form(schema, source)

    assert source.asked == [
        "name",
        "mode",
        "settings.retries",
        "settings.verbose",
        "auth",
        "auth.token",
    ]


def test_bad_answer_aborts_run(schema):
    source = LyingSource(["job", "advanced", 9])
    with pytest.raises(ValidationError) as exc:
        run_form(schema, source)
    assert exc.value.field == "settings.retries"
    assert exc.value.constraint == "max"


def test_required_field_cannot_be_skipped(schema):
    with pytest.raises(ValidationError) as exc:
        run_form(schema, ScriptedInputSource([SKIP]))
    assert exc.value.constraint == "required"


def test_retry_policy_belongs_to_source(schema):
    source = RetryingSource(["", "job", "Simple", "simple", 300, 7, "maybe", SKIP])
    result = run_form(schema, source)

    assert result == {"name": "job", "mode": "simple", "level": 7}
    assert source.rejected == ["", "Simple", 300, "maybe"]


def test_abort_discards_partial_result(schema):
    source = ScriptedInputSource(["job", "advanced"])
    with pytest.raises(FormAborted):
        run_form(schema, source)


def test_run_accepts_plain_field_mapping(schema):
    result = FormInterpreter(ScriptedInputSource(["only"])).run({"name": schema.fields["name"]})
    assert result == {"name": "only"}


def test_schema_is_reusable_across_runs(schema):
    first = run_form(schema, ScriptedInputSource(["a", "plain", SKIP]))
    second = run_form(schema, ScriptedInputSource(["b", "simple", 1, SKIP]))

    assert first == {"name": "a", "mode": "plain"}
    assert second == {"name": "b", "mode": "simple", "level": 1}


def test_custom_bool_tokens():
    schema = load_schema_text("fields:\n  ok:\n    type: bool\n")
    config = FormConfig(true_tokens=["ja"], false_tokens=["nein"])

    assert run_form(schema, ScriptedInputSource(["ja"]), config) == {"ok": True}
    with pytest.raises(ValidationError):
        run_form(schema, ScriptedInputSource(["yes"]), config)


def test_lists_and_numbers():
    schema = load_schema_text(
        """
fields:
  hosts:
    type: string[]
    min_items: 1
  ports:
    type: u16[]
    can_skip: true
  ratio:
    type: f64
"""
    )
    result = run_form(schema, ScriptedInputSource([["a", "b"], SKIP, "0.25"]))
    assert result == {"hosts": ["a", "b"], "ratio": 0.25}


def test_multi_select_branches():
    schema = load_schema_text(
        """
fields:
  outputs:
    type: select
    select_many: true
    items: [stdout, file]
    then:
      if:
        - picked: file
          fields:
            path:
              type: string
"""
    )
    source = MappingInputSource({"outputs": ["stdout", "file"], "outputs.path": "/tmp/out"})
    result = run_form(schema, source)

    assert result == {"outputs": ["stdout", {"path": "/tmp/out"}]}


def test_root_merge_through_nested_selects():
    schema = load_schema_text(
        """
fields:
  kind:
    type: select
    items: [db]
    then:
      insert_at_root: true
      if:
        - picked: db
          fields:
            engine:
              type: select
              items: [pg]
              then:
                insert_at_root: true
                if:
                  - picked: pg
                    fields:
                      dsn:
                        type: string
"""
    )
    result = run_form(schema, ScriptedInputSource(["db", "pg", "postgres://x"]))
    assert result == {"kind": "db", "engine": "pg", "dsn": "postgres://x"}


def test_multi_select_root_merge_with_disjoint_keys():
    schema = load_schema_text(
        """
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
            a_path:
              type: string
        - picked: b
          fields:
            b_path:
              type: string
"""
    )
    result = run_form(schema, ScriptedInputSource([["a", "b"], "x", "y"]))
    assert result == {"sinks": ["a", "b"], "a_path": "x", "b_path": "y"}


def test_run_leaves_schema_untouched():
    schema = load_schema_text(BRANCHING)
    before = schema.model_dump()

    run_form(schema, MappingInputSource({"name": "n", "mode": "simple", "level": 1}))

    assert schema.model_dump() == before
