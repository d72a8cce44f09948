# formwright/interpreter/engine.py
"""
Form interpreter.

Walks a field-definition tree in declared order, pulls answers from an
input source, validates them and builds the resulting configuration value.

Flow per field:
1. Ask the source (one call, matching the field type)
2. Validate the answer; SKIP leaves the key out entirely
3. Store the value in the current scope
4. For select fields with a ``then`` table, run the matching branch and
   either merge its result into the current scope (insert_at_root) or
   store it under the select field's own key

The interpreter does not retry. Sources own the retry policy; anything
they return is validated here and a failure aborts the run.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from formwright.config import FormConfig
from formwright.interpreter.checks import build_check, check_item
from formwright.logging.logger import get_logger
from formwright.logging.tags import FORM
from formwright.schema.models import FieldDef, FieldType, Schema
from formwright.sources.base import SKIP, FieldPrompt, InputSource

logger = get_logger(__name__)

ConfigValue = Dict[str, Any]


def _join(scope_path: str, name: str) -> str:
    return f"{scope_path}.{name}" if scope_path else name


class FormInterpreter:
    """
    Runs form schemas against an input source.

    One interpreter can run any number of forms; each run builds a fresh
    result and never touches the schema.
    """

    def __init__(self, source: InputSource, config: Optional[FormConfig] = None):
        self.source = source
        self.config = config or FormConfig()

    def run(self, form: Union[Schema, Mapping[str, FieldDef]]) -> ConfigValue:
        """
        Run a whole form.

        Args:
            form: A Schema or a mapping of field name to FieldDef

        Returns:
            The validated configuration value

        Raises:
            ValidationError: If the source hands back an answer that fails its field
            FormAborted: If the source cancels; no partial result is returned
        """
        fields = form.fields if isinstance(form, Schema) else form
        logger.debug(f"{FORM} Starting run over {len(fields)} fields")
        result = self._run_scope(fields, "")
        logger.debug(f"{FORM} Run complete ({len(result)} top-level keys)")
        return result

    # ------------------------------------------------------------------
    # Scope walking
    # ------------------------------------------------------------------

    def _run_scope(self, fields: Mapping[str, FieldDef], scope_path: str) -> ConfigValue:
        scope: ConfigValue = {}
        self._fill_scope(fields, scope_path, scope)
        return scope

    def _fill_scope(
        self, fields: Mapping[str, FieldDef], scope_path: str, scope: ConfigValue
    ) -> None:
        for name, field in fields.items():
            self._visit(name, field, scope_path, scope)

    def _visit(self, name: str, field: FieldDef, scope_path: str, scope: ConfigValue) -> None:
        path = _join(scope_path, name)

        if field.type is FieldType.OBJECT:
            scope[name] = self._run_scope(field.fields or {}, path)
            return

        value = self._acquire(field, path)
        if value is SKIP:
            logger.debug(f"{FORM} Skipped {path}")
            return

        scope[name] = value
        logger.debug(f"{FORM} Accepted {path}")

        if field.type is FieldType.SELECT and field.then is not None:
            self._reveal(name, field, value, scope_path, scope)

    def _reveal(
        self,
        name: str,
        field: FieldDef,
        value: Any,
        scope_path: str,
        scope: ConfigValue,
    ) -> None:
        conditional = field.then
        path = _join(scope_path, name)

        if field.select_many:
            results = []
            for chosen in value:
                branch = conditional.branch_for(chosen)
                if branch is None:
                    results.append(chosen)
                elif conditional.insert_at_root:
                    self._fill_scope(branch.fields, scope_path, scope)
                    results.append(chosen)
                else:
                    results.append(self._run_scope(branch.fields, path))
            scope[name] = results
            return

        branch = conditional.branch_for(value)
        if branch is None:
            logger.debug(f"{FORM} No branch for {path}={value!r}")
            return

        if conditional.insert_at_root:
            self._fill_scope(branch.fields, scope_path, scope)
        else:
            scope[name] = self._run_scope(branch.fields, path)

    # ------------------------------------------------------------------
    # Answer acquisition
    # ------------------------------------------------------------------

    def _acquire(self, field: FieldDef, path: str) -> Any:
        prompt = FieldPrompt(field=field, path=path)
        check = build_check(field, path, self.config)
        kind = field.type

        if kind is FieldType.STRING:
            raw = self.source.ask_string(prompt, check)
        elif kind is FieldType.BOOL:
            raw = self.source.ask_bool(prompt, check)
        elif kind is FieldType.SELECT and field.select_many:
            raw = self.source.ask_multi_select(prompt, list(field.items or []), check)
        elif kind is FieldType.SELECT:
            raw = self.source.ask_select(prompt, list(field.items or []), check)
        elif kind.is_list:
            def check_entry(entry: Any) -> Any:
                return check_item(field, path, entry)

            raw = self.source.ask_list(prompt, check_entry, check)
        else:
            raw = self.source.ask_number(prompt, check)

        return check(raw)


def run_form(
    form: Union[Schema, Mapping[str, FieldDef]],
    source: InputSource,
    config: Optional[FormConfig] = None,
) -> ConfigValue:
    """Shortcut for ``FormInterpreter(source, config).run(form)``."""
    return FormInterpreter(source, config).run(form)
