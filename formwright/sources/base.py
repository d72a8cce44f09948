# formwright/sources/base.py
"""
Input source protocol.

An input source is the collaborator that supplies raw answers: an
interactive console, a pre-recorded script, an API payload. The interpreter
never performs I/O itself; it calls one ``ask_*`` method per field and
validates whatever comes back.

Every ``ask_*`` method receives:
- prompt: what is being asked (field definition, dotted path, label)
- check: callable that validates a raw answer and returns the accepted
  value, raising ValidationError otherwise

A source may use ``check`` to re-prompt on bad input; that retry policy
belongs to the source, not to the interpreter. To leave a skippable field
out it returns SKIP. To cancel the whole form it raises FormAborted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol, Sequence, runtime_checkable

from formwright.schema.models import FieldDef


class Skip(Enum):
    SKIP = "skip"

    def __repr__(self) -> str:
        return "SKIP"


# Returned by a source to leave a can_skip field out of the result.
SKIP = Skip.SKIP

Check = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldPrompt:
    """What a source needs to know to ask for one field."""

    field: FieldDef
    path: str  # Dotted location in the output, e.g. "params.topic"

    @property
    def label(self) -> str:
        return self.field.label

    @property
    def can_skip(self) -> bool:
        return self.field.can_skip

    @property
    def description(self) -> str:
        return self.field.description


@runtime_checkable
class InputSource(Protocol):
    """Protocol every answer provider implements."""

    def ask_string(self, prompt: FieldPrompt, check: Check) -> Any:
        """Return a string answer (or SKIP)."""
        ...

    def ask_bool(self, prompt: FieldPrompt, check: Check) -> Any:
        """Return a bool or a yes/no token (or SKIP)."""
        ...

    def ask_number(self, prompt: FieldPrompt, check: Check) -> Any:
        """Return a number or its text form (or SKIP)."""
        ...

    def ask_select(self, prompt: FieldPrompt, items: Sequence[Any], check: Check) -> Any:
        """Return one of ``items`` (or SKIP)."""
        ...

    def ask_multi_select(
        self, prompt: FieldPrompt, items: Sequence[Any], check: Check
    ) -> Any:
        """Return a list drawn from ``items`` (or SKIP)."""
        ...

    def ask_list(self, prompt: FieldPrompt, check_item: Check, check: Check) -> Any:
        """
        Return a list of entries (or SKIP).

        ``check_item`` validates one entry, ``check`` the finished list.
        """
        ...


__all__ = ["SKIP", "Skip", "Check", "FieldPrompt", "InputSource"]
