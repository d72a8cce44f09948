# formwright/sources/answers.py
"""
Pre-supplied answer sources.

Two flavours, both non-interactive and without retries (a bad answer
aborts the run with the ValidationError):

- ScriptedInputSource: answers consumed in the order fields are visited
- MappingInputSource: answers looked up by dotted field path
"""

from __future__ import annotations

from collections import deque
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Set

from formwright.exceptions import FormAborted
from formwright.logging.logger import get_logger
from formwright.logging.tags import SOURCE
from formwright.sources.base import SKIP, Check, FieldPrompt

logger = get_logger(__name__)


class ScriptedInputSource:
    """
    Replays a fixed sequence of answers.

    Use SKIP in the sequence to skip a can_skip field. Running out of
    answers cancels the form.

    Example:
        source = ScriptedInputSource(["my-source", "kafka", "events", SKIP, True])
    """

    def __init__(self, answers: Iterable[Any]):
        self._answers = deque(answers)
        self.asked: List[str] = []

    @property
    def remaining(self) -> int:
        return len(self._answers)

    def _next(self, prompt: FieldPrompt) -> Any:
        self.asked.append(prompt.path)
        if not self._answers:
            raise FormAborted(f"no answer left for {prompt.path}")
        return self._answers.popleft()

    def ask_string(self, prompt: FieldPrompt, check: Check) -> Any:
        return self._next(prompt)

    def ask_bool(self, prompt: FieldPrompt, check: Check) -> Any:
        return self._next(prompt)

    def ask_number(self, prompt: FieldPrompt, check: Check) -> Any:
        return self._next(prompt)

    def ask_select(self, prompt: FieldPrompt, items: Sequence[Any], check: Check) -> Any:
        return self._next(prompt)

    def ask_multi_select(self, prompt: FieldPrompt, items: Sequence[Any], check: Check) -> Any:
        return self._next(prompt)

    def ask_list(self, prompt: FieldPrompt, check_item: Check, check: Check) -> Any:
        return self._next(prompt)


class MappingInputSource:
    """
    Answers keyed by dotted field path, e.g. ``{"params.topic": "events"}``.

    A missing key or a None value means SKIP, so optional fields can simply
    be left out of the mapping. ``unused()`` reports keys no field asked
    for, which catches answers meant for a branch that was never revealed.
    """

    def __init__(self, answers: Mapping[str, Any]):
        self._answers: Dict[str, Any] = dict(answers)
        self._used: Set[str] = set()

    def unused(self) -> List[str]:
        return sorted(set(self._answers) - self._used)

    def _lookup(self, prompt: FieldPrompt) -> Any:
        self._used.add(prompt.path)
        value = self._answers.get(prompt.path)
        if value is None:
            logger.debug(f"{SOURCE} No answer for {prompt.path}")
            return SKIP
        return value

    def ask_string(self, prompt: FieldPrompt, check: Check) -> Any:
        return self._lookup(prompt)

    def ask_bool(self, prompt: FieldPrompt, check: Check) -> Any:
        return self._lookup(prompt)

    def ask_number(self, prompt: FieldPrompt, check: Check) -> Any:
        return self._lookup(prompt)

    def ask_select(self, prompt: FieldPrompt, items: Sequence[Any], check: Check) -> Any:
        return self._lookup(prompt)

    def ask_multi_select(self, prompt: FieldPrompt, items: Sequence[Any], check: Check) -> Any:
        return self._lookup(prompt)

    def ask_list(self, prompt: FieldPrompt, check_item: Check, check: Check) -> Any:
        return self._lookup(prompt)
