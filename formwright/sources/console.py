# formwright/sources/console.py
"""
Interactive console input source.

Prompts on a rich Console, one field at a time:
- a bold title and dimmed description before each field (unless quiet)
- an empty answer skips a can_skip field
- an empty entry ends a list
- invalid answers print the validation message and ask again

Ctrl-C or end of input cancels the whole form (FormAborted).
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, TextIO

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

from formwright.config import FormConfig
from formwright.exceptions import FormAborted, ValidationError
from formwright.logging.logger import get_logger
from formwright.logging.tags import SOURCE
from formwright.sources.base import SKIP, Check, FieldPrompt

logger = get_logger(__name__)

CROSS = "✗"
ARROW = "→"


class _LineReader:
    """Wraps an answer stream so that running out of lines raises EOFError."""

    def __init__(self, stream: TextIO):
        self._stream = stream

    def readline(self) -> str:
        line = self._stream.readline()
        if line == "":
            raise EOFError
        return line


def _display(item: Any) -> str:
    if isinstance(item, bool):
        return "true" if item else "false"
    return str(item)


class ConsoleInputSource:
    """Answers typed by a person at a terminal."""

    def __init__(
        self,
        console: Optional[Console] = None,
        config: Optional[FormConfig] = None,
        stream: Optional[TextIO] = None,
    ):
        self.console = console or Console()
        self.config = config or FormConfig()
        self.stream = _LineReader(stream) if stream is not None else None

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _header(self, prompt: FieldPrompt) -> None:
        if self.config.quiet:
            return

        field = prompt.field
        if field.display_name:
            self.console.print()
            self.console.print(f"[bold underline]{escape(field.display_name)}[/bold underline]:")
        else:
            self.console.print()

        for line in prompt.description.splitlines():
            self.console.print(f"  {line}", style="dim italic", markup=False, highlight=False)

    def _error(self, msg: str) -> None:
        self.console.print(f"[red]{CROSS}[/red] {escape(msg)}")

    def _read(self, text: str, hint: str = "") -> str:
        """Read one line; end of input or Ctrl-C aborts the form."""
        hint_str = f" [dim]{escape(hint)}[/dim]" if hint else ""
        try:
            return Prompt.ask(
                f"[bold]{escape(text)}[/bold]{hint_str}",
                console=self.console,
                stream=self.stream,
            ).strip()
        except (KeyboardInterrupt, EOFError) as e:
            logger.debug(f"{SOURCE} Input cancelled")
            raise FormAborted("input ended before the form was complete") from e

    def _confirm(self, text: str) -> bool:
        try:
            return Confirm.ask(text, console=self.console, stream=self.stream)
        except (KeyboardInterrupt, EOFError) as e:
            logger.debug(f"{SOURCE} Input cancelled")
            raise FormAborted("input ended before the form was complete") from e

    def _ask_text(self, prompt: FieldPrompt, check: Check, hint: str = "") -> Any:
        self._header(prompt)
        if prompt.can_skip:
            hint = f"{hint}, empty to skip" if hint else "empty to skip"

        while True:
            answer = self._read(prompt.label, hint)
            raw = SKIP if answer == "" and prompt.can_skip else answer
            try:
                return check(raw)
            except ValidationError as e:
                self._error(e.message)

    # ------------------------------------------------------------------
    # InputSource
    # ------------------------------------------------------------------

    def ask_string(self, prompt: FieldPrompt, check: Check) -> Any:
        return self._ask_text(prompt, check)

    def ask_bool(self, prompt: FieldPrompt, check: Check) -> Any:
        return self._ask_text(prompt, check, "y/n")

    def ask_number(self, prompt: FieldPrompt, check: Check) -> Any:
        low, high = prompt.field.bounds
        hint = f"{low}..{high}" if prompt.field.type.is_integer else ""
        return self._ask_text(prompt, check, hint)

    def _print_choices(self, items: Sequence[Any]) -> None:
        for i, item in enumerate(items, 1):
            self.console.print(f"  [cyan]\\[{i}][/cyan] {escape(_display(item))}")

    def _pick(self, answer: str, items: Sequence[Any]) -> Any:
        """
        Resolve typed item text or a choice number to an item; None if neither.

        Exact item text wins, so items such as "1" or 10 stay reachable.
        """
        for item in items:
            if _display(item) == answer:
                return item
        if answer.isdigit():
            idx = int(answer)
            if 1 <= idx <= len(items):
                return items[idx - 1]
        return None

    def ask_select(self, prompt: FieldPrompt, items: Sequence[Any], check: Check) -> Any:
        self._header(prompt)
        self._print_choices(items)
        hint = f"1-{len(items)}" + (", empty to skip" if prompt.can_skip else "")

        while True:
            answer = self._read(prompt.label, hint)
            if answer == "" and prompt.can_skip:
                return check(SKIP)

            item = self._pick(answer, items)
            if item is None:
                self._error(f"Please enter 1-{len(items)} or one of the listed values")
                continue
            try:
                value = check(item)
            except ValidationError as e:
                self._error(e.message)
                continue
            self.console.print(f"  [dim]{ARROW} {escape(_display(value))}[/dim]")
            return value

    def ask_multi_select(self, prompt: FieldPrompt, items: Sequence[Any], check: Check) -> Any:
        self._header(prompt)
        self._print_choices(items)
        hint = "comma-separated" + (", empty to skip" if prompt.can_skip else "")

        while True:
            answer = self._read(prompt.label, hint)
            if answer == "":
                raw: Any = SKIP if prompt.can_skip else []
            else:
                raw = [self._pick(part.strip(), items) for part in answer.split(",")]
                if any(item is None for item in raw):
                    self._error(f"Please enter numbers 1-{len(items)} separated by commas")
                    continue
            try:
                return check(raw)
            except ValidationError as e:
                self._error(e.message)

    def ask_list(self, prompt: FieldPrompt, check_item: Check, check: Check) -> Any:
        self._header(prompt)
        field = prompt.field
        values: List[Any] = []

        while field.max_items is None or len(values) < field.max_items:
            answer = self._read(f"{prompt.label} #{len(values) + 1}", "empty to finish")
            if answer != "":
                try:
                    values.append(check_item(answer))
                except ValidationError as e:
                    self._error(e.message)
                continue

            if len(values) >= field.min_items:
                break

            self._error(
                f"This field requires a minimum of {field.min_items} values to be provided."
            )
            if prompt.can_skip and self._confirm("Skip this field?"):
                return check(SKIP)

        return check(values)
