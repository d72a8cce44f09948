# formwright/exceptions.py
"""
Exception types used across formwright.

Two failure kinds exist:
- SchemaError: the schema itself is malformed (raised once, at load time)
- ValidationError: an answer violates a field constraint (raised during a run)

FormAborted is the cancellation signal an input source raises when the
user gives up on the form. It is not a validation failure.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class FormwrightError(Exception):
    """Base class for all formwright specific errors."""


class SchemaError(FormwrightError):
    """Raised when a form schema is malformed."""

    def __init__(self, message: str, source: Optional[str] = None, errors: Sequence[dict] = ()):
        self.source = source
        self.errors = list(errors)

        lines = [f"Invalid form schema: {source}: {message}" if source else message]
        for err in self.errors:
            loc = " -> ".join(str(x) for x in err.get("loc", []))
            msg = err.get("msg", "Unknown error")
            lines.append(f"  - {loc}: {msg}" if loc else f"  - {msg}")

        super().__init__("\n".join(lines))


class ValidationError(FormwrightError):
    """
    Raised when an answer fails a field constraint.

    Carries enough detail for an input source to re-prompt with a precise
    message: the dotted field path, the violated constraint, the raw value
    and, for select fields, the allowed items.
    """

    def __init__(
        self,
        field: str,
        constraint: str,
        value: Any,
        message: str,
        allowed: Optional[Sequence[Any]] = None,
    ):
        self.field = field
        self.constraint = constraint
        self.value = value
        self.allowed = list(allowed) if allowed is not None else None
        self.message = message
        super().__init__(f"{field}: {message}")


class FormAborted(FormwrightError):
    """Raised by an input source to cancel the whole run."""


class ConfigNotFoundError(FormwrightError, FileNotFoundError):
    """Raised when an explicitly requested config file does not exist."""
