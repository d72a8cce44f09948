# formwright/sources/__init__.py
"""Input sources: where answers come from."""

from formwright.sources.answers import MappingInputSource, ScriptedInputSource
from formwright.sources.base import SKIP, Check, FieldPrompt, InputSource, Skip
from formwright.sources.console import ConsoleInputSource

__all__ = [
    "SKIP",
    "Skip",
    "Check",
    "FieldPrompt",
    "InputSource",
    "ConsoleInputSource",
    "MappingInputSource",
    "ScriptedInputSource",
]
