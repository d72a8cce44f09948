# formwright/logging/tags.py
"""Message tags, one per subsystem."""

SCHEMA = "[SCHEMA]"
FORM = "[FORM]"
SOURCE = "[SOURCE]"
CONFIG = "[CONFIG]"
