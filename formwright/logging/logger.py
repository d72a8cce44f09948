# formwright/logging/logger.py
"""
Logger factory.

Every module does:

    from formwright.logging.logger import get_logger
    logger = get_logger(__name__)

and prefixes messages with a tag from formwright.logging.tags. The root
"formwright" logger gets a single stream handler; its level comes from
FORMWRIGHT_LOG_LEVEL (default WARNING so interactive prompts stay clean).
"""

from __future__ import annotations

import logging
import os

_ROOT_NAME = "formwright"
_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return

    root = logging.getLogger(_ROOT_NAME)
    level_name = os.environ.get("FORMWRIGHT_LOG_LEVEL", "WARNING").upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the formwright hierarchy."""
    _configure_root()
    if name != _ROOT_NAME and not name.startswith(_ROOT_NAME + "."):
        name = f"{_ROOT_NAME}.{name}"
    return logging.getLogger(name)
