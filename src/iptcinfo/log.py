from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def setup_logging(level: str | None = None) -> None:
    """Configure rich console logging on the root logger.

    Level resolution (first match wins): argument, ``IPTCINFO_LOG_LEVEL``,
    then WARNING. Safe to call more than once.
    """
    if level is None:
        level = os.environ.get("IPTCINFO_LOG_LEVEL", "WARNING")

    level = str(level).upper().strip()
    if level not in LEVELS:
        level = "WARNING"

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%H:%M:%S]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
