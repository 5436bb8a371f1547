from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Union

from infra.paths import LOG_DIR

# Centralized logging setup. Library modules only call get_logger(); the
# runner / CLI decides where records go.
DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s"
JSON_FORMAT = (
    '{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","line":%(lineno)d,"msg":"%(message)s"}'
)
LEVEL_ENV_VAR = "TANK_TACTICS_LOG_LEVEL"
DEFAULT_LOGFILE = LOG_DIR / "battle.log"


def configure_logging(
    level: Union[str, int, None] = None,
    *,
    json: bool = False,
    logfile: str | Path | None = None,
) -> None:
    """
    Configure the root logger with stdout + optional file handler.

    Args:
        level: Logging level name or int. Falls back to $TANK_TACTICS_LOG_LEVEL, then INFO.
        json: Emit JSON lines when True; otherwise a human-friendly format.
        logfile: File path to append logs to (e.g. DEFAULT_LOGFILE); None disables file output.
    """
    if level is None:
        level = os.environ.get(LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        level = level.upper()

    fmt = JSON_FORMAT if json else DEFAULT_FORMAT
    formatter = logging.Formatter(fmt)

    handlers: list[logging.Handler] = []

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    handlers.append(console)

    if logfile is not None:
        log_path = Path(logfile)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    for handler in handlers:
        root.addHandler(handler)

    logging.captureWarnings(True)


def get_logger(name: str) -> logging.Logger:
    """Return a namespaced logger; configure_logging() should be called once on startup."""
    return logging.getLogger(name)


# Usage: configure_logging("DEBUG", logfile=DEFAULT_LOGFILE) once in an entry point, then log = get_logger(__name__) per module.
