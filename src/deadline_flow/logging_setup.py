# src/deadline_flow/logging_setup.py

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path

LOG_FILE_NAME = "deadline_flow.log"
_MAX_BYTES = 2 * 1024 * 1024
_BACKUP_COUNT = 3

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


class ConsoleFilter(logging.Filter):
    """
    Console policy for the REPL.

    deadline_flow.tasks.* logs once per timeline build, so below WARNING it
    goes to the file only. Other deadline_flow loggers pass; everything else
    (including captured py.warnings) needs ERROR.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith("deadline_flow.tasks."):
            return record.levelno >= logging.WARNING
        if name.startswith("deadline_flow."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/deadline_flow",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path | None:
    """
    Install a filtered stderr handler and a size-rotated file handler on the root logger.

    Replaces handlers from an earlier call. Returns the log file path, or None
    when the directory is not writable (console logging still works then).
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(ConsoleFilter())
    root.addHandler(console)

    log_file: Path | None = Path(log_dir) / LOG_FILE_NAME
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        rotating = logging.handlers.RotatingFileHandler(
            filename=str(log_file),
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        root.warning("Cannot write logs to %s; console only", log_file)
        log_file = None
    else:
        rotating.setLevel(file_level)
        rotating.setFormatter(fmt)
        root.addHandler(rotating)

    logging.captureWarnings(True)
    return log_file
