"""
Logging for the asminfo CLI.

Console records go to stderr through ``click.echo`` so they interleave with
the command's own ``err=True`` messages and follow whatever stream click
currently owns. An optional file gets full detail.

Environment:
    ASMINFO_LOG_LEVEL       console level when no CLI flag is given
    ASMINFO_LOG_FILE        path of an extra log file
    ASMINFO_LOG_FILE_LEVEL  level for that file (default: console level)
"""

from __future__ import annotations

import logging
import os

import click

ENV_LEVEL = "ASMINFO_LOG_LEVEL"
ENV_FILE = "ASMINFO_LOG_FILE"
ENV_FILE_LEVEL = "ASMINFO_LOG_FILE_LEVEL"

_CONSOLE_FMT = "%(levelname)s: %(message)s"
_FILE_FMT = "%(asctime)s %(levelname)-7s %(name)s:%(lineno)d: %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

_LEVEL_COLORS = {
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


class ClickHandler(logging.Handler):
    """Write records to click's current stderr, coloured by level."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            click.secho(message, err=True, fg=_LEVEL_COLORS.get(record.levelno))
        except Exception:
            self.handleError(record)


def setup_logging(
    level: str | None = None,
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for one CLI run.

    Arguments left as None fall back to the ``ASMINFO_LOG_*`` environment
    variables; the console level finally defaults to WARNING.
    """
    console_level = _parse_level(level or os.environ.get(ENV_LEVEL))
    log_file = log_file or os.environ.get(ENV_FILE)

    console = ClickHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FMT))

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(
            log_file_level or os.environ.get(ENV_FILE_LEVEL) or logging.getLevelName(console_level)
        )
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FMT, datefmt=_FILE_DATEFMT))
        root.addHandler(fh)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)


def _parse_level(level: str | None) -> int:
    """Map a level name (any case) to its number; unknown names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
