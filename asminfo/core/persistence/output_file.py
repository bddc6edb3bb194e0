"""
Output file persistence: atomic, retried, churn-free writes.

The generated file is rewritten on every build. Writing identical bytes
would still bump the mtime and trigger recompilation, so an unchanged
file is left alone. Writes go to a temp file in the same directory and
are renamed into place; transient OS errors (a compiler or indexer
holding the file open) are retried with exponential backoff.
"""

from __future__ import annotations

import logging
import tempfile
import time
from pathlib import Path

from asminfo.core.models.template import GeneratedFile

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS = 5
DEFAULT_BASE_DELAY = 0.1


def write_generated_file(
    file: GeneratedFile,
    root: Path | None = None,
    attempts: int = DEFAULT_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY,
) -> bool:
    """Persist a generated file.

    Args:
        file: The file to write. Relative paths resolve against ``root``.
        root: Base directory (default: cwd).
        attempts: Total write attempts before giving up.
        base_delay: Delay before the first retry; doubles each time.

    Returns:
        True if the file was written, False if it was already up to date
        (or exists and ``file.overwrite`` is False).

    Raises:
        OSError: The last attempt failed.
    """
    path = Path(file.path)
    if not path.is_absolute():
        path = (root or Path.cwd()) / path

    data = file.content.encode("utf-8")

    if path.is_file():
        if not file.overwrite:
            logger.info("Not overwriting existing %s", path)
            return False
        if path.read_bytes() == data:
            logger.info("%s is up to date", path)
            return False

    path.parent.mkdir(parents=True, exist_ok=True)

    for attempt in range(1, attempts + 1):
        try:
            _atomic_write(path, data)
            logger.info("Wrote %s (%d bytes)", path, len(data))
            return True
        except OSError as e:
            if attempt >= attempts:
                logger.error("Failed to write %s after %d attempts: %s", path, attempts, e)
                raise
            delay = base_delay * (2 ** (attempt - 1))
            logger.debug(
                "Write to %s failed (attempt %d/%d): %s; retrying in %.2fs",
                path, attempt, attempts, e, delay,
            )
            time.sleep(delay)

    return False


def _atomic_write(path: Path, data: bytes) -> None:
    """Write to a temp file next to ``path``, then rename over it."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}_", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with open(fd, "wb") as fh:
            fh.write(data)
        tmp.replace(path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
