"""
Configuration loader: reads asminfo.yml into VersionFacts.

The YAML holds the build facts the generator embeds. It may be flat or
wrap everything under an ``assembly:`` key. Keys use the model's field
names (``assembly_version``, ``git_commit_id``, ...).
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from asminfo.core.models.version_info import VersionFacts

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "asminfo.yml"

_WRAPPER_KEY = "assembly"


class ConfigError(Exception):
    """Raised when the facts configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for asminfo.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to asminfo.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_version_facts(path: Path) -> VersionFacts:
    """Load and validate version facts from a YAML file.

    Relative ``assembly_originator_key_file`` paths are resolved against
    the directory holding the config file.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading version facts from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        # BaseLoader keeps every scalar as written: 1.10 stays "1.10", 0123 stays "0123"
        data = yaml.load(raw, Loader=yaml.BaseLoader)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    if _WRAPPER_KEY in data:
        data = data[_WRAPPER_KEY] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping under '{_WRAPPER_KEY}' in {path}")

    # An empty value ("key:") means unset
    data = {key: value for key, value in data.items() if value != ""}

    try:
        facts = VersionFacts.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid version facts in {path}: {e}") from e

    key_file = facts.assembly_originator_key_file
    if key_file and not Path(key_file).is_absolute():
        facts = facts.model_copy(
            update={"assembly_originator_key_file": str(path.parent.resolve() / key_file)}
        )

    logger.info("Loaded version facts from %s", path)
    return facts
