"""
Key info resolution: signing-key file or container to public key + token.

Missing key configuration is not an error; the public key constants are
simply left out of the generated file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from asminfo.core.models.version_info import KeyInfo
from asminfo.core.services.strong_name import (
    PRIVATE_KEY_BLOB_ID,
    InvalidKeyBlobError,
    public_key_from_private_key_blob,
    strong_name_token,
)

logger = logging.getLogger(__name__)

SNK_EXTENSION = ".snk"

EMPTY_KEY_WARNING = (
    "Unable to emit public key fields in ThisAssembly class because "
    "the key material is empty."
)


class KeyDerivationError(Exception):
    """Raised when a key pair file exists but cannot be parsed."""

    def __init__(self, path: Path, cause: InvalidKeyBlobError):
        super().__init__(f"Invalid key pair in {path}: {cause}")
        self.path = path
        self.cause = cause


@dataclass
class KeyInfoResult:
    """Outcome of key resolution: key info (or None) plus warnings."""

    key_info: KeyInfo | None = None
    warnings: list[str] = field(default_factory=list)


def resolve_key_info(
    key_file: str | Path | None = None,
    key_container: str | None = None,
) -> KeyInfoResult:
    """Resolve the strong-name public key and token for an assembly.

    Args:
        key_file: Path to a ``.snk`` file (key pair or public key only).
        key_container: Name of a platform key container.

    Returns:
        KeyInfoResult. ``key_info`` is None when no key is configured,
        the file is missing or not a ``.snk``, or container lookup is
        unavailable.

    Raises:
        KeyDerivationError: The key pair file is malformed.
    """
    result = KeyInfoResult()

    try:
        public_key = _read_public_key(key_file, key_container)
    except NotImplementedError:
        logger.info("Key container %r cannot be read here; skipping key info", key_container)
        return result

    if public_key is None:
        return result

    if not public_key:
        logger.warning(EMPTY_KEY_WARNING)
        result.warnings.append(EMPTY_KEY_WARNING)
        return result

    result.key_info = KeyInfo(
        public_key=public_key.hex(),
        public_key_token=strong_name_token(public_key).hex(),
    )
    logger.debug("Resolved public key token %s", result.key_info.public_key_token)
    return result


def _read_public_key(key_file: str | Path | None, key_container: str | None) -> bytes | None:
    if key_file and Path(key_file).is_file():
        path = Path(key_file)
        if path.suffix.lower() != SNK_EXTENSION:
            logger.debug("Ignoring key file without %s extension: %s", SNK_EXTENSION, path)
            return None

        key_bytes = path.read_bytes()
        if not key_bytes:
            return key_bytes

        if key_bytes[0] != PRIVATE_KEY_BLOB_ID:
            logger.debug("Key file %s holds a public key only", path)
            return key_bytes

        try:
            return public_key_from_private_key_blob(key_bytes)
        except InvalidKeyBlobError as e:
            raise KeyDerivationError(path, e) from e

    if key_container:
        return public_key_from_key_container(key_container)

    return None


def public_key_from_key_container(container_name: str) -> bytes:
    """Read the public key from a named key container (not supported)."""
    raise NotImplementedError(f"Key containers are not supported: {container_name}")
