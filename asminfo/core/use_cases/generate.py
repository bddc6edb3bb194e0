"""
Generate use case: version facts in, generated source file out.

Resolves key info, assembles the metadata model, picks the emitter and
renders. Expected failures (unsupported language, bad key pair in strict
mode) are reported in the result, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from asminfo import GENERATOR_NAME, __version__
from asminfo.core.models.template import GeneratedFile
from asminfo.core.models.version_info import KeyInfo, VersionFacts
from asminfo.core.services.assembly_info import build_version_metadata, generate
from asminfo.core.services.emitters import select_emitter
from asminfo.core.services.key_info import KeyDerivationError, resolve_key_info

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_STEM = "AssemblyVersionInfo"


@dataclass
class GenerateResult:
    """Result of one generation request."""

    ok: bool = False
    language: str = ""
    file: GeneratedFile | None = None
    key_info: KeyInfo | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "language": self.language,
            "path": self.file.path if self.file else None,
            "reason": self.file.reason if self.file else None,
            "content": self.file.content if self.file else None,
            "public_key_token": self.key_info.public_key_token if self.key_info else None,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def default_output_path(extension: str) -> str:
    return f"{DEFAULT_OUTPUT_STEM}{extension}"


def generate_version_file(
    facts: VersionFacts,
    language: str,
    output_path: str | Path | None = None,
    strict_keys: bool = False,
    generator_name: str = GENERATOR_NAME,
    generator_version: str = __version__,
) -> GenerateResult:
    """Produce the version info source file for ``language``.

    Args:
        facts: Raw build facts.
        language: Target language identifier (``c#``, ``vb``, ``f#``, ...).
        output_path: Where the file should go. Defaults to
            ``AssemblyVersionInfo`` plus the language's extension.
        strict_keys: Treat an unreadable key pair as an error instead of
            generating without public key constants.
        generator_name: Tool name recorded in the GeneratedCode attribute.
        generator_version: Tool version recorded alongside it.

    Returns:
        GenerateResult with the file on success.
    """
    result = GenerateResult(language=language)

    emitter = select_emitter(language)
    if emitter is None:
        result.errors.append(
            f"Unsupported code language: {language}. "
            "No version info will be embedded into the assembly."
        )
        logger.error(result.errors[-1])
        return result

    try:
        key_result = resolve_key_info(
            facts.assembly_originator_key_file,
            facts.assembly_key_container_name,
        )
    except KeyDerivationError as e:
        if strict_keys:
            result.errors.append(str(e))
            logger.error("%s", e)
            return result
        result.warnings.append(f"{e}; public key constants omitted.")
        logger.warning("%s; public key constants omitted", e)
    else:
        result.key_info = key_result.key_info
        result.warnings.extend(key_result.warnings)

    model = build_version_metadata(
        facts,
        result.key_info,
        generator_name=generator_name,
        generator_version=generator_version,
    )
    content = generate(model, emitter)

    result.file = GeneratedFile(
        path=str(output_path) if output_path else default_output_path(emitter.file_extension),
        content=content,
        language=emitter.name,
        reason=f"{emitter.label} version info for {facts.assembly_name or 'assembly'}",
    )
    result.ok = True
    logger.info(
        "Generated %s version info (%d constants)",
        emitter.label, len(model.named_constants) + 1,
    )
    return result
