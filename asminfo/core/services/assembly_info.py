"""
Assembly info generation: model assembly and the fixed emission sequence.

``build_version_metadata`` turns raw facts into an immutable model.
``generate`` drives any emitter through the same call sequence, so the
output differs between languages only in surface syntax. Identical
inputs always produce identical text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from asminfo import GENERATOR_NAME, __version__
from asminfo.core.models.version_info import KeyInfo, VersionFacts, VersionMetadata
from asminfo.core.services.emitters import (
    AttributeKind,
    CodeBuilder,
    CodeEmitter,
    select_emitter,
)

logger = logging.getLogger(__name__)

FILE_HEADER_COMMENT = """\
------------------------------------------------------------------------------
 <auto-generated>
     This code was generated by a tool.
     Runtime Version:4.0.30319.42000

     Changes to this file may cause incorrect behavior and will be lost if
     the code is regenerated.
 </auto-generated>
------------------------------------------------------------------------------
"""

ROOT_NAMESPACE_MEMBER = "RootNamespace"

# Fixed constant order: (constant name, VersionFacts field).
CONSTANT_FIELDS: tuple[tuple[str, str], ...] = (
    ("AssemblyVersion", "assembly_version"),
    ("AssemblyFileVersion", "assembly_file_version"),
    ("AssemblyInformationalVersion", "assembly_informational_version"),
    ("AssemblyName", "assembly_name"),
    ("AssemblyTitle", "assembly_title"),
    ("AssemblyProduct", "assembly_product"),
    ("AssemblyCopyright", "assembly_copyright"),
    ("AssemblyCompany", "assembly_company"),
    ("AssemblyConfiguration", "assembly_configuration"),
    ("GitCommitId", "git_commit_id"),
)

VERSION_ATTRIBUTES = (
    AttributeKind.VERSION,
    AttributeKind.FILE_VERSION,
    AttributeKind.INFORMATIONAL_VERSION,
)

DESCRIPTIVE_ATTRIBUTES = (
    AttributeKind.TITLE,
    AttributeKind.PRODUCT,
    AttributeKind.COMPANY,
    AttributeKind.COPYRIGHT,
)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_TICKS_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$")


@dataclass(frozen=True)
class UnsupportedLanguage:
    """Returned instead of code when no emitter matches the language."""

    language: str

    @property
    def message(self) -> str:
        return (
            f"Unsupported code language: {self.language}. "
            "No version info will be embedded into the assembly."
        )


# ── Model assembly ──────────────────────────────────────────────────


def parse_ticks(raw: str | None) -> int | None:
    """Parse a commit date tick count; anything but a 64-bit integer is None."""
    if raw is None or not _TICKS_RE.match(raw):
        return None
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def build_version_metadata(
    facts: VersionFacts,
    key_info: KeyInfo | None = None,
    generator_name: str = GENERATOR_NAME,
    generator_version: str = __version__,
) -> VersionMetadata:
    """Assemble the immutable model emitted by ``generate``.

    Constants with empty values are dropped here; the public key pair
    is appended after GitCommitId only when key info is available.
    """
    pairs: list[tuple[str, str | None]] = [
        (name, getattr(facts, attr)) for name, attr in CONSTANT_FIELDS
    ]
    if key_info is not None:
        pairs.append(("PublicKey", key_info.public_key))
        pairs.append(("PublicKeyToken", key_info.public_key_token))

    ticks = parse_ticks(facts.git_commit_date_ticks)
    if ticks is None and facts.git_commit_date_ticks:
        logger.debug("Ignoring non-numeric commit date ticks: %r", facts.git_commit_date_ticks)

    return VersionMetadata(
        named_constants=tuple((name, value) for name, value in pairs if value),
        commit_date_ticks=ticks,
        root_namespace=facts.root_namespace or "",
        emit_descriptive_attributes=facts.emit_non_version_custom_attributes,
        generator_name=generator_name,
        generator_version=generator_version,
    )


def assembly_attributes(model: VersionMetadata) -> list[tuple[AttributeKind, str]]:
    """Assembly attributes to declare, in declaration order.

    Version attributes are always declared. Descriptive ones only when
    enabled on the model and non-empty.
    """
    attributes = [(kind, model.constant(kind.value)) for kind in VERSION_ATTRIBUTES]
    if model.emit_descriptive_attributes:
        for kind in DESCRIPTIVE_ATTRIBUTES:
            value = model.constant(kind.value)
            if value:
                attributes.append((kind, value))
    return attributes


# ── Emission ────────────────────────────────────────────────────────


def generate(
    model: VersionMetadata,
    emitter: CodeEmitter,
    namespace: str | None = None,
    header: str = FILE_HEADER_COMMENT,
    newline: str = "\n",
) -> str:
    """Render ``model`` with ``emitter`` and return the file content.

    Args:
        model: Version metadata to emit.
        emitter: Target language emitter.
        namespace: Namespace hint for languages that require one.
            Defaults to the model's root namespace.
        header: Banner comment placed at the top of the file.
        newline: Line terminator.
    """
    out = CodeBuilder(newline=newline)

    emitter.add_comment(out, header)
    emitter.add_blank_line(out)
    emitter.emit_namespace_if_required(
        out, namespace if namespace is not None else model.root_namespace
    )

    for kind, value in assembly_attributes(model):
        emitter.declare_attribute(out, kind, value)

    emitter.start_this_assembly_class(out, model.generator_name, model.generator_version)
    for name, value in model.named_constants:
        emitter.add_member(out, name, value)
    if model.commit_date_ticks is not None:
        emitter.add_commit_date_member(out, model.commit_date_ticks)
    emitter.add_member(out, ROOT_NAMESPACE_MEMBER, model.root_namespace)
    emitter.end_this_assembly_class(out)

    return emitter.get_code(out)


def build_code(
    model: VersionMetadata,
    language: str,
    namespace: str | None = None,
    newline: str = "\n",
) -> str | UnsupportedLanguage:
    """Select the emitter for ``language`` and generate, or report it unsupported."""
    emitter = select_emitter(language)
    if emitter is None:
        logger.debug("No emitter for language %r", language)
        return UnsupportedLanguage(language)
    return generate(model, emitter, namespace=namespace, newline=newline)
