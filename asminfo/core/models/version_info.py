"""
Version info models: raw build facts in, immutable metadata out.

``VersionFacts`` is what a caller collects (config file, CLI options).
``VersionMetadata`` is what the emitters consume: constants already in
their fixed emission order, commit date already parsed.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class VersionFacts(BaseModel):
    """Raw versioning facts supplied by the caller.

    Every value is optional; empty strings behave like missing values
    except ``root_namespace``, which is always emitted.
    """

    model_config = ConfigDict(extra="forbid")

    assembly_version: str | None = None
    assembly_file_version: str | None = None
    assembly_informational_version: str | None = None
    assembly_name: str | None = None
    assembly_title: str | None = None
    assembly_product: str | None = None
    assembly_copyright: str | None = None
    assembly_company: str | None = None
    assembly_configuration: str | None = None
    git_commit_id: str | None = None
    git_commit_date_ticks: str | None = None
    root_namespace: str | None = None
    assembly_originator_key_file: str | None = None
    assembly_key_container_name: str | None = None
    emit_non_version_custom_attributes: bool = False

    def merged(self, overrides: dict[str, object]) -> VersionFacts:
        """Return a copy with non-None overrides applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        return self.model_copy(update=updates)


class KeyInfo(BaseModel):
    """Hex-encoded strong-name public key and its token (always both)."""

    model_config = ConfigDict(frozen=True)

    public_key: str
    public_key_token: str


class VersionMetadata(BaseModel):
    """Everything one generation call emits. Read-only."""

    model_config = ConfigDict(frozen=True)

    named_constants: tuple[tuple[str, str], ...] = ()
    commit_date_ticks: int | None = None
    root_namespace: str = ""
    emit_descriptive_attributes: bool = False
    generator_name: str
    generator_version: str

    def constant(self, name: str) -> str:
        """Look up a constant value by name ("" when not present)."""
        for key, value in self.named_constants:
            if key == name:
                return value
        return ""

    def constant_names(self) -> list[str]:
        return [name for name, _ in self.named_constants]
