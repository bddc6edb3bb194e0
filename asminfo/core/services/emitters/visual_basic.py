"""
Visual Basic emitter.
"""

from __future__ import annotations

from asminfo.core.services.emitters.base import (
    GENERATED_CODE_ATTRIBUTE,
    THIS_ASSEMBLY,
    AttributeKind,
    CodeBuilder,
    CodeEmitter,
)

# Typographic and full-width quotes also terminate a VB string literal, and
# NEL/LS/PS end the line.
_SPLICED_CHARS = {
    "\n": "vbLf",
    "\u201c": "ChrW(&H201C)",
    "\u201d": "ChrW(&H201D)",
    "\uff02": "ChrW(&HFF02)",
    "\u0085": "ChrW(&H85)",
    "\u2028": "ChrW(&H2028)",
    "\u2029": "ChrW(&H2029)",
}


class VisualBasicEmitter(CodeEmitter):
    name = "visual basic"
    label = "Visual Basic"
    aliases = ("visualbasic", "vb")
    file_extension = ".vb"
    comment_token = "'"

    def string_literal(self, value: str) -> str:
        # No escape sequences in VB: ASCII quotes are doubled, everything the
        # compiler reads as a quote or line end is spliced in as an expression.
        normalized = value.replace("\r\n", "\n").replace("\r", "\n")
        parts = []
        chunk: list[str] = []
        for char in normalized:
            spliced = _SPLICED_CHARS.get(char)
            if spliced is None:
                chunk.append('""' if char == '"' else char)
                continue
            parts.append('"' + "".join(chunk) + '"')
            parts.append(spliced)
            chunk = []
        parts.append('"' + "".join(chunk) + '"')
        return " & ".join(parts)

    def declare_attribute(self, out: CodeBuilder, kind: AttributeKind, value: str) -> None:
        out.line(f"<Assembly: {kind.type_name}({self.string_literal(value)})>")

    def start_this_assembly_class(
        self, out: CodeBuilder, generator_name: str, generator_version: str
    ) -> None:
        name = self.string_literal(generator_name)
        version = self.string_literal(generator_version)
        out.line(f"<{GENERATED_CODE_ATTRIBUTE}({name},{version})>")
        out.line(f"Partial Friend NotInheritable Class {THIS_ASSEMBLY}")

    def add_member(self, out: CodeBuilder, name: str, value: str) -> None:
        out.line(f"    Friend Const {name} As String = {self.string_literal(value)}")

    def add_commit_date_member(self, out: CodeBuilder, ticks: int) -> None:
        out.line(
            "    Friend Shared ReadOnly GitCommitDate As System.DateTimeOffset = "
            f"New System.DateTimeOffset({ticks}, System.TimeSpan.Zero)"
        )

    def end_this_assembly_class(self, out: CodeBuilder) -> None:
        out.line("End Class")
