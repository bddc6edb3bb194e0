"""
C# emitter.

CodeDOM-style generation has no static classes, so ThisAssembly is a
sealed partial class with a private constructor.
"""

from __future__ import annotations

from asminfo.core.services.emitters.base import (
    GENERATED_CODE_ATTRIBUTE,
    THIS_ASSEMBLY,
    AttributeKind,
    CodeBuilder,
    CodeEmitter,
    escape_backslash_literal,
)


class CSharpEmitter(CodeEmitter):
    name = "c#"
    label = "C#"
    aliases = ("csharp", "cs")
    file_extension = ".cs"
    comment_token = "//"

    def string_literal(self, value: str) -> str:
        return escape_backslash_literal(value)

    def declare_attribute(self, out: CodeBuilder, kind: AttributeKind, value: str) -> None:
        out.line(f"[assembly: {kind.type_name}({self.string_literal(value)})]")

    def start_this_assembly_class(
        self, out: CodeBuilder, generator_name: str, generator_version: str
    ) -> None:
        name = self.string_literal(generator_name)
        version = self.string_literal(generator_version)
        out.line(f"[{GENERATED_CODE_ATTRIBUTE}({name},{version})]")
        out.line(f"internal sealed partial class {THIS_ASSEMBLY} {{")
        out.line(f"    private {THIS_ASSEMBLY}() {{")
        out.line("    }")

    def add_member(self, out: CodeBuilder, name: str, value: str) -> None:
        out.line(f"    internal const string {name} = {self.string_literal(value)};")

    def add_commit_date_member(self, out: CodeBuilder, ticks: int) -> None:
        out.line(
            "    internal static readonly System.DateTimeOffset GitCommitDate = "
            f"new System.DateTimeOffset({ticks}, System.TimeSpan.Zero);"
        )

    def end_this_assembly_class(self, out: CodeBuilder) -> None:
        out.line("}")
