"""
F# emitter.

F# needs a namespace even for a file that only carries assembly
attributes, and a type declaration between attributes must be
surrounded by top-level ``do()`` expressions.
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

DEFAULT_NAMESPACE = "AssemblyInfo"


class FSharpEmitter(CodeEmitter):
    name = "f#"
    label = "F#"
    aliases = ("fsharp", "fs")
    file_extension = ".fs"
    comment_token = "//"

    def string_literal(self, value: str) -> str:
        return escape_backslash_literal(value)

    def emit_namespace_if_required(self, out: CodeBuilder, namespace: str | None) -> None:
        out.line(f"namespace {namespace or DEFAULT_NAMESPACE}")

    def declare_attribute(self, out: CodeBuilder, kind: AttributeKind, value: str) -> None:
        out.line(f"[<assembly: {kind.type_name}({self.string_literal(value)})>]")

    def start_this_assembly_class(
        self, out: CodeBuilder, generator_name: str, generator_version: str
    ) -> None:
        name = self.string_literal(generator_name)
        version = self.string_literal(generator_version)
        out.line("do()")
        out.line(f"[<{GENERATED_CODE_ATTRIBUTE}({name},{version})>]")
        out.line(f"type internal {THIS_ASSEMBLY}() =")

    def add_member(self, out: CodeBuilder, name: str, value: str) -> None:
        out.line(f"  static member internal {name} = {self.string_literal(value)}")

    def add_commit_date_member(self, out: CodeBuilder, ticks: int) -> None:
        out.line(
            "  static member internal GitCommitDate = "
            f"new System.DateTimeOffset({ticks}L, System.TimeSpan.Zero)"
        )

    def end_this_assembly_class(self, out: CodeBuilder) -> None:
        out.line("do()")
