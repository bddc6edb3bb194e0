"""
Code emitter base: the protocol every target language implements.

Generation is a fixed sequence of calls, driven by the orchestrator
(``asminfo.core.services.assembly_info.generate``):

    add_comment(header)
    add_blank_line()
    emit_namespace_if_required(namespace)
    declare_attribute(kind, value)        # per assembly attribute
    start_this_assembly_class(name, version)
    add_member(name, value)               # per constant, fixed order
    add_commit_date_member(ticks)         # only when ticks are known
    add_member("RootNamespace", value)    # always
    end_this_assembly_class()
    get_code()

Emitters hold no state. Text accumulates in a ``CodeBuilder`` owned by
the caller, so one emitter instance can serve any number of concurrent
generations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

THIS_ASSEMBLY = "ThisAssembly"
GENERATED_CODE_ATTRIBUTE = "System.CodeDom.Compiler.GeneratedCode"


class AttributeKind(str, Enum):
    """Assembly-level attributes the generated file may declare."""

    VERSION = "AssemblyVersion"
    FILE_VERSION = "AssemblyFileVersion"
    INFORMATIONAL_VERSION = "AssemblyInformationalVersion"
    TITLE = "AssemblyTitle"
    PRODUCT = "AssemblyProduct"
    COMPANY = "AssemblyCompany"
    COPYRIGHT = "AssemblyCopyright"

    @property
    def type_name(self) -> str:
        """Fully qualified attribute type, e.g. System.Reflection.AssemblyVersionAttribute."""
        return f"System.Reflection.{self.value}Attribute"


class CodeBuilder:
    """Line-oriented text accumulator for one generation call."""

    def __init__(self, newline: str = "\n"):
        self._lines: list[str] = []
        self._newline = newline

    def line(self, text: str = "") -> None:
        """Append one line of text."""
        self._lines.append(text)

    def lines(self) -> list[str]:
        return list(self._lines)

    def getvalue(self) -> str:
        """Full text, every line terminated by the newline sequence."""
        return "".join(f"{line}{self._newline}" for line in self._lines)

    def __len__(self) -> int:
        return len(self._lines)


class CodeEmitter(ABC):
    """Abstract base class for all language emitters.

    To add a language:
        1. Subclass CodeEmitter
        2. Set name, aliases, file_extension, comment_token
        3. Implement the abstract rendering methods
        4. Register it in ``asminfo.core.services.emitters``
    """

    #: Canonical language identifier (lowercase).
    name: str = ""
    #: Human-friendly label.
    label: str = ""
    #: Additional identifiers accepted by the selector (lowercase).
    aliases: tuple[str, ...] = ()
    #: Extension of the generated source file, including the dot.
    file_extension: str = ""
    #: Single-line comment token.
    comment_token: str = "//"

    # ── Shared operations ───────────────────────────────────────

    def add_comment(self, out: CodeBuilder, comment: str) -> None:
        """Render each line of ``comment`` behind the comment token."""
        for line in comment.splitlines():
            out.line(f"{self.comment_token}{line}")

    def add_blank_line(self, out: CodeBuilder) -> None:
        out.line()

    def emit_namespace_if_required(self, out: CodeBuilder, namespace: str | None) -> None:
        """Give languages that require a namespace a chance to emit one."""

    def get_code(self, out: CodeBuilder) -> str:
        return out.getvalue()

    def identifiers(self) -> tuple[str, ...]:
        """All identifiers this emitter answers to."""
        return (self.name, *self.aliases)

    # ── Language-specific rendering ─────────────────────────────

    @abstractmethod
    def string_literal(self, value: str) -> str:
        """Quote and escape ``value`` as a string literal."""

    @abstractmethod
    def declare_attribute(self, out: CodeBuilder, kind: AttributeKind, value: str) -> None:
        """Declare an assembly-level attribute with one string argument."""

    @abstractmethod
    def start_this_assembly_class(
        self, out: CodeBuilder, generator_name: str, generator_version: str
    ) -> None:
        """Open the non-instantiable ThisAssembly container type."""

    @abstractmethod
    def add_member(self, out: CodeBuilder, name: str, value: str) -> None:
        """Declare an internal string constant on ThisAssembly."""

    @abstractmethod
    def add_commit_date_member(self, out: CodeBuilder, ticks: int) -> None:
        """Declare a read-only GitCommitDate at ``ticks`` with zero UTC offset."""

    @abstractmethod
    def end_this_assembly_class(self, out: CodeBuilder) -> None:
        """Close the ThisAssembly container type."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


# Characters that may not appear raw in a regular string literal. The
# Unicode line terminators (NEL, LS, PS) end a C# line just like CR/LF.
_BACKSLASH_ESCAPES = str.maketrans({
    "\\": "\\\\",
    '"': '\\"',
    "\r": "\\r",
    "\n": "\\n",
    "\t": "\\t",
    "\0": "\\u0000",
    "\u0085": "\\u0085",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
})


def escape_backslash_literal(value: str) -> str:
    """Quote ``value`` using backslash escapes (C# and F# regular strings)."""
    return '"' + value.translate(_BACKSLASH_ESCAPES) + '"'
