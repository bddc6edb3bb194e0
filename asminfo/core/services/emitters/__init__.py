"""
Code emitters: one per supported target language.

Registry of all available emitters. Language identifiers are matched
case-insensitively; unknown identifiers select nothing.
"""

from __future__ import annotations

from .base import AttributeKind, CodeBuilder, CodeEmitter
from .csharp import CSharpEmitter
from .fsharp import FSharpEmitter
from .visual_basic import VisualBasicEmitter

# ── Emitter registry ────────────────────────────────────────────────

_EMITTERS: dict[str, CodeEmitter] = {}


def _register_defaults() -> None:
    """Register all built-in emitters under every identifier they accept."""
    for cls in (CSharpEmitter, VisualBasicEmitter, FSharpEmitter):
        emitter = cls()
        for identifier in emitter.identifiers():
            _EMITTERS[identifier] = emitter


def select_emitter(language: str | None) -> CodeEmitter | None:
    """Map a language identifier to its emitter, or None if unsupported."""
    if not _EMITTERS:
        _register_defaults()
    if not language:
        return None
    return _EMITTERS.get(language.strip().lower())


def list_emitters() -> list[CodeEmitter]:
    """List each registered emitter once, in registration order."""
    if not _EMITTERS:
        _register_defaults()

    result: list[CodeEmitter] = []
    for emitter in _EMITTERS.values():
        if emitter not in result:
            result.append(emitter)
    return result


__all__ = [
    "AttributeKind",
    "CSharpEmitter",
    "CodeBuilder",
    "CodeEmitter",
    "FSharpEmitter",
    "VisualBasicEmitter",
    "list_emitters",
    "select_emitter",
]
