"""
Generated file model: the output of a generation request.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A source file produced by the generate use case.

    Attributes:
        path:      Output path (absolute, or relative to the working dir).
        content:   Full file content, persisted verbatim.
        language:  Canonical name of the emitter that produced it.
        overwrite: Whether to replace an existing file with new content.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    language: str = ""
    overwrite: bool = True
    reason: str = ""
