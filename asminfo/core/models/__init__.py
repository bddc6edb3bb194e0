"""
Domain models: Pydantic types for version info generation.

All models are re-exported here for convenient access:

    from asminfo.core.models import VersionFacts, VersionMetadata, KeyInfo, GeneratedFile
"""

from asminfo.core.models.template import GeneratedFile
from asminfo.core.models.version_info import KeyInfo, VersionFacts, VersionMetadata

__all__ = [
    "GeneratedFile",
    "KeyInfo",
    "VersionFacts",
    "VersionMetadata",
]
