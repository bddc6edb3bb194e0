"""asminfo: generate assembly version info source files."""

__version__ = "0.1.0"

GENERATOR_NAME = "asminfo"
