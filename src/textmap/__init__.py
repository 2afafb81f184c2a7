"""
textmap - compiler for UDMF textmap level descriptions.

Parses textmap source into a checked, keyed level graph and writes such a
graph back to textmap source.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.errors import (
    CompileError,
    LinkError,
    ParseError,
    TextmapError,
    UnlinkError,
    WriteError,
)
from .core.pipeline import dump_textmap, dump_textmap_to, load_textmap

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "load_textmap",
    "dump_textmap",
    "dump_textmap_to",
    "TextmapError",
    "ParseError",
    "CompileError",
    "LinkError",
    "UnlinkError",
    "WriteError",
]
