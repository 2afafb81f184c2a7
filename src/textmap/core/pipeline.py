"""
Text <-> graph facade over the individual pipeline stages.

    load:  text -> parse -> compile -> link -> Level
    dump:  Level -> unlink -> write -> text
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from .compiler import compile_translation_unit
from .ir import Level
from .linker import link
from .manifest import TextmapConfig
from .parser import parse_textmap
from .strings import FixedString
from .writer import write, write_to

logger = logging.getLogger(__name__)


def load_textmap(
    text: str,
    name: str | FixedString | None = None,
    config: TextmapConfig | None = None,
    file: Path | str | None = None,
) -> Level:
    """
    Load a level from the decoded text of a TEXTMAP lump.

    Args:
        text: Textmap source
        name: Lump name of the level, if known
        config: Compiler settings; defaults accept any namespace
        file: Source name used in parse error locations

    Returns:
        Linked level graph

    Raises:
        ParseError: If the text is not valid textmap syntax
        CompileError: If a block or assignment is invalid
        LinkError: If a positional reference is out of range
    """
    config = config or TextmapConfig.default()
    unit = parse_textmap(text, file)
    raw = compile_translation_unit(unit, name=name, config=config.compiler)
    return link(raw)


def dump_textmap(level: Level, config: TextmapConfig | None = None) -> str:
    """
    Serialize a level to textmap source.

    Raises:
        WriteError: If the level cannot be unlinked or a name is not UTF-8
    """
    config = config or TextmapConfig.default()
    return write(level, config.writer)


def dump_textmap_to(level: Level, stream: TextIO, config: TextmapConfig | None = None) -> None:
    """Serialize a level and write it to ``stream``."""
    config = config or TextmapConfig.default()
    write_to(level, stream, config.writer)
