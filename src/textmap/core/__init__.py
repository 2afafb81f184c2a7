"""Core textmap functionality: lexer, parser, compiler, linker, writer."""

from . import ir
from .arena import Arena, Key
from .compiler import compile_translation_unit
from .errors import (
    CompileError,
    ConfigError,
    ErrorContext,
    LinkError,
    ParseError,
    TextmapError,
    UnlinkError,
    WriteError,
)
from .linker import link, unlink
from .manifest import CompilerConfig, TextmapConfig, WriterConfig, find_config, load_config
from .parser import parse_textmap
from .pipeline import dump_textmap, dump_textmap_to, load_textmap
from .writer import write, write_to

__all__ = [
    "ir",
    "Arena",
    "Key",
    "TextmapError",
    "ParseError",
    "CompileError",
    "LinkError",
    "UnlinkError",
    "WriteError",
    "ConfigError",
    "ErrorContext",
    "parse_textmap",
    "compile_translation_unit",
    "link",
    "unlink",
    "write",
    "write_to",
    "load_textmap",
    "dump_textmap",
    "dump_textmap_to",
    "TextmapConfig",
    "WriterConfig",
    "CompilerConfig",
    "load_config",
    "find_config",
]
