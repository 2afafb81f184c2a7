import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_FILENAME = "textmap.toml"
PYPROJECT_FILENAME = "pyproject.toml"

VERTEX_COORDINATE_STYLES = ("float", "int")


@dataclass
class WriterConfig:
    """Textmap output formatting."""

    indent: int = 2
    header: str = "Written by textmap"  # empty disables the header comment
    index_comments: bool = True  # "// #3" before each block
    namespace: str = "zdoom"  # used when the level declares none
    vertex_coordinates: str = "float"  # "float" | "int"


@dataclass
class CompilerConfig:
    """Restrictions applied while compiling a textmap."""

    namespaces: list[str] = field(default_factory=list)  # empty accepts any
    require_namespace: bool = False


@dataclass
class TextmapConfig:
    writer: WriterConfig = field(default_factory=WriterConfig)
    compiler: CompilerConfig = field(default_factory=CompilerConfig)
    source: Path | None = None

    @classmethod
    def default(cls) -> "TextmapConfig":
        return cls()


def find_config(start_dir: Path) -> Path | None:
    """
    Find the nearest configuration file at or above ``start_dir``.

    A ``textmap.toml`` wins over a ``pyproject.toml`` in the same directory;
    a ``pyproject.toml`` only counts if it has a ``[tool.textmap]`` table.
    """
    current = start_dir.resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and "textmap" in _read_toml(pyproject).get("tool", {}):
            return pyproject
    return None


def load_config(path: Path) -> TextmapConfig:
    data = _read_toml(path)
    if path.name == PYPROJECT_FILENAME:
        data = data.get("tool", {}).get("textmap", {})

    writer_data = _table(data, "writer", path)
    compiler_data = _table(data, "compiler", path)

    writer = WriterConfig(
        indent=_typed(writer_data, "indent", int, 2, path),
        header=_typed(writer_data, "header", str, "Written by textmap", path),
        index_comments=_typed(writer_data, "index_comments", bool, True, path),
        namespace=_typed(writer_data, "namespace", str, "zdoom", path),
        vertex_coordinates=_typed(writer_data, "vertex_coordinates", str, "float", path),
    )
    if writer.indent < 0:
        raise ConfigError(f"{path}: writer.indent must not be negative (got {writer.indent})")
    if writer.vertex_coordinates not in VERTEX_COORDINATE_STYLES:
        raise ConfigError(
            f"{path}: writer.vertex_coordinates must be one of "
            f"{', '.join(VERTEX_COORDINATE_STYLES)} (got {writer.vertex_coordinates!r})"
        )

    namespaces = _typed(compiler_data, "namespaces", list, [], path)
    if not all(isinstance(ns, str) for ns in namespaces):
        raise ConfigError(f"{path}: compiler.namespaces must be a list of strings")

    compiler = CompilerConfig(
        namespaces=namespaces,
        require_namespace=_typed(compiler_data, "require_namespace", bool, False, path),
    )

    return TextmapConfig(writer=writer, compiler=compiler, source=path)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{path}: invalid TOML: {e}") from e


def _table(data: dict[str, Any], name: str, path: Path) -> dict[str, Any]:
    table = data.get(name, {})
    if not isinstance(table, dict):
        raise ConfigError(f"{path}: [{name}] must be a table")
    return table


def _typed(data: dict[str, Any], key: str, expected: type, default: Any, path: Path) -> Any:
    value = data.get(key, default)
    # bool is an int subclass; an int setting must not accept true/false
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ConfigError(
            f"{path}: '{key}' must be of type {expected.__name__}, "
            f"got {type(value).__name__}"
        )
    return value
