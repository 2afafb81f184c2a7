import logging

from . import ast
from .compiler_impl import (
    BlockFields,
    build_linedef,
    build_sector,
    build_sidedef,
    build_thing,
    build_vertex,
    check_block,
    coerce_value,
)
from .errors import (
    InvalidBlockError,
    InvalidNamespaceError,
    MissingAssignmentsError,
    MultipleAssignmentError,
)
from .ir import EntityKind, RawLevel
from .location import Span
from .manifest import CompilerConfig
from .schema import NAMESPACE_KEY, FieldKind, FieldSpec, block_names, schema_for
from .strings import FixedString

logger = logging.getLogger(__name__)

_NAMESPACE_SPEC = FieldSpec(key=NAMESPACE_KEY, kind=FieldKind.STRING)

_BUILDERS = {
    EntityKind.VERTEX: ("vertices", build_vertex),
    EntityKind.LINEDEF: ("linedefs", build_linedef),
    EntityKind.SIDEDEF: ("sidedefs", build_sidedef),
    EntityKind.SECTOR: ("sectors", build_sector),
    EntityKind.THING: ("things", build_thing),
}


def compile_translation_unit(
    unit: ast.TranslationUnit,
    name: str | FixedString | None = None,
    config: CompilerConfig | None = None,
) -> RawLevel:
    """
    Compile a parsed textmap into a positional level.

    Each top-level block is checked against the schema of its entity kind and
    appended, in source order, to the matching list of the raw level. The
    global ``namespace`` assignment is recorded verbatim.

    Args:
        unit: Parsed textmap
        name: Lump name of the level, if known
        config: Namespace restrictions; defaults accept any namespace

    Returns:
        RawLevel whose cross-references are unchecked positions

    Raises:
        CompileError: On the first invalid block or assignment
    """
    config = config or CompilerConfig()
    if isinstance(name, str):
        name = FixedString.from_str(name)

    namespace: ast.AssignmentExpr | None = None
    entities: dict[str, list] = {attr: [] for attr, _ in _BUILDERS.values()}

    for expr in unit.expressions:
        if isinstance(expr, ast.AssignmentExpr):
            if expr.key != NAMESPACE_KEY:
                raise InvalidBlockError(expr.key, _top_level_names(), expr.identifier.span)
            coerce_value(_NAMESPACE_SPEC, expr.value)
            if namespace is not None:
                raise MultipleAssignmentError(NAMESPACE_KEY, namespace.span, expr.span)
            namespace = expr
            continue

        schema = schema_for(expr.name)
        if schema is None:
            raise InvalidBlockError(expr.name, _top_level_names(), expr.identifier.span)

        fields: BlockFields = check_block(expr, schema)
        attr, build = _BUILDERS[schema.kind]
        entities[attr].append(build(fields))

    namespace_value = _check_namespace(namespace, config)

    level = RawLevel(name=name, namespace=namespace_value, **entities)
    logger.debug(
        "Compiled textmap: %d vertices, %d linedefs, %d sidedefs, %d sectors, %d things",
        len(level.vertices),
        len(level.linedefs),
        len(level.sidedefs),
        len(level.sectors),
        len(level.things),
    )
    return level


def _top_level_names() -> list[str]:
    return [NAMESPACE_KEY, *block_names()]


def _check_namespace(namespace: ast.AssignmentExpr | None, config: CompilerConfig) -> str | None:
    if namespace is None:
        if config.require_namespace:
            raise MissingAssignmentsError("global scope", [NAMESPACE_KEY], Span(start=0, end=0))
        return None

    value = namespace.value.value
    if config.namespaces and value not in config.namespaces:
        raise InvalidNamespaceError(value, config.namespaces, namespace.value.span)
    return value
