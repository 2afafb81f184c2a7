"""
Bidirectional action-mapping tables.

A table lists every variant of a canonical special (one pydantic model per
variant, whose fields are the named arguments) together with:

- its unique *wide* code, the textmap ``special`` value taking up to five
  ordered arguments (``arg0`` .. ``arg4``), and
- zero or more *legacy* mappings, each a distinct classic numeric code whose
  arguments are either the linedef tag or a fixed constant, and which
  implies a fixed set of trigger flags.

Uniqueness of both code spaces is checked once, when a table is built.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict

from ..errors import SpecialMappingError, SpecialTableError
from ..flags import TriggerFlags

logger = logging.getLogger(__name__)

WIDE_ARG_COUNT = 5

TAG: Literal["tag"] = "tag"
"""Legacy argument slot bound to the linedef's tag field."""

S = TypeVar("S", bound=BaseModel)


class WideSpecial(BaseModel):
    """A special as stored in a textmap: ``special`` plus ``arg0`` .. ``arg4``."""

    code: int
    args: tuple[int, int, int, int, int] = (0, 0, 0, 0, 0)

    model_config = ConfigDict(frozen=True)


class LegacySpecial(BaseModel):
    """A special as stored in a classic binary linedef: a code and a sector tag."""

    code: int
    tag: int = 0

    model_config = ConfigDict(frozen=True)


@dataclass(frozen=True)
class LegacyMapping:
    """
    One classic encoding of a variant.

    Attributes:
        code: Legacy numeric code, unique across the whole table
        args: Per-argument source, ``TAG`` or a constant; missing trailing
            arguments decode to 0
        triggers: Names of TriggerFlags fields set when this code is decoded
    """

    code: int
    args: tuple[int | Literal["tag"], ...] = ()
    triggers: frozenset[str] = field(default_factory=frozenset)


def legacy(code: int, args: Sequence[int | Literal["tag"]] = (), *triggers: str) -> LegacyMapping:
    """Shorthand for declaring a LegacyMapping in a table literal."""
    return LegacyMapping(code=code, args=tuple(args), triggers=frozenset(triggers))


@dataclass(frozen=True)
class ActionMapping(Generic[S]):
    """A variant with its wide code and legacy encodings."""

    variant: type[S]
    code: int
    legacy: tuple[LegacyMapping, ...] = ()

    @property
    def arg_names(self) -> tuple[str, ...]:
        return tuple(self.variant.model_fields)


class ActionTable(Generic[S]):
    """
    Lookup structure over a static list of :class:`ActionMapping` records.

    Raises:
        SpecialTableError: If two variants share a wide code, two legacy
            mappings share a legacy code, or a mapping's arity is invalid
    """

    def __init__(self, name: str, mappings: Iterable[ActionMapping[S]]):
        self.name = name
        self.mappings: tuple[ActionMapping[S], ...] = tuple(mappings)
        self._by_code: dict[int, ActionMapping[S]] = {}
        self._by_variant: dict[type[S], ActionMapping[S]] = {}
        self._by_legacy: dict[int, tuple[ActionMapping[S], LegacyMapping]] = {}

        trigger_names = set(TriggerFlags.model_fields)

        for mapping in self.mappings:
            variant_name = mapping.variant.__name__
            if mapping.code in self._by_code:
                existing = self._by_code[mapping.code].variant.__name__
                raise SpecialTableError(
                    f"{name}: wide code {mapping.code} used by both {existing} and {variant_name}"
                )
            if mapping.variant in self._by_variant:
                raise SpecialTableError(f"{name}: variant {variant_name} listed twice")
            if len(mapping.arg_names) > WIDE_ARG_COUNT:
                raise SpecialTableError(
                    f"{name}: {variant_name} has {len(mapping.arg_names)} arguments "
                    f"(at most {WIDE_ARG_COUNT})"
                )

            for legacy_mapping in mapping.legacy:
                if legacy_mapping.code in self._by_legacy:
                    existing = self._by_legacy[legacy_mapping.code][0].variant.__name__
                    raise SpecialTableError(
                        f"{name}: legacy code {legacy_mapping.code} used by both "
                        f"{existing} and {variant_name}"
                    )
                if len(legacy_mapping.args) > len(mapping.arg_names):
                    raise SpecialTableError(
                        f"{name}: legacy code {legacy_mapping.code} maps "
                        f"{len(legacy_mapping.args)} arguments onto {variant_name}, "
                        f"which takes {len(mapping.arg_names)}"
                    )
                unknown = legacy_mapping.triggers - trigger_names
                if unknown:
                    raise SpecialTableError(
                        f"{name}: legacy code {legacy_mapping.code} sets unknown "
                        f"trigger flags {sorted(unknown)}"
                    )
                self._by_legacy[legacy_mapping.code] = (mapping, legacy_mapping)

            self._by_code[mapping.code] = mapping
            self._by_variant[mapping.variant] = mapping

        logger.debug(
            "Built %s table: %d variants, %d legacy codes",
            name,
            len(self._by_code),
            len(self._by_legacy),
        )

    def __iter__(self) -> Iterator[ActionMapping[S]]:
        return iter(self.mappings)

    def __len__(self) -> int:
        return len(self.mappings)

    @property
    def variants(self) -> list[type[S]]:
        return [m.variant for m in self.mappings]

    @property
    def legacy_codes(self) -> list[int]:
        return list(self._by_legacy)

    def mapping_for(self, special: S) -> ActionMapping[S]:
        try:
            return self._by_variant[type(special)]
        except KeyError:
            raise TypeError(
                f"{type(special).__name__} is not a variant of the {self.name} table"
            ) from None

    def wide_decode(self, code: int, args: Sequence[int] = ()) -> S:
        """
        Decode a wide encoding into its canonical variant.

        The variant's N named arguments are bound from ``args[0:N]``. Every
        argument past position N must be exactly zero, so decoding followed by
        encoding always reproduces the input.

        Raises:
            SpecialMappingError: Carrying the rejected WideSpecial
        """
        padded = tuple(args) + (0,) * (WIDE_ARG_COUNT - len(args))
        if len(padded) != WIDE_ARG_COUNT:
            raise ValueError(f"expected at most {WIDE_ARG_COUNT} arguments, got {len(args)}")
        wide = WideSpecial(code=code, args=padded)

        mapping = self._by_code.get(code)
        if mapping is None:
            raise SpecialMappingError(wide)

        arity = len(mapping.arg_names)
        if any(padded[arity:]):
            raise SpecialMappingError(wide)

        return mapping.variant(**dict(zip(mapping.arg_names, padded)))

    def wide_encode(self, special: S) -> WideSpecial:
        """Encode a variant; unused trailing argument slots are zero."""
        mapping = self.mapping_for(special)
        values = [getattr(special, name) for name in mapping.arg_names]
        values.extend([0] * (WIDE_ARG_COUNT - len(values)))
        return WideSpecial(code=mapping.code, args=tuple(values))

    def legacy_decode(self, code: int, tag: int = 0) -> tuple[S, TriggerFlags]:
        """
        Decode a legacy ``(code, tag)`` pair.

        Arguments mapped to ``TAG`` take ``tag``; others take their constant.
        The mapping's trigger flags are set and all others are false.

        Raises:
            SpecialMappingError: Carrying the rejected LegacySpecial
        """
        found = self._by_legacy.get(code)
        if found is None:
            raise SpecialMappingError(LegacySpecial(code=code, tag=tag))

        mapping, legacy_mapping = found
        values = {
            name: (tag if source == TAG else source)
            for name, source in zip(mapping.arg_names, legacy_mapping.args)
        }
        special = mapping.variant(**values)
        triggers = TriggerFlags(**{name: True for name in legacy_mapping.triggers})
        return special, triggers
