"""
Boolean flag sets for linedefs and things.

Each flag is an independent boolean with a documented default. The textmap
writer omits a flag assignment whenever it equals its default.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FlagSet(BaseModel):
    """Base for flag models: helpers to compare against defaults."""

    model_config = ConfigDict(frozen=True)

    @classmethod
    def defaults(cls) -> dict[str, bool]:
        return {name: bool(field.default) for name, field in cls.model_fields.items()}

    def changed(self) -> dict[str, bool]:
        """Flags whose value differs from the default, in declaration order."""
        defaults = self.defaults()
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) != defaults[name]
        }


class LineDefFlags(FlagSet):
    """
    Boolean properties of a linedef.

    The first nine flags share the bit layout of the classic binary LINEDEFS
    lump, which :meth:`from_bits` / :meth:`to_bits` convert to and from.
    """

    impassable: bool = False
    blocks_monsters: bool = False
    two_sided: bool = False
    upper_unpegged: bool = False
    lower_unpegged: bool = False
    secret: bool = False
    blocks_sound: bool = False
    not_on_map: bool = False
    already_on_map: bool = False

    @classmethod
    def from_bits(cls, bits: int) -> LineDefFlags:
        bits &= 0xFFFF
        return cls(**{name: bool(bits >> i & 1) for i, name in enumerate(cls.model_fields)})

    def to_bits(self) -> int:
        bits = 0
        for i, name in enumerate(type(self).model_fields):
            if getattr(self, name):
                bits |= 1 << i
        return bits


class TriggerFlags(FlagSet):
    """Conditions under which a linedef's special fires."""

    player_cross: bool = False
    player_use: bool = False
    monster_cross: bool = False
    monster_use: bool = False
    impact: bool = False
    player_push: bool = False
    monster_push: bool = False
    missile_cross: bool = False
    repeats: bool = False
    monster_activate: bool = False


class ThingFlags(FlagSet):
    """Skill, game-mode and class filters plus behaviour flags of a thing."""

    skill1: bool = True
    skill2: bool = True
    skill3: bool = True
    skill4: bool = True
    skill5: bool = True
    ambush: bool = True
    single: bool = True
    dm: bool = True
    coop: bool = True
    friend: bool = False
    dormant: bool = False
    class1: bool = False
    class2: bool = False
    class3: bool = False
    standing: bool = False
    strife_ally: bool = False
    translucent: bool = False
    invisible: bool = False
