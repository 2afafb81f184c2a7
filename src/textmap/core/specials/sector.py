"""
Sector specials.

Wide codes are the generalized sector types of the ``zdoom`` namespace; the
classic Doom sector types map onto them by adding 64. None of these take
arguments.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .table import ActionMapping, ActionTable, legacy


class SectorSpecial(BaseModel):
    """Base for sector special variants."""

    model_config = ConfigDict(frozen=True)


class NoSectorSpecial(SectorSpecial):
    pass


class LightFlicker(SectorSpecial):
    pass


class LightStrobeFast(SectorSpecial):
    pass


class LightStrobeSlow(SectorSpecial):
    pass


class LightStrobeHurt(SectorSpecial):
    pass


class DamageHellslime(SectorSpecial):
    pass


class DamageNukage(SectorSpecial):
    pass


class LightGlow(SectorSpecial):
    pass


class DoorCloseIn30(SectorSpecial):
    pass


class DamageEnd(SectorSpecial):
    pass


class LightStrobeSlowSync(SectorSpecial):
    pass


class LightStrobeFastSync(SectorSpecial):
    pass


class DoorRaiseIn5Mins(SectorSpecial):
    pass


class FrictionLow(SectorSpecial):
    pass


class DamageSuperHellslime(SectorSpecial):
    pass


class LightFireFlicker(SectorSpecial):
    pass


SECTOR_SPECIALS: ActionTable[SectorSpecial] = ActionTable(
    "sector",
    [
        ActionMapping(NoSectorSpecial, 0, (legacy(0),)),
        ActionMapping(LightFlicker, 65, (legacy(1),)),
        ActionMapping(LightStrobeFast, 66, (legacy(2),)),
        ActionMapping(LightStrobeSlow, 67, (legacy(3),)),
        ActionMapping(LightStrobeHurt, 68, (legacy(4),)),
        ActionMapping(DamageHellslime, 69, (legacy(5),)),
        ActionMapping(DamageNukage, 71, (legacy(7),)),
        ActionMapping(LightGlow, 72, (legacy(8),)),
        ActionMapping(DoorCloseIn30, 74, (legacy(10),)),
        ActionMapping(DamageEnd, 75, (legacy(11),)),
        ActionMapping(LightStrobeSlowSync, 76, (legacy(12),)),
        ActionMapping(LightStrobeFastSync, 77, (legacy(13),)),
        ActionMapping(DoorRaiseIn5Mins, 78, (legacy(14),)),
        ActionMapping(FrictionLow, 79),
        ActionMapping(DamageSuperHellslime, 80, (legacy(16),)),
        ActionMapping(LightFireFlicker, 81, (legacy(17),)),
    ],
)


def decode_legacy_sector(code: int) -> SectorSpecial:
    """Decode a classic sector type; sector types carry no tag or triggers."""
    special, _ = SECTOR_SPECIALS.legacy_decode(code)
    return special
