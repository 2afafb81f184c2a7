"""
Action-mapping tables for linedef, thing and sector specials.

Usage:
    from textmap.core.specials import LINE_SPECIALS, DoorClose

    LINE_SPECIALS.wide_decode(10, (5, 16, 0, 0, 0))  # DoorClose(tag=5, speed=16, light_tag=0)
    LINE_SPECIALS.legacy_decode(3, tag=5)            # (DoorClose(...), TriggerFlags(player_cross=True))
"""

from .line import (
    LINE_SPECIALS,
    AcsExecute,
    DoorClose,
    DoorCloseWaitOpen,
    DoorLockedRaise,
    DoorOpen,
    DoorRaise,
    ExitNormal,
    ExitSecret,
    FloorLowerByValue,
    FloorLowerToLowest,
    FloorLowerToNearest,
    FloorRaiseByValue,
    FloorRaiseToHighest,
    FloorRaiseToNearest,
    LightChangeToValue,
    LineSpecial,
    NoSpecial,
    PlatDownWaitUpStay,
    StairsBuildUpDoom,
    Teleport,
)
from .sector import (
    SECTOR_SPECIALS,
    DamageEnd,
    DamageHellslime,
    DamageNukage,
    DamageSuperHellslime,
    DoorCloseIn30,
    DoorRaiseIn5Mins,
    FrictionLow,
    LightFireFlicker,
    LightFlicker,
    LightGlow,
    LightStrobeFast,
    LightStrobeFastSync,
    LightStrobeHurt,
    LightStrobeSlow,
    LightStrobeSlowSync,
    NoSectorSpecial,
    SectorSpecial,
    decode_legacy_sector,
)
from .table import (
    TAG,
    WIDE_ARG_COUNT,
    ActionMapping,
    ActionTable,
    LegacyMapping,
    LegacySpecial,
    WideSpecial,
    legacy,
)

__all__ = [
    "TAG",
    "WIDE_ARG_COUNT",
    "ActionMapping",
    "ActionTable",
    "LegacyMapping",
    "LegacySpecial",
    "WideSpecial",
    "legacy",
    # Line specials
    "LINE_SPECIALS",
    "LineSpecial",
    "NoSpecial",
    "AcsExecute",
    "DoorClose",
    "DoorCloseWaitOpen",
    "DoorLockedRaise",
    "DoorOpen",
    "DoorRaise",
    "ExitNormal",
    "ExitSecret",
    "FloorLowerByValue",
    "FloorLowerToLowest",
    "FloorLowerToNearest",
    "FloorRaiseByValue",
    "FloorRaiseToHighest",
    "FloorRaiseToNearest",
    "LightChangeToValue",
    "PlatDownWaitUpStay",
    "StairsBuildUpDoom",
    "Teleport",
    # Sector specials
    "SECTOR_SPECIALS",
    "SectorSpecial",
    "NoSectorSpecial",
    "DamageEnd",
    "DamageHellslime",
    "DamageNukage",
    "DamageSuperHellslime",
    "DoorCloseIn30",
    "DoorRaiseIn5Mins",
    "FrictionLow",
    "LightFireFlicker",
    "LightFlicker",
    "LightGlow",
    "LightStrobeFast",
    "LightStrobeFastSync",
    "LightStrobeHurt",
    "LightStrobeSlow",
    "LightStrobeSlowSync",
    "decode_legacy_sector",
]
