"""
Linedef (and thing) action specials.

Wide codes are the Hexen-style action numbers used by the ``zdoom``
textmap namespace. Legacy codes are classic Doom linedef types; their
argument tuples use the usual speeds (16 for doors, 8 for floors, 32 for
lifts) and delays in tics.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .table import TAG, ActionMapping, ActionTable, legacy


class LineSpecial(BaseModel):
    """Base for line action variants; fields are the named arguments, in order."""

    model_config = ConfigDict(frozen=True)


class NoSpecial(LineSpecial):
    pass


class DoorClose(LineSpecial):
    tag: int = 0
    speed: int = 0
    light_tag: int = 0


class DoorOpen(LineSpecial):
    tag: int = 0
    speed: int = 0
    light_tag: int = 0


class DoorRaise(LineSpecial):
    tag: int = 0
    speed: int = 0
    delay: int = 0
    light_tag: int = 0


class DoorLockedRaise(LineSpecial):
    tag: int = 0
    speed: int = 0
    delay: int = 0
    lock: int = 0
    light_tag: int = 0


class DoorCloseWaitOpen(LineSpecial):
    tag: int = 0
    speed: int = 0
    delay: int = 0
    light_tag: int = 0


class FloorLowerByValue(LineSpecial):
    tag: int = 0
    speed: int = 0
    height: int = 0


class FloorLowerToLowest(LineSpecial):
    tag: int = 0
    speed: int = 0


class FloorLowerToNearest(LineSpecial):
    tag: int = 0
    speed: int = 0


class FloorRaiseByValue(LineSpecial):
    tag: int = 0
    speed: int = 0
    height: int = 0


class FloorRaiseToHighest(LineSpecial):
    tag: int = 0
    speed: int = 0


class FloorRaiseToNearest(LineSpecial):
    tag: int = 0
    speed: int = 0


class PlatDownWaitUpStay(LineSpecial):
    tag: int = 0
    speed: int = 0
    delay: int = 0


class Teleport(LineSpecial):
    tid: int = 0
    tag: int = 0
    no_source_fog: int = 0


class AcsExecute(LineSpecial):
    script: int = 0
    map: int = 0
    arg1: int = 0
    arg2: int = 0
    arg3: int = 0


class LightChangeToValue(LineSpecial):
    tag: int = 0
    value: int = 0


class StairsBuildUpDoom(LineSpecial):
    tag: int = 0
    speed: int = 0
    height: int = 0
    delay: int = 0
    reset: int = 0


class ExitNormal(LineSpecial):
    position: int = 0


class ExitSecret(LineSpecial):
    position: int = 0


LINE_SPECIALS: ActionTable[LineSpecial] = ActionTable(
    "linedef",
    [
        ActionMapping(NoSpecial, 0, (legacy(0),)),
        ActionMapping(
            DoorClose,
            10,
            (
                legacy(3, (TAG, 16), "player_cross"),
                legacy(42, (TAG, 16), "player_use", "repeats"),
                legacy(50, (TAG, 16), "player_use"),
                legacy(75, (TAG, 16), "player_cross", "repeats"),
            ),
        ),
        ActionMapping(
            DoorOpen,
            11,
            (
                legacy(2, (TAG, 16), "player_cross"),
                legacy(31, (0, 16), "player_use"),
                legacy(46, (TAG, 16), "impact", "repeats"),
                legacy(61, (TAG, 16), "player_use", "repeats"),
                legacy(86, (TAG, 16), "player_cross", "repeats"),
                legacy(103, (TAG, 16), "player_use"),
            ),
        ),
        ActionMapping(
            DoorRaise,
            12,
            (
                legacy(1, (0, 16, 150), "player_use", "monster_use", "repeats"),
                legacy(4, (TAG, 16, 150), "player_cross", "monster_cross"),
                legacy(29, (TAG, 16, 150), "player_use"),
                legacy(63, (TAG, 16, 150), "player_use", "repeats"),
                legacy(90, (TAG, 16, 150), "player_cross", "repeats"),
            ),
        ),
        ActionMapping(
            DoorLockedRaise,
            13,
            (
                legacy(26, (0, 16, 150, 2), "player_use", "repeats"),
                legacy(27, (0, 16, 150, 3), "player_use", "repeats"),
                legacy(28, (0, 16, 150, 1), "player_use", "repeats"),
            ),
        ),
        ActionMapping(
            DoorCloseWaitOpen,
            249,
            (
                legacy(16, (TAG, 16, 240), "player_cross"),
                legacy(76, (TAG, 16, 240), "player_cross", "repeats"),
            ),
        ),
        ActionMapping(FloorLowerByValue, 20),
        ActionMapping(
            FloorLowerToLowest,
            21,
            (
                legacy(23, (TAG, 8), "player_use"),
                legacy(38, (TAG, 8), "player_cross"),
                legacy(60, (TAG, 8), "player_use", "repeats"),
                legacy(82, (TAG, 8), "player_cross", "repeats"),
            ),
        ),
        ActionMapping(FloorLowerToNearest, 22),
        ActionMapping(
            FloorRaiseByValue,
            23,
            (
                legacy(58, (TAG, 8, 24), "player_cross"),
                legacy(92, (TAG, 8, 24), "player_cross", "repeats"),
            ),
        ),
        ActionMapping(FloorRaiseToHighest, 24),
        ActionMapping(
            FloorRaiseToNearest,
            25,
            (
                legacy(18, (TAG, 8), "player_use"),
                legacy(69, (TAG, 8), "player_use", "repeats"),
                legacy(119, (TAG, 8), "player_cross"),
                legacy(128, (TAG, 8), "player_cross", "repeats"),
            ),
        ),
        ActionMapping(
            PlatDownWaitUpStay,
            62,
            (
                legacy(10, (TAG, 32, 105), "player_cross", "monster_cross"),
                legacy(21, (TAG, 32, 105), "player_use"),
                legacy(62, (TAG, 32, 105), "player_use", "repeats"),
                legacy(88, (TAG, 32, 105), "player_cross", "monster_cross", "repeats"),
            ),
        ),
        ActionMapping(
            Teleport,
            70,
            (
                legacy(39, (0, TAG), "player_cross", "monster_cross"),
                legacy(97, (0, TAG), "player_cross", "monster_cross", "repeats"),
                legacy(125, (0, TAG), "monster_cross"),
                legacy(126, (0, TAG), "monster_cross", "repeats"),
            ),
        ),
        ActionMapping(AcsExecute, 80),
        ActionMapping(
            LightChangeToValue,
            112,
            (
                legacy(13, (TAG, 255), "player_cross"),
                legacy(35, (TAG, 35), "player_cross"),
                legacy(79, (TAG, 35), "player_cross", "repeats"),
                legacy(81, (TAG, 255), "player_cross", "repeats"),
                legacy(138, (TAG, 255), "player_use", "repeats"),
                legacy(139, (TAG, 35), "player_use", "repeats"),
            ),
        ),
        ActionMapping(
            StairsBuildUpDoom,
            217,
            (
                legacy(7, (TAG, 2, 8), "player_use"),
                legacy(8, (TAG, 2, 8), "player_cross"),
            ),
        ),
        ActionMapping(
            ExitNormal,
            243,
            (
                legacy(11, (0,), "player_use"),
                legacy(52, (0,), "player_cross"),
            ),
        ),
        ActionMapping(
            ExitSecret,
            244,
            (
                legacy(51, (0,), "player_use"),
                legacy(124, (0,), "player_cross"),
            ),
        ),
    ],
)
