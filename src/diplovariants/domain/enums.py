"""Enumerations used by the variant domain."""

from __future__ import annotations

from enum import StrEnum


class Season(StrEnum):
    """Season of the in-game calendar."""

    SPRING = "spring"
    FALL = "fall"
    WINTER = "winter"


class PhaseType(StrEnum):
    """Kind of turn a phase represents."""

    MOVEMENT = "movement"
    RETREAT = "retreat"
    ADJUSTMENT = "adjustment"


class UnitType(StrEnum):
    """Unit kinds present on a Diplomacy board."""

    ARMY = "army"
    FLEET = "fleet"


class OrderType(StrEnum):
    """Order verbs accepted by the resolution endpoint."""

    HOLD = "Hold"
    MOVE = "Move"
    MOVE_VIA_CONVOY = "MoveViaConvoy"
    SUPPORT = "Support"
    CONVOY = "Convoy"
    BUILD = "Build"
    DISBAND = "Disband"
