"""Game-wide enumerations and limits."""

from __future__ import annotations

from enum import IntEnum

MAX_SESSION_ID_LENGTH = 16


class RealmGameType(IntEnum):
    CHAMPIONS_OF_NORRATH = 0
    RETURN_TO_ARMS = 1


class CharacterClass(IntEnum):
    WARRIOR = 0
    CLERIC = 1
    SHADOW_KNIGHT = 2
    RANGER = 3
    WIZARD = 4
    BERSERKER = 5
    SHAMAN = 6
    NUM_CLASSES = 7


class CharacterRace(IntEnum):
    BARBARIAN_M = 0
    BARBARIAN_F = 1
    WOOD_ELF_M = 2
    WOOD_ELF_F = 3
    HIGH_ELF_M = 4
    HIGH_ELF_F = 5
    ERUDITE_WIZARD_M = 6
    ERUDITE_WIZARD_F = 7
    DARK_ELF_M = 8
    DARK_ELF_F = 9
    VAH_SHIR_BERSERKER = 10
    IKSAR_SHAMAN = 11
    NUM_RACES = 12


class EquipmentSlot(IntEnum):
    PRIMARY_WEAPON = 0
    UNKNOWN_01 = 1
    SECONDARY_WEAPON = 2
    SHIELD = 3
    TORSO = 4
    RING_1 = 5
    RING_2 = 6
    CHOKER = 7
    QUIVER = 8
    GLOVES = 9
    BOOTS = 10
    HEAD = 11
    LEGGINGS = 12
    UNKNOWN_13 = 13
    EARRING = 14
    UNKNOWN_15 = 15
    UNKNOWN_16 = 16
    PRIMARY_WEAPON_2 = 17
    SECONDARY_WEAPON_2 = 18
    UNKNOWN_19 = 19
    NUM_EQUIPMENT_SLOTS = 20