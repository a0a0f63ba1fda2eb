"""Character record: the fixed 19504-byte layout the game stores per hero."""

from __future__ import annotations

import logging
import struct
from dataclasses import astuple, dataclass, field
from enum import IntEnum
from typing import ClassVar

from .bytestream import ByteBuffer
from .constants import CharacterClass, CharacterRace, EquipmentSlot
from .reader import BufferReader
from .rlez import decompress
from .slotdata import CharacterSlotData

logger = logging.getLogger(__name__)

MAX_NUMBER_OF_CHARACTERS = 12
CHARACTER_DATA_SIZE = 19504
# Compressed save blobs start with a 4-byte header before the RLEZ stream.
SAVE_HEADER_SIZE = 4

TEXT_SIZE = 32
ITEM_DATA_SIZE = 72
ITEM_SLOTS = 64
UNKNOWN_046_SIZE = 2696
QUEST_COUNT = 8
NEW_STYLE_COUNT = 15
ATTACK_COUNT = 8
SKILL_COUNT = 48
DIFFICULTY_COUNT = 5
MISSION_COUNT = 13
MAX_LEVEL = 80


def _pack(fmt: str, *values: object) -> bytes:
    return struct.pack("<" + fmt, *values)


def _encode_fixed(text: str, size: int = TEXT_SIZE) -> bytes:
    raw = text.encode("utf-8")
    if len(raw) > size:
        raise ValueError(f"text longer than {size} bytes: {text!r}")
    return raw.ljust(size, b"\x00")


def _decode_fixed(raw: bytes) -> str:
    return raw.split(b"\x00", 1)[0].decode("utf-8", "replace")


def _exact(data: bytes, size: int, what: str) -> bytes:
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"{what} must be {size} bytes, got {len(data)}")
    return data


def _enum_or_int(kind: type[IntEnum], value: int) -> IntEnum | int:
    try:
        return kind(value)
    except ValueError:
        return value


@dataclass
class Stats:
    strength: int = 0
    intelligence: int = 0
    dexterity: int = 0
    stamina: int = 0
    unknown_a: int = 0
    unknown_b: int = 0

    FORMAT: ClassVar[str] = "6i"

    def pack(self) -> bytes:
        return _pack(self.FORMAT, *astuple(self))

    @classmethod
    def read(cls, reader: BufferReader) -> Stats:
        return cls(*reader.read(cls.FORMAT))


@dataclass
class Quest:
    name: str = ""
    description: str = ""

    def pack(self) -> bytes:
        return _encode_fixed(self.name) + _encode_fixed(self.description)

    @classmethod
    def read(cls, reader: BufferReader) -> Quest:
        name = _decode_fixed(reader.read_bytes(TEXT_SIZE))
        return cls(name, _decode_fixed(reader.read_bytes(TEXT_SIZE)))


@dataclass
class NewStyle:
    name: str = ""
    style_id: int = 0
    active_flag: int = 0
    style_type: int = 0
    unknown_a: int = 0
    unknown_b: int = 0
    reserved: bytes = bytes(64)

    def pack(self) -> bytes:
        return _encode_fixed(self.name) + _pack(
            "i4B64s",
            self.style_id,
            self.active_flag,
            self.style_type,
            self.unknown_a,
            self.unknown_b,
            _exact(self.reserved, 64, "reserved"),
        )

    @classmethod
    def read(cls, reader: BufferReader) -> NewStyle:
        name = _decode_fixed(reader.read_bytes(TEXT_SIZE))
        return cls(name, *reader.read("i4B64s"))


@dataclass
class Skill:
    skill_id: int = 0
    skill_level: int = 0

    FORMAT: ClassVar[str] = "2h"

    def pack(self) -> bytes:
        return _pack(self.FORMAT, *astuple(self))

    @classmethod
    def read(cls, reader: BufferReader) -> Skill:
        return cls(*reader.read(cls.FORMAT))


@dataclass
class DifficultyProgress:
    mission_na: int = 0
    mission_war: int = 0
    mission_innovation: int = 0
    mission_pit_of_ill_omen: int = 0
    mission_plane_of_water: int = 0
    mission_torment: int = 0
    mission_disease: int = 0
    mission_valor: int = 0
    mission_fire: int = 0
    mission_storms: int = 0
    mission_faydark: int = 0
    mission_nightmares: int = 0
    mission_fear: int = 0

    FORMAT: ClassVar[str] = "13B"

    def pack(self) -> bytes:
        return _pack(self.FORMAT, *astuple(self))

    @classmethod
    def read(cls, reader: BufferReader) -> DifficultyProgress:
        return cls(*reader.read(cls.FORMAT))


class RealmCharacter:
    """A stored character: id, slot metadata, save blob and decoded fields."""

    def __init__(
        self,
        character_id: int = 0,
        meta: CharacterSlotData | None = None,
        data: bytes = b"",
    ) -> None:
        self.character_id = character_id
        self.meta = meta if meta is not None else CharacterSlotData()
        self.data = bytes(data)
        self.initialize()

    def initialize(self) -> None:
        """Reset every decoded field to zero or empty."""
        self.name = ""
        self.unknown_000 = bytes(4)
        self.unknown_str = ""
        self.unknown_004 = [0] * 3

        self.character_class: CharacterClass | int = CharacterClass.WARRIOR
        self.character_race: CharacterRace | int = CharacterRace.BARBARIAN_M

        self.current_level = 0
        self.pending_level = 0
        self.unknown_009 = 0
        self.experience = 0

        self.unknown_010 = [0] * 6
        self.stats = [Stats(), Stats()]

        self.unknown_016 = 0
        self.current_hp = 0.0
        self.maximum_hp = 0.0
        self.unknown_017_019 = [0] * 3
        self.current_mana = 0.0
        self.maximum_mana = 0.0
        self.unknown_020 = 0
        self.attack_power = 0
        self.minimum_damage = 0
        self.maximum_damage = 0
        self.unknown_021 = 0
        self.unknown_022 = 0
        self.unknown_023_026 = bytes(4)

        self.current_gold = 0
        self.current_skill_points = 0
        self.current_ability_points = 0
        self.has_spent_remaining_points = 0

        self.unknown_029_040 = [0] * 12

        self.weight = 0.0
        self.max_weight = 0.0
        self.unknown_041 = 0
        self.unknown_042 = 0

        self.item_data = [bytes(ITEM_DATA_SIZE)] * ITEM_SLOTS
        self.num_armor_item = 0
        self.unknown_043 = 0
        self.armor_item_data = [bytes(ITEM_DATA_SIZE)] * ITEM_SLOTS
        self.num_weapon_item = 0
        self.unknown_044 = 0
        self.weapon_item_data = [bytes(ITEM_DATA_SIZE)] * ITEM_SLOTS
        self.num_consumable_item = 0
        self.unknown_045 = 0
        self.unknown_046 = bytes(UNKNOWN_046_SIZE)

        self.quests = [Quest() for _ in range(QUEST_COUNT)]
        self.num_quests = 0
        self.unknown_048_054 = [0] * 7

        self.equipment = [0] * int(EquipmentSlot.NUM_EQUIPMENT_SLOTS)
        self.new_styles = [NewStyle() for _ in range(NEW_STYLE_COUNT)]

        self.unknown_075 = 0
        self.unknown_076 = 0.0
        self.unknown_077_085 = [0] * 9

        self.skill_slot = [0, 0]
        self.unknown_087 = 0
        self.unknown_088 = 0

        self.attack_data = [(0.0, 0.0, 0.0, 0.0)] * ATTACK_COUNT
        self.skills = [Skill() for _ in range(SKILL_COUNT)]
        self.unknown_091 = 0

        self.mission_progress = [DifficultyProgress() for _ in range(DIFFICULTY_COUNT)]
        self.mission_medals = bytes(MISSION_COUNT)

        self.evil_bitflag = 0
        self.good_bitflag = 0
        self.unknown_101 = 0
        self.movement_speed = 0.0
        self.unknown_102_109 = bytes(8)
        self.unknown_110 = 0

    def _parts(self):
        yield _encode_fixed(self.name)
        yield _exact(self.unknown_000, 4, "unknown_000")
        yield _encode_fixed(self.unknown_str)
        yield _pack("3i", *self.unknown_004)
        yield _pack("2i", self.character_class, self.character_race)
        yield _pack(
            "BBHi", self.current_level, self.pending_level, self.unknown_009, self.experience
        )
        yield _pack("6i", *self.unknown_010)
        for stats in self.stats:
            yield stats.pack()
        yield _pack(
            "i2f3i2fi3i2i",
            self.unknown_016,
            self.current_hp,
            self.maximum_hp,
            *self.unknown_017_019,
            self.current_mana,
            self.maximum_mana,
            self.unknown_020,
            self.attack_power,
            self.minimum_damage,
            self.maximum_damage,
            self.unknown_021,
            self.unknown_022,
        )
        yield _exact(self.unknown_023_026, 4, "unknown_023_026")
        yield _pack(
            "2i2h",
            self.current_gold,
            self.current_skill_points,
            self.current_ability_points,
            self.has_spent_remaining_points,
        )
        yield _pack("12i", *self.unknown_029_040)
        yield _pack("2f2i", self.weight, self.max_weight, self.unknown_041, self.unknown_042)
        yield from self._items(self.item_data)
        yield _pack("2i", self.num_armor_item, self.unknown_043)
        yield from self._items(self.armor_item_data)
        yield _pack("2i", self.num_weapon_item, self.unknown_044)
        yield from self._items(self.weapon_item_data)
        yield _pack("2i", self.num_consumable_item, self.unknown_045)
        yield _exact(self.unknown_046, UNKNOWN_046_SIZE, "unknown_046")
        for quest in self.quests:
            yield quest.pack()
        yield _pack("i", self.num_quests)
        yield _pack("7i", *self.unknown_048_054)
        yield _pack("20i", *self.equipment)
        for style in self.new_styles:
            yield style.pack()
        yield _pack("if", self.unknown_075, self.unknown_076)
        yield _pack("9i", *self.unknown_077_085)
        yield _pack("4B", *self.skill_slot, self.unknown_087, self.unknown_088)
        for attack in self.attack_data:
            yield _pack("4f", *attack)
        for skill in self.skills:
            yield skill.pack()
        yield _pack("i", self.unknown_091)
        for progress in self.mission_progress:
            yield progress.pack()
        yield _exact(self.mission_medals, MISSION_COUNT, "mission_medals")
        yield _pack("2B", self.evil_bitflag, self.good_bitflag)
        yield _pack("if", self.unknown_101, self.movement_speed)
        yield _exact(self.unknown_102_109, 8, "unknown_102_109")
        yield _pack("i", self.unknown_110)

    @staticmethod
    def _items(items: list[bytes]):
        if len(items) != ITEM_SLOTS:
            raise ValueError(f"item list must hold {ITEM_SLOTS} entries")
        for item in items:
            yield _exact(item, ITEM_DATA_SIZE, "item data")

    def serialize(self) -> bytes:
        """Encode the decoded fields as the fixed-size record."""
        try:
            raw = b"".join(self._parts())
        except struct.error as error:
            raise ValueError(f"cannot serialize character: {error}") from error
        if len(raw) != CHARACTER_DATA_SIZE:
            raise ValueError(f"serialized character is {len(raw)} bytes")
        return raw

    def deserialize(self, data: bytes) -> None:
        """Decode the fields from an uncompressed record."""
        data = bytes(data)
        if len(data) < CHARACTER_DATA_SIZE:
            raise ValueError(
                f"character data is {len(data)} bytes, expected {CHARACTER_DATA_SIZE}"
            )
        r = BufferReader(data)

        self.name = _decode_fixed(r.read_bytes(TEXT_SIZE))
        self.unknown_000 = r.read_bytes(4)
        self.unknown_str = _decode_fixed(r.read_bytes(TEXT_SIZE))
        self.unknown_004 = list(r.read("3i"))

        class_value, race_value = r.read("2i")
        self.character_class = _enum_or_int(CharacterClass, class_value)
        self.character_race = _enum_or_int(CharacterRace, race_value)

        (self.current_level, self.pending_level, self.unknown_009, self.experience) = r.read(
            "BBHi"
        )
        self.unknown_010 = list(r.read("6i"))
        self.stats = [Stats.read(r) for _ in range(2)]

        values = r.read("i2f3i2fi3i2i")
        self.unknown_016, self.current_hp, self.maximum_hp = values[0:3]
        self.unknown_017_019 = list(values[3:6])
        self.current_mana, self.maximum_mana, self.unknown_020 = values[6:9]
        self.attack_power, self.minimum_damage, self.maximum_damage = values[9:12]
        self.unknown_021, self.unknown_022 = values[12:14]
        self.unknown_023_026 = r.read_bytes(4)

        (
            self.current_gold,
            self.current_skill_points,
            self.current_ability_points,
            self.has_spent_remaining_points,
        ) = r.read("2i2h")
        self.unknown_029_040 = list(r.read("12i"))

        self.weight, self.max_weight, self.unknown_041, self.unknown_042 = r.read("2f2i")

        self.item_data = [r.read_bytes(ITEM_DATA_SIZE) for _ in range(ITEM_SLOTS)]
        self.num_armor_item, self.unknown_043 = r.read("2i")
        self.armor_item_data = [r.read_bytes(ITEM_DATA_SIZE) for _ in range(ITEM_SLOTS)]
        self.num_weapon_item, self.unknown_044 = r.read("2i")
        self.weapon_item_data = [r.read_bytes(ITEM_DATA_SIZE) for _ in range(ITEM_SLOTS)]
        self.num_consumable_item, self.unknown_045 = r.read("2i")
        self.unknown_046 = r.read_bytes(UNKNOWN_046_SIZE)

        self.quests = [Quest.read(r) for _ in range(QUEST_COUNT)]
        self.num_quests = r.read("i")
        self.unknown_048_054 = list(r.read("7i"))
        self.equipment = list(r.read("20i"))
        self.new_styles = [NewStyle.read(r) for _ in range(NEW_STYLE_COUNT)]

        self.unknown_075, self.unknown_076 = r.read("if")
        self.unknown_077_085 = list(r.read("9i"))

        slot_a, slot_b, self.unknown_087, self.unknown_088 = r.read("4B")
        self.skill_slot = [slot_a, slot_b]

        self.attack_data = [r.read("4f") for _ in range(ATTACK_COUNT)]
        self.skills = [Skill.read(r) for _ in range(SKILL_COUNT)]
        self.unknown_091 = r.read("i")

        self.mission_progress = [DifficultyProgress.read(r) for _ in range(DIFFICULTY_COUNT)]
        self.mission_medals = r.read_bytes(MISSION_COUNT)

        self.evil_bitflag, self.good_bitflag = r.read("2B")
        self.unknown_101, self.movement_speed = r.read("if")
        self.unknown_102_109 = r.read_bytes(8)
        self.unknown_110 = r.read("i")

    def validate_data(self) -> bool:
        """Check the save blob size and that the decoded values are plausible."""
        if len(self.data) < CHARACTER_DATA_SIZE:
            logger.error("Character data is invalid or too small!")
            return False
        if not 1 <= self.current_level <= MAX_LEVEL:
            logger.error("Invalid character level: %d", self.current_level)
            return False
        if self.current_hp < 1.0 or self.current_hp > self.maximum_hp:
            logger.error(
                "Invalid HP values: current %f, maximum %f", self.current_hp, self.maximum_hp
            )
            return False
        if self.current_mana < 0.0 or self.current_mana > self.maximum_mana:
            logger.error(
                "Invalid mana values: current %f, maximum %f",
                self.current_mana,
                self.maximum_mana,
            )
            return False
        if self.weight < 0.0 or self.weight > self.max_weight:
            logger.error(
                "Invalid weight values: current %f, maximum %f", self.weight, self.max_weight
            )
            return False
        if self.movement_speed <= 0.0:
            logger.error("Invalid movement speed: %f", self.movement_speed)
            return False
        for progress in self.mission_progress:
            for label, value in (
                ("NA", progress.mission_na),
                ("Disease", progress.mission_disease),
                ("Fear", progress.mission_fear),
            ):
                if not 0 <= value <= 3:
                    logger.error("Invalid mission %s value: %d", label, value)
                    return False
        return True

    def set_meta_data(self, stream: ByteBuffer) -> None:
        """Read the slot metadata from a stream."""
        self.meta.read_from(stream)

    def unpack(self) -> bytes:
        """Decompress the save blob, skipping its header."""
        return decompress(self.data[SAVE_HEADER_SIZE:])