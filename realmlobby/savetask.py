"""Accumulates a compressed character save sent in chunks by a client."""

from __future__ import annotations

import logging
from enum import IntEnum

from .character import CHARACTER_DATA_SIZE, SAVE_HEADER_SIZE
from .slotdata import CharacterSlotData
from .user import RealmUser

logger = logging.getLogger(__name__)


class CharacterSaveType(IntEnum):
    NEW_CHARACTER = 0
    SAVE_CHARACTER = 1


class CharacterSaveTask:
    """A pending save: who asked, whose character, its metadata and its data."""

    def __init__(self, save_type: CharacterSaveType, character_id: int = 0) -> None:
        self.save_type = save_type
        self.owner_user: RealmUser | None = None
        self.target_user: RealmUser | None = None
        self.character_id = character_id
        self.write_position = 0
        self.meta = CharacterSlotData()
        self._data = bytearray()

    @property
    def data(self) -> bytes:
        """The compressed data received so far."""
        return bytes(self._data)

    def set_meta_data(self, meta: CharacterSlotData) -> None:
        self.meta = meta

    def append_data(self, data: bytes) -> None:
        """Add a chunk; an empty chunk is an error."""
        if not data:
            raise ValueError("cannot append an empty chunk to a save task")
        self._data += data

    def validate(self) -> bool:
        """Check the data decompresses to a full record and trim trailing garbage."""
        if not self._data:
            logger.error("Save task has no pending data")
            return False
        if self.meta.is_empty():
            logger.error("Save task has no metadata")
            return False

        position = SAVE_HEADER_SIZE
        size = 0
        end = len(self._data)
        while position < end and size < CHARACTER_DATA_SIZE:
            byte = self._data[position]
            position += 1
            size += 1
            if byte == 0:
                if position >= end:
                    logger.error("Unexpected end of data during decompression")
                    return False
                size += self._data[position]
                position += 1

        if size < CHARACTER_DATA_SIZE:
            logger.error("Pending character data is incomplete; more data needed")
            return False

        del self._data[position:]
        return True