"""A hosted game that up to four lobby users can join."""

from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass, field
from enum import Enum, auto

from .user import RealmUser

logger = logging.getLogger(__name__)

MAX_MEMBERS = 4


class GameType(Enum):
    PUBLIC = auto()
    PRIVATE = auto()


class GameState(Enum):
    NOT_READY = auto()
    OPEN = auto()
    STARTED = auto()


def _empty_slots() -> list[weakref.ref | None]:
    return [None] * MAX_MEMBERS


@dataclass(eq=False)
class GameSession:
    """Game listing and its member slots; members are held weakly."""

    game_id: int
    visibility: GameType = GameType.PUBLIC
    state: GameState = GameState.NOT_READY

    game_name: str = ""
    owner_name: str = ""
    player_count: str = ""

    game_data: bytes = b""
    description: str = ""

    host_local_addr: str = ""
    host_external_addr: str = ""
    host_local_port: int = 0
    host_nat_port: int = 0

    current_players: int = 0
    maximum_players: int = MAX_MEMBERS

    difficulty: int = 0
    game_mode: int = 0
    mission: int = 0
    unknown: int = 0
    network_save: int = 0

    _slots: list[weakref.ref | None] = field(default_factory=_empty_slots, repr=False)

    def _slot_user(self, index: int) -> RealmUser | None:
        ref = self._slots[index]
        return ref() if ref is not None else None

    def is_joinable(self, user: RealmUser | None = None) -> bool:
        """True if the game is open, has room, and the user is not already in a game here."""
        if user is not None:
            if user.member_id >= 0:
                return False
            if self.find_member(user.session_id) is not None:
                return False
        return self.state is GameState.OPEN and self.current_players < self.maximum_players

    def owner(self) -> RealmUser | None:
        """The user in the first slot, if still alive."""
        return self._slot_user(0)

    def get_member(self, index: int) -> RealmUser | None:
        if not 0 <= index < len(self._slots):
            return None
        return self._slot_user(index)

    def find_member(self, session_id: str) -> RealmUser | None:
        return next(
            (user for user in self.active_members() if user.session_id == session_id),
            None,
        )

    def active_members(self) -> list[RealmUser]:
        """Members that are still alive, in slot order."""
        users = (self._slot_user(i) for i in range(len(self._slots)))
        return [user for user in users if user is not None]

    def add_member(self, user: RealmUser | None) -> bool:
        """Place the user in the first free slot."""
        if user is None or user.member_id >= 0:
            return False

        free_index = None
        for index in range(len(self._slots)):
            member = self._slot_user(index)
            if member is not None:
                if member.session_id == user.session_id:
                    return False
            elif free_index is None:
                free_index = index

        if free_index is None:
            logger.error("Game session is full! [%s]", self.game_name)
            return False

        user.member_id = free_index
        user.game_id = self.game_id
        self._slots[free_index] = weakref.ref(user)
        self.current_players += 1

        logger.info(
            "Added user [%s] to game session [%s] at index %d",
            user.username,
            self.game_name,
            free_index,
        )
        return True

    def remove_member(self, user: RealmUser | None) -> bool:
        """Free the user's slot and clear its game membership."""
        if user is None or not 0 <= user.member_id < len(self._slots):
            return False

        index = user.member_id
        member = self._slot_user(index)
        if member is None or member.session_id != user.session_id:
            logger.error(
                "User [%s] not found in game session [%s] at index %d",
                user.username,
                self.game_name,
                index,
            )
            return False

        user.member_id = -1
        user.game_id = -1
        self._slots[index] = None
        self.current_players -= 1

        logger.info(
            "Removed user [%s] from game session [%s] at index %d",
            user.username,
            self.game_name,
            index,
        )
        return True