"""A chat room and its weakly held members."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum, auto

from .user import RealmUser


class RoomType(Enum):
    PUBLIC = auto()
    PRIVATE = auto()


@dataclass(eq=False)
class ChatRoomSession:
    """Room membership; users are referenced weakly so leaving clients vanish."""

    room_type: RoomType = RoomType.PUBLIC
    index: int = 0
    name: str = ""
    banner: str = ""
    member_refs: list[weakref.ref] = field(default_factory=list, repr=False)
    moderator_refs: list[weakref.ref] = field(default_factory=list, repr=False)
    _owner_ref: weakref.ref | None = field(default=None, init=False, repr=False)

    @property
    def owner(self) -> RealmUser | None:
        return self._owner_ref() if self._owner_ref is not None else None

    @owner.setter
    def owner(self, user: RealmUser | None) -> None:
        self._owner_ref = weakref.ref(user) if user is not None else None

    @property
    def members(self) -> list[RealmUser]:
        """Members that are still alive."""
        return [user for user in (ref() for ref in self.member_refs) if user is not None]

    def add_member(self, user: RealmUser | None) -> bool:
        if user is None or self.is_member(user):
            return False
        self.member_refs.append(weakref.ref(user))
        return True

    def remove_member(self, user: RealmUser | None) -> bool:
        if user is None:
            return False
        kept = [ref for ref in self.member_refs if ref() is not user]
        if len(kept) == len(self.member_refs):
            return False
        self.member_refs = kept
        return True

    def is_member(self, user: RealmUser | None) -> bool:
        if user is None:
            return False
        return any(ref() is user for ref in self.member_refs)

    def is_public(self) -> bool:
        return self.room_type is RoomType.PUBLIC

    def is_private(self) -> bool:
        return self.room_type is RoomType.PRIVATE