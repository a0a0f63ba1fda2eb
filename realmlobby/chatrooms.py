"""Registry of public lobby chat rooms and private per-game rooms."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .chatroom import ChatRoomSession, RoomType
from .user import RealmUser

logger = logging.getLogger(__name__)

PUBLIC_ROOM_NAMES = (
    "Champions Reborn",
    "Adventurous",
    "Courageous",
    "Champion",
    "Legendary",
    "Epic",
)


@dataclass(frozen=True)
class RoomMessage:
    """A chat line delivered to every member of a room."""

    room_name: str
    handle: str
    message: str


class ChatRoomManager:
    """Creates, finds, joins, leaves and closes chat rooms."""

    def __init__(self) -> None:
        self._next_index = 0
        self._rooms: dict[int, ChatRoomSession] = {}
        for name in PUBLIC_ROOM_NAMES:
            self._add_room(ChatRoomSession(room_type=RoomType.PUBLIC, name=name))

    def _add_room(self, session: ChatRoomSession) -> ChatRoomSession:
        session.index = self._next_index
        self._rooms[self._next_index] = session
        self._next_index += 1
        return session

    def public_rooms(self) -> list[ChatRoomSession]:
        """Public rooms in index order."""
        return [room for room in self._rooms.values() if room.is_public()]

    def join_room(self, user: RealmUser | None, room_name: str) -> bool:
        if not room_name or user is None:
            return False
        session = self.find_room(room_name)
        if session is None:
            logger.error("Chat room [%s] not found", room_name)
            return False
        if not session.add_member(user):
            logger.error("Failed to add user [%s] to chat room [%s]", user.username, room_name)
            return False

        if session.is_public():
            user.public_room_id = session.index
        else:
            user.private_room_id = session.index
            self.send_message_to_room(
                room_name, "", f"User '{user.chat_handle}' has joined the room."
            )

        logger.info("User [%s] joined chat room [%s]", user.username, room_name)
        return True

    def _leave(self, user: RealmUser, session: ChatRoomSession) -> bool:
        if not session.remove_member(user):
            logger.error(
                "Failed to remove user [%s] from chat room [%s]", user.username, session.name
            )
            return False

        if session.is_private():
            if not session.member_refs and not session.moderator_refs:
                self._rooms.pop(session.index, None)
                logger.debug("Private chat room [%s] deleted", session.name)
            user.private_room_id = -1
        else:
            user.public_room_id = -1

        logger.info("User [%s] left chat room [%s]", user.username, session.name)
        return True

    def leave_room(self, user: RealmUser | None, room_name: str) -> bool:
        """Leave a room by name; an emptied private room is deleted."""
        if user is None or not room_name:
            return False
        session = self.find_room(room_name)
        if session is None:
            logger.error("Chat room [%s] not found", room_name)
            return False
        return self._leave(user, session)

    def leave_room_by_id(self, user: RealmUser | None, room_id: int) -> bool:
        """Leave a room by index; an emptied private room is deleted."""
        if user is None or room_id < 0:
            return False
        session = self.find_room_by_id(room_id)
        if session is None:
            return False
        return self._leave(user, session)

    def on_disconnect_user(self, user: RealmUser | None) -> None:
        if user is None:
            return
        self.leave_room_by_id(user, user.public_room_id)
        self.leave_room_by_id(user, user.private_room_id)

    def create_game_chat_session(self, owner: RealmUser, room_name: str) -> bool:
        """Create a private room owned by and containing owner."""
        if any(room.name == room_name for room in self._rooms.values()):
            logger.error("Chat Room name is already in use! [%s]", room_name)
            return False

        session = ChatRoomSession(room_type=RoomType.PRIVATE, name=room_name)
        session.owner = owner
        self._add_room(session)
        session.add_member(owner)
        owner.private_room_id = session.index
        return True

    def close_game_chat_session(self, room_name: str) -> bool:
        """Delete a private room, detaching all of its members."""
        if not room_name:
            return False
        session = next((r for r in self._rooms.values() if r.name == room_name), None)
        if session is None:
            logger.error("Chat room [%s] not found", room_name)
            return False
        if not session.is_private():
            logger.error("Chat room [%s] is not a private room", room_name)
            return False

        for member in session.members:
            member.private_room_id = -1
        del self._rooms[session.index]

        logger.info("Chat room [%s] closed", room_name)
        return True

    def send_message_to_room(self, room_name: str, handle: str, message: str) -> None:
        """Send a message to every live member of the room."""
        if not room_name or not message:
            return
        session = self.find_room(room_name)
        if session is None:
            logger.error("Chat room [%s] not found", room_name)
            return
        notification = RoomMessage(room_name, handle, message)
        for member in session.members:
            if member.sock is not None:
                member.sock.send(notification)

    def find_room(self, room_name: str) -> ChatRoomSession | None:
        if not room_name:
            return None
        return next((r for r in self._rooms.values() if r.name == room_name), None)

    def find_room_by_id(self, room_id: int) -> ChatRoomSession | None:
        if room_id < 0:
            return None
        session = self._rooms.get(room_id)
        if session is None:
            logger.error("Chat room with ID [%d] not found", room_id)
        return session