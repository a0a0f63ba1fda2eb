"""Registry of users connected to the lobby."""

from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from typing import Any, Protocol

from .chatrooms import ChatRoomManager
from .constants import MAX_SESSION_ID_LENGTH, RealmGameType
from .gamesessions import GameSessionManager
from .user import RealmUser

logger = logging.getLogger(__name__)

_SESSION_CHARSET = "0123456789ABCDEF"


@dataclass(frozen=True)
class ForcedLogout:
    """Tells a client it is being logged out by the server."""


class SessionDatabase(Protocol):
    """Session and character persistence used by the user registry."""

    def delete_session(self, session_id: str) -> Any: ...

    def get_session(self, session_id: str, ip_address: str) -> tuple[int, int]: ...

    def load_character_data(self, account_id: int, character_id: int) -> Any: ...


class LobbySocket(Protocol):
    """A client connection: remote address, outgoing messages, disconnect flag."""

    remote_ip: str
    disconnected_wait: bool

    def send(self, message: Any) -> Any: ...


class UserManager:
    """Creates, finds and removes users, cleaning up their games and chat rooms."""

    def __init__(
        self,
        database: SessionDatabase,
        game_sessions: GameSessionManager | None = None,
        chat_rooms: ChatRoomManager | None = None,
    ) -> None:
        self.database = database
        self.game_sessions = game_sessions if game_sessions is not None else GameSessionManager()
        self.chat_rooms = chat_rooms if chat_rooms is not None else ChatRoomManager()
        self._users: list[RealmUser] = []
        self._lock = threading.RLock()
        self._rng = random.Random()

    def __len__(self) -> int:
        return len(self._users)

    def generate_session_id(self) -> str:
        """A random upper-case hexadecimal session identifier."""
        return "".join(self._rng.choice(_SESSION_CHARSET) for _ in range(MAX_SESSION_ID_LENGTH))

    def create_user(self, sock: LobbySocket | None, game_type: RealmGameType) -> RealmUser:
        user = RealmUser(sock=sock, game_type=game_type)
        with self._lock:
            self._users.append(user)
        logger.debug("Created new user")
        return user

    def remove_user(self, user: RealmUser) -> bool:
        """Drop the user, its stored session, its games and its chat memberships."""
        with self._lock:
            if user not in self._users:
                logger.error("RemoveUser : [%s] not found", user.session_id)
                return False

        self.database.delete_session(user.session_id)
        self.game_sessions.on_disconnect_user(user)
        self.chat_rooms.on_disconnect_user(user)

        logger.debug("RemoveUser : [%s][%s]", user.username, user.session_id)
        with self._lock:
            if user in self._users:
                self._users.remove(user)
        return True

    def remove_user_by_session_id(self, session_id: str) -> bool:
        user = self.find_user_by_session_id(session_id)
        if user is None:
            logger.error("RemoveUser : [%s] not found", session_id)
            return False
        return self.remove_user(user)

    def remove_user_by_socket(self, sock: LobbySocket) -> bool:
        user = self.find_user_by_socket(sock)
        if user is None:
            logger.error("RemoveUser : [%s] not found", getattr(sock, "remote_ip", ""))
            return False
        return self.remove_user(user)

    def disconnect_socket(self, sock: LobbySocket | None, reason: str) -> bool:
        """Force the connection to log out and remove its user."""
        if sock is None:
            return False
        logger.debug("DisconnectSocket : [%s]. Reason: %s", sock.remote_ip, reason)
        sock.send(ForcedLogout())
        sock.disconnected_wait = True
        return self.remove_user_by_socket(sock)

    def disconnect_user(self, user: RealmUser | None, reason: str) -> bool:
        """Force the user to log out and remove it."""
        if user is None:
            return False
        if user.sock is not None:
            user.sock.send(ForcedLogout())
            user.sock.disconnected_wait = True
        logger.debug("DisconnectUser : [%s]. Reason: %s", user.session_id, reason)
        return self.remove_user(user)

    def find_user_by_session_id(self, session_id: str) -> RealmUser | None:
        with self._lock:
            return next((u for u in self._users if u.session_id == session_id), None)

    def find_user_by_socket(self, sock: LobbySocket) -> RealmUser | None:
        with self._lock:
            return next((u for u in self._users if u.sock is sock), None)

    def recover_user_by_session(self, session_id: str, sock: LobbySocket) -> RealmUser | None:
        """Reattach a stored session to the user on this connection."""
        user = self.find_user_by_socket(sock)
        if user is None:
            logger.error("RecoverUserBySession: User not found for socket: %s", sock.remote_ip)
            return None
        if not session_id:
            logger.error("RecoverUserBySession: Empty session ID provided.")
            return None

        account_id, character_id = self.database.get_session(session_id, sock.remote_ip)
        if account_id < 0:
            logger.error(
                "RecoverUserBySession: Failed to get session for account ID: %d, session ID: %s",
                account_id,
                session_id,
            )
            return None

        user.account_id = account_id
        user.session_id = session_id
        user.character = self.database.load_character_data(account_id, character_id)
        logger.debug(
            "RecoverUserBySession: User recovered with session ID: %s, account ID: %d",
            session_id,
            account_id,
        )
        return user

    def users(self) -> list[RealmUser]:
        """A snapshot of the connected users."""
        with self._lock:
            return list(self._users)