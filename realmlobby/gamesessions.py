"""Registry of hosted games for both supported clients."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Sequence

from .constants import RealmGameType
from .gamesession import GameSession, GameState, GameType
from .user import RealmUser
from .utility import wide_to_utf8

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _PeerAddress:
    session_id: str
    local_addr: str
    local_port: int
    discovery_addr: str
    discovery_port: int


@dataclass(frozen=True)
class GameDiscovered(_PeerAddress):
    """Tells a host the address its game is discoverable on."""

    @classmethod
    def from_user(cls, user: RealmUser) -> GameDiscovered:
        return cls(
            user.session_id,
            user.local_addr,
            user.local_port,
            user.discovery_addr,
            user.discovery_port,
        )


@dataclass(frozen=True)
class ClientDiscovered(_PeerAddress):
    """Tells a joining client its own address."""

    game_type: RealmGameType = RealmGameType.CHAMPIONS_OF_NORRATH

    @classmethod
    def from_user(cls, user: RealmUser, game_type: RealmGameType) -> ClientDiscovered:
        return cls(
            user.session_id,
            user.local_addr,
            user.local_port,
            user.discovery_addr,
            user.discovery_port,
            game_type,
        )


@dataclass(frozen=True)
class ClientRequestConnect(_PeerAddress):
    """Tells a host the address of a client that wants to join."""

    game_type: RealmGameType = RealmGameType.CHAMPIONS_OF_NORRATH

    @classmethod
    def from_user(cls, user: RealmUser, game_type: RealmGameType) -> ClientRequestConnect:
        return cls(
            user.session_id,
            user.local_addr,
            user.local_port,
            user.discovery_addr,
            user.discovery_port,
            game_type,
        )


class GameSessionManager:
    """Creates, finds, opens, joins and retires game sessions."""

    def __init__(self) -> None:
        self._next_game_id = 0
        self._games: dict[RealmGameType, list[GameSession]] = {
            game_type: [] for game_type in RealmGameType
        }
        self._lock = threading.RLock()

    def _allocate_session(self) -> GameSession:
        with self._lock:
            session = GameSession(self._next_game_id)
            self._next_game_id += 1
        return session

    @staticmethod
    def _prepare_host(user: RealmUser, session: GameSession) -> None:
        user.is_host = True
        user.game_id = session.game_id
        user.discovery_addr = ""
        user.discovery_port = 0
        session.add_member(user)

    def on_disconnect_user(self, user: RealmUser | None) -> None:
        """Close the user's game if the user owns it or it has no owner."""
        if user is None or user.game_id < 0:
            return
        game_id, game_type = user.game_id, user.game_type
        session = self.find_game(game_id, game_type)
        if session is None:
            return
        owner = session.owner()
        if owner is None:
            logger.error("Game session owner not found! [%d]", game_id)
            self.force_terminate_game(game_id, game_type)
            return
        if owner.session_id == user.session_id:
            logger.info("Game session owner disconnected! [%d]", game_id)
            self.force_terminate_game(game_id, game_type)

    def create_game_session_con(
        self,
        user: RealmUser,
        game_info: str,
        name: str,
        stage: str,
        is_private: bool,
    ) -> bool:
        """Create a Champions of Norrath game hosted by user."""
        if not name:
            logger.error("Invalid parameters for creating game session!")
            return False

        session = self._allocate_session()
        if is_private:
            session.visibility = GameType.PRIVATE
            session.game_name = name
        else:
            session.visibility = GameType.PUBLIC
            session.game_name = f"{name} [{stage}]"

        self._prepare_host(user, session)
        with self._lock:
            self._games[RealmGameType.CHAMPIONS_OF_NORRATH].append(session)
        return True

    def create_game_session_rta(
        self,
        user: RealmUser,
        game_info: str,
        name: str,
        attributes: Sequence[int],
        is_private: bool,
    ) -> bool:
        """Create a Return to Arms game; attributes are the five game settings."""
        if self.find_game_by_name(name, RealmGameType.RETURN_TO_ARMS) is not None:
            logger.error("Game name is already in use! [%s]", name)
            return False
        if len(attributes) != 5:
            raise ValueError("attributes must hold exactly five values")

        session = self._allocate_session()
        if is_private:
            session.visibility = GameType.PRIVATE
        else:
            session.visibility = GameType.PUBLIC
            session.game_data = wide_to_utf8(game_info)
            (
                session.difficulty,
                session.game_mode,
                session.unknown,
                session.mission,
                session.network_save,
            ) = attributes
        session.game_name = name

        self._prepare_host(user, session)
        with self._lock:
            self._games[RealmGameType.RETURN_TO_ARMS].append(session)
        return True

    def force_terminate_game(self, game_id: int, game_type: RealmGameType) -> bool:
        """Drop a game from the registry."""
        if game_id < 0:
            return False
        with self._lock:
            games = self._games[game_type]
            for session in games:
                if session.game_id == game_id:
                    games.remove(session)
                    return True
        return False

    def find_game(self, game_id: int, game_type: RealmGameType) -> GameSession | None:
        if game_id < 0:
            return None
        with self._lock:
            return next(
                (s for s in self._games[game_type] if s.game_id == game_id), None
            )

    def find_game_by_name(self, name: str, game_type: RealmGameType) -> GameSession | None:
        if not name:
            return None
        with self._lock:
            return next(
                (s for s in self._games[game_type] if s.game_name == name), None
            )

    def request_open(self, user: RealmUser) -> bool:
        """Make the user's game discoverable at the user's addresses."""
        game_id = user.game_id
        session = self.find_game(game_id, user.game_type)
        if session is None:
            logger.error("Game session not found! [%d]", game_id)
            return False
        if session.state is GameState.OPEN:
            return False
        if not user.discovery_addr:
            logger.error("User discovery address is empty! [%d]", game_id)
            return False

        session.host_local_addr = user.local_addr
        session.host_local_port = user.local_port
        session.host_external_addr = user.discovery_addr
        session.host_nat_port = user.discovery_port
        session.state = GameState.OPEN

        user.sock.send(GameDiscovered.from_user(user))
        logger.info("Game Session [%d] Discoverable on %s", game_id, user.discovery_addr)
        return True

    def request_cancel(self, user: RealmUser | None) -> bool:
        """Take the user out of its game; an emptied game is removed."""
        if user is None or user.game_id < 0:
            return False
        game_id = user.game_id
        with self._lock:
            games = self._games[user.game_type]
            session = next((s for s in games if s.game_id == game_id), None)
            if session is None:
                return False
            if not session.remove_member(user):
                logger.error(
                    "Failed to remove user [%s] from game session [%d]",
                    user.username,
                    game_id,
                )
            if session.current_players <= 0:
                logger.info("Game session [%d] is empty, removing it", game_id)
                games.remove(session)
            else:
                logger.info(
                    "User [%s] left game session [%d], remaining players: %d",
                    user.username,
                    game_id,
                    session.current_players,
                )
        return True

    def request_join(self, user: RealmUser) -> bool:
        """Introduce a joining user and the host of its game to each other."""
        game_id, game_type = user.game_id, user.game_type
        session = self.find_game(game_id, game_type)
        if session is None:
            logger.error("Game session not found! [%d]", game_id)
            return False
        if session.state is not GameState.OPEN:
            logger.error("Game session not open! [%d]", game_id)
            return False

        host = session.owner()
        if host is None:
            logger.error("Host not found! [%d]", game_id)
            self.force_terminate_game(game_id, game_type)
            return False
        if not host.discovery_addr:
            logger.error("User discovery address is empty! [%d]", game_id)
            self.force_terminate_game(game_id, game_type)
            return False

        user.is_host = False
        if host.game_type is RealmGameType.RETURN_TO_ARMS:
            logger.debug(
                "Join User IPs : [%s:%d] -> [%s:%d]",
                user.local_addr,
                user.local_port,
                user.discovery_addr,
                user.discovery_port,
            )
            logger.debug(
                "Host User IPs : [%s:%d] -> [%s:%d]",
                host.local_addr,
                host.local_port,
                host.discovery_addr,
                host.discovery_port,
            )
        user.sock.send(ClientDiscovered.from_user(user, host.game_type))
        host.sock.send(ClientRequestConnect.from_user(user, host.game_type))

        logger.info("User [%s] Joining game session... [%d]", user.session_id, game_id)
        return True

    def request_start(self, user: RealmUser) -> bool:
        """Mark the user's game started and take it off the list."""
        game_id, game_type = user.game_id, user.game_type
        session = self.find_game(game_id, game_type)
        if session is None:
            logger.error("Game session not found! [%d]", game_id)
            return False
        with self._lock:
            session.state = GameState.STARTED
            games = self._games[game_type]
            if session in games:
                games.remove(session)
        logger.info("Game session [%d] started", game_id)
        return True

    def available_games(self, game_type: RealmGameType) -> list[GameSession]:
        """Public games that are open for joining."""
        with self._lock:
            return [
                s
                for s in self._games[game_type]
                if s.visibility is GameType.PUBLIC and s.state is GameState.OPEN
            ]

    def public_games(self, game_type: RealmGameType) -> list[GameSession]:
        with self._lock:
            return [s for s in self._games[game_type] if s.visibility is GameType.PUBLIC]

    def private_games(self, game_type: RealmGameType) -> list[GameSession]:
        with self._lock:
            return [s for s in self._games[game_type] if s.visibility is GameType.PRIVATE]