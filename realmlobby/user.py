"""A client connected to the lobby."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from .constants import RealmGameType


@dataclass(eq=False)
class RealmUser:
    """Connection, account and game/chat membership state of one client."""

    sock: Any = None
    game_type: RealmGameType = RealmGameType.CHAMPIONS_OF_NORRATH
    account_id: int = -1
    session_id: str = ""
    username: str = ""
    chat_handle: str = ""

    is_logged_in: bool = False
    is_host: bool = False
    member_id: int = -1
    game_id: int = -1

    public_room_id: int = -1
    private_room_id: int = -1

    local_addr: str = ""
    local_port: int = 0
    discovery_addr: str = ""
    discovery_port: int = 0

    character_id: int = 0
    character: Any = None

    def matches(self, other: RealmUser) -> bool:
        """Same client if either the session or the account agrees."""
        return self.session_id == other.session_id or self.account_id == other.account_id

    def sort_key(self) -> Tuple[str, int]:
        """Order by session id first, then by account id."""
        return (self.session_id, self.account_id)