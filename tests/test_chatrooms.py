from realmlobby.chatroom import RoomType
from realmlobby.chatrooms import PUBLIC_ROOM_NAMES, ChatRoomManager, RoomMessage
from realmlobby.user import RealmUser


class FakeSocket:
    def __init__(self):
        self.sent = []

    def send(self, message):
        self.sent.append(message)


def make_user(name, session_id):
    return RealmUser(
        sock=FakeSocket(), username=name, chat_handle=name, session_id=session_id
    )


def test_public_rooms_created_in_order():
    manager = ChatRoomManager()
    rooms = manager.public_rooms()
    assert [room.name for room in rooms] == [
        "Champions Reborn",
        "Adventurous",
        "Courageous",
        "Champion",
        "Legendary",
        "Epic",
    ]
    assert [room.index for room in rooms] == list(range(len(PUBLIC_ROOM_NAMES)))
    assert all(room.room_type is RoomType.PUBLIC for room in rooms)


def test_join_public_room_sets_room_id():
    manager = ChatRoomManager()
    user = make_user("Alice", "A1")
    assert manager.join_room(user, "Epic") is True
    room = manager.find_room("Epic")
    assert user.public_room_id == room.index
    assert room.is_member(user)
    assert user.sock.sent == []


def test_join_twice_fails():
    manager = ChatRoomManager()
    user = make_user("Alice", "A1")
    assert manager.join_room(user, "Epic")
    assert manager.join_room(user, "Epic") is False


def test_join_invalid_arguments():
    manager = ChatRoomManager()
    user = make_user("Alice", "A1")
    assert manager.join_room(user, "") is False
    assert manager.join_room(None, "Epic") is False
    assert manager.join_room(user, "Nowhere") is False
    assert user.public_room_id == -1


def test_leave_public_room():
    manager = ChatRoomManager()
    user = make_user("Alice", "A1")
    manager.join_room(user, "Champion")
    assert manager.leave_room(user, "Champion") is True
    assert user.public_room_id == -1
    assert not manager.find_room("Champion").is_member(user)
    assert manager.leave_room(user, "Champion") is False
    # public rooms are never deleted
    assert manager.find_room("Champion") is not None


def test_create_game_chat_session():
    manager = ChatRoomManager()
    owner = make_user("Host", "H1")
    assert manager.create_game_chat_session(owner, "party") is True
    room = manager.find_room("party")
    assert room.is_private()
    assert room.owner is owner
    assert room.is_member(owner)
    assert owner.private_room_id == room.index
    assert manager.find_room_by_id(room.index) is room
    assert room not in manager.public_rooms()


def test_create_game_chat_session_name_in_use():
    manager = ChatRoomManager()
    owner = make_user("Host", "H1")
    assert manager.create_game_chat_session(owner, "party")
    assert manager.create_game_chat_session(owner, "party") is False
    assert manager.create_game_chat_session(owner, "Epic") is False


def test_join_private_room_announces_to_members():
    manager = ChatRoomManager()
    owner = make_user("Host", "H1")
    guest = make_user("Bob", "B1")
    manager.create_game_chat_session(owner, "party")
    assert manager.join_room(guest, "party")
    expected = RoomMessage("party", "", "User 'Bob' has joined the room.")
    assert owner.sock.sent == [expected]
    assert guest.sock.sent == [expected]
    assert guest.private_room_id == manager.find_room("party").index


def test_leaving_last_member_deletes_private_room():
    manager = ChatRoomManager()
    owner = make_user("Host", "H1")
    guest = make_user("Bob", "B1")
    manager.create_game_chat_session(owner, "party")
    manager.join_room(guest, "party")
    assert manager.leave_room(guest, "party")
    assert manager.find_room("party") is not None
    assert guest.private_room_id == -1
    room_id = owner.private_room_id
    assert manager.leave_room_by_id(owner, room_id)
    assert manager.find_room("party") is None
    assert owner.private_room_id == -1


def test_close_game_chat_session():
    manager = ChatRoomManager()
    owner = make_user("Host", "H1")
    guest = make_user("Bob", "B1")
    manager.create_game_chat_session(owner, "party")
    manager.join_room(guest, "party")
    assert manager.close_game_chat_session("party") is True
    assert manager.find_room("party") is None
    assert owner.private_room_id == -1
    assert guest.private_room_id == -1
    assert manager.close_game_chat_session("party") is False


def test_close_public_room_refused():
    manager = ChatRoomManager()
    assert manager.close_game_chat_session("Epic") is False
    assert manager.close_game_chat_session("") is False
    assert manager.find_room("Epic") is not None


def test_send_message_to_room():
    manager = ChatRoomManager()
    alice = make_user("Alice", "A1")
    bob = make_user("Bob", "B1")
    manager.join_room(alice, "Epic")
    manager.join_room(bob, "Epic")
    manager.send_message_to_room("Epic", "Alice", "hello")
    assert alice.sock.sent == [RoomMessage("Epic", "Alice", "hello")]
    assert bob.sock.sent == [RoomMessage("Epic", "Alice", "hello")]


def test_send_empty_message_is_dropped():
    manager = ChatRoomManager()
    alice = make_user("Alice", "A1")
    manager.join_room(alice, "Epic")
    manager.send_message_to_room("Epic", "Alice", "")
    manager.send_message_to_room("Nowhere", "Alice", "hello")
    assert alice.sock.sent == []


def test_on_disconnect_user_leaves_all_rooms():
    manager = ChatRoomManager()
    owner = make_user("Host", "H1")
    manager.join_room(owner, "Epic")
    manager.create_game_chat_session(owner, "party")
    manager.on_disconnect_user(owner)
    assert owner.public_room_id == -1
    assert owner.private_room_id == -1
    assert not manager.find_room("Epic").is_member(owner)
    assert manager.find_room("party") is None


def test_find_room_edge_cases():
    manager = ChatRoomManager()
    assert manager.find_room("") is None
    assert manager.find_room_by_id(-1) is None
    assert manager.find_room_by_id(1000) is None
    assert manager.find_room_by_id(0).name == "Champions Reborn"