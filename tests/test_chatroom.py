import gc

from realmlobby.chatroom import ChatRoomSession, RoomType
from realmlobby.user import RealmUser


def test_add_member_once():
    room = ChatRoomSession(name="Epic")
    user = RealmUser(session_id="A")
    assert room.add_member(user) is True
    assert room.add_member(user) is False
    assert room.members == [user]


def test_add_none_rejected():
    room = ChatRoomSession()
    assert room.add_member(None) is False
    assert room.member_refs == []


def test_remove_member():
    room = ChatRoomSession()
    first, second = RealmUser(session_id="A"), RealmUser(session_id="B")
    room.add_member(first)
    room.add_member(second)
    assert room.remove_member(first) is True
    assert room.remove_member(first) is False
    assert room.members == [second]
    assert room.remove_member(None) is False


def test_is_member():
    room = ChatRoomSession()
    user, stranger = RealmUser(), RealmUser()
    room.add_member(user)
    assert room.is_member(user)
    assert not room.is_member(stranger)
    assert not room.is_member(None)


def test_dead_members_disappear():
    room = ChatRoomSession()
    user = RealmUser()
    room.add_member(user)
    del user
    gc.collect()
    assert room.members == []
    assert len(room.member_refs) == 1


def test_owner_is_weak():
    room = ChatRoomSession(room_type=RoomType.PRIVATE)
    owner = RealmUser(username="host")
    room.owner = owner
    assert room.owner is owner
    del owner
    gc.collect()
    assert room.owner is None


def test_room_type_predicates():
    public = ChatRoomSession()
    private = ChatRoomSession(room_type=RoomType.PRIVATE)
    assert public.is_public() and not public.is_private()
    assert private.is_private() and not private.is_public()