from realmlobby.constants import RealmGameType
from realmlobby.user import RealmUser


def test_new_user_is_not_in_any_game_or_room():
    user = RealmUser()
    assert user.game_type is RealmGameType.CHAMPIONS_OF_NORRATH
    assert user.account_id == -1
    assert (user.member_id, user.game_id) == (-1, -1)
    assert (user.public_room_id, user.private_room_id) == (-1, -1)
    assert user.is_logged_in is False


def test_matches_on_session_or_account():
    a = RealmUser(session_id="AAAA", account_id=1)
    same_session = RealmUser(session_id="AAAA", account_id=2)
    same_account = RealmUser(session_id="BBBB", account_id=1)
    other = RealmUser(session_id="CCCC", account_id=3)
    assert a.matches(same_session)
    assert a.matches(same_account)
    assert not a.matches(other)


def test_sort_key_orders_by_session_then_account():
    users = [
        RealmUser(session_id="B", account_id=1),
        RealmUser(session_id="A", account_id=9),
        RealmUser(session_id="A", account_id=2),
    ]
    ordered = sorted(users, key=RealmUser.sort_key)
    assert [(u.session_id, u.account_id) for u in ordered] == [
        ("A", 2),
        ("A", 9),
        ("B", 1),
    ]


def test_users_compare_by_identity():
    first = RealmUser(session_id="A")
    second = RealmUser(session_id="A")
    assert first.matches(second)
    assert len({first, second}) == 2