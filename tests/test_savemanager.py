import pytest

from realmlobby.character import CHARACTER_DATA_SIZE
from realmlobby.rlez import compress
from realmlobby.savemanager import CharacterSaveManager
from realmlobby.savetask import CharacterSaveType
from realmlobby.slotdata import CharacterSlotData
from realmlobby.user import RealmUser

HEADER = b"\x01\x02\x03\x04"
FULL_SAVE = HEADER + compress(bytes(CHARACTER_DATA_SIZE))


class FakeStore:
    def __init__(self, new_id=7, save_ok=True, fail=False):
        self.new_id = new_id
        self.save_ok = save_ok
        self.fail = fail
        self.created = []
        self.saved = []

    def create_new_character(self, account_id, meta, data):
        if self.fail:
            raise RuntimeError("database unavailable")
        self.created.append((account_id, meta, data))
        return self.new_id

    def save_character(self, account_id, character_id, meta, data):
        if self.fail:
            raise RuntimeError("database unavailable")
        self.saved.append((account_id, character_id, meta, data))
        return self.save_ok


@pytest.fixture
def meta():
    slot = CharacterSlotData()
    slot.entries = [("name", "Hero")]
    return slot


@pytest.fixture
def owner():
    return RealmUser(session_id="OWNER", account_id=10, character_id=3)


def test_begin_requires_both_users(meta, owner):
    manager = CharacterSaveManager(FakeStore())
    assert manager.begin_save_task(None, owner, 0, meta, CharacterSaveType.NEW_CHARACTER) is False
    assert manager.begin_save_task(owner, None, 0, meta, CharacterSaveType.NEW_CHARACTER) is False
    assert manager.tasks == {}


def test_begin_registers_task_under_owner(meta, owner):
    target = RealmUser(session_id="TARGET", account_id=20)
    manager = CharacterSaveManager(FakeStore())
    assert manager.begin_save_task(owner, target, 5, meta, CharacterSaveType.SAVE_CHARACTER)
    task = manager.find_save_task("OWNER")
    assert task.owner_user is owner
    assert task.target_user is target
    assert task.character_id == 5
    assert task.meta == meta
    assert manager.find_save_task("TARGET") is None


def test_begin_replaces_existing_task(meta, owner):
    manager = CharacterSaveManager(FakeStore())
    manager.begin_save_task(owner, owner, 1, meta, CharacterSaveType.SAVE_CHARACTER)
    manager.begin_save_task(owner, owner, 2, meta, CharacterSaveType.SAVE_CHARACTER)
    assert len(manager.tasks) == 1
    assert manager.find_save_task("OWNER").character_id == 2


def test_append_without_task_fails():
    manager = CharacterSaveManager(FakeStore())
    assert manager.append_save_data("NOBODY", b"\x01", True) is False


def test_append_empty_chunk_fails(meta, owner):
    manager = CharacterSaveManager(FakeStore())
    manager.begin_save_task(owner, owner, 0, meta, CharacterSaveType.NEW_CHARACTER)
    assert manager.append_save_data("OWNER", b"", False) is False
    assert manager.find_save_task("OWNER").data == b""


def test_chunked_new_character_is_committed(meta, owner):
    store = FakeStore(new_id=7)
    manager = CharacterSaveManager(store)
    manager.begin_save_task(owner, owner, 0, meta, CharacterSaveType.NEW_CHARACTER)
    half = len(FULL_SAVE) // 2
    assert manager.append_save_data("OWNER", FULL_SAVE[:half], False) is True
    assert store.created == []
    assert manager.append_save_data("OWNER", FULL_SAVE[half:] + b"\xff\xff", True) is True
    assert store.created == [(10, meta, FULL_SAVE)]
    assert owner.character_id == 7
    assert "OWNER" not in manager.tasks


def test_new_character_store_failure(meta, owner):
    store = FakeStore(new_id=0)
    manager = CharacterSaveManager(store)
    manager.begin_save_task(owner, owner, 0, meta, CharacterSaveType.NEW_CHARACTER)
    assert manager.append_save_data("OWNER", FULL_SAVE, True) is False
    assert owner.character_id == 3


def test_save_character_uses_target_ids(meta, owner):
    target = RealmUser(session_id="TARGET", account_id=20, character_id=9)
    store = FakeStore()
    manager = CharacterSaveManager(store)
    manager.begin_save_task(owner, target, 9, meta, CharacterSaveType.SAVE_CHARACTER)
    manager.find_save_task("OWNER").append_data(FULL_SAVE)
    assert manager.commit_save_task("OWNER") is True
    assert store.saved == [(20, 9, meta, FULL_SAVE)]
    assert manager.find_save_task("OWNER") is None


def test_save_character_without_id_fails(meta, owner):
    store = FakeStore()
    manager = CharacterSaveManager(store)
    manager.begin_save_task(owner, owner, 0, meta, CharacterSaveType.SAVE_CHARACTER)
    assert manager.append_save_data("OWNER", FULL_SAVE, True) is False
    assert store.saved == []


def test_save_character_rejected_by_store(meta, owner):
    manager = CharacterSaveManager(FakeStore(save_ok=False))
    manager.begin_save_task(owner, owner, 3, meta, CharacterSaveType.SAVE_CHARACTER)
    assert manager.append_save_data("OWNER", FULL_SAVE, True) is False


def test_incomplete_data_is_not_committed(meta, owner):
    store = FakeStore()
    manager = CharacterSaveManager(store)
    manager.begin_save_task(owner, owner, 0, meta, CharacterSaveType.NEW_CHARACTER)
    manager.find_save_task("OWNER").append_data(HEADER + b"\x01\x02\x03")
    assert manager.commit_save_task("OWNER") is False
    assert store.created == []
    assert "OWNER" not in manager.tasks


def test_store_exception_yields_false(meta, owner):
    manager = CharacterSaveManager(FakeStore(fail=True))
    manager.begin_save_task(owner, owner, 0, meta, CharacterSaveType.NEW_CHARACTER)
    manager.find_save_task("OWNER").append_data(FULL_SAVE)
    assert manager.commit_save_task("OWNER") is False


def test_commit_unknown_session():
    manager = CharacterSaveManager(FakeStore())
    assert manager.commit_save_task("NOBODY") is False


def test_remove_save_task(meta, owner):
    manager = CharacterSaveManager(FakeStore())
    manager.begin_save_task(owner, owner, 0, meta, CharacterSaveType.NEW_CHARACTER)
    assert manager.remove_save_task("OWNER") is True
    assert manager.remove_save_task("OWNER") is False
    assert manager.find_save_task("OWNER") is None