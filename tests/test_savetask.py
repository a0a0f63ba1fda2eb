import pytest

from realmlobby.character import CHARACTER_DATA_SIZE
from realmlobby.rlez import compress
from realmlobby.savetask import CharacterSaveTask, CharacterSaveType
from realmlobby.slotdata import CharacterSlotData

HEADER = b"\x00\x00\x00\x00"


def _meta() -> CharacterSlotData:
    meta = CharacterSlotData()
    meta.entries = [("name", "Hero")]
    return meta


def _task() -> CharacterSaveTask:
    task = CharacterSaveTask(CharacterSaveType.SAVE_CHARACTER, 5)
    task.set_meta_data(_meta())
    return task


def _full_blob() -> bytes:
    return HEADER + compress(bytes(range(1, 200)) + bytes(CHARACTER_DATA_SIZE - 199))


def test_new_task_defaults():
    task = CharacterSaveTask(CharacterSaveType.NEW_CHARACTER)
    assert task.character_id == 0
    assert task.owner_user is None
    assert task.target_user is None
    assert task.data == b""
    assert task.meta.is_empty()


def test_append_concatenates_chunks():
    task = _task()
    task.append_data(b"abc")
    task.append_data(b"de")
    assert task.data == b"abcde"


def test_append_empty_raises():
    with pytest.raises(ValueError):
        _task().append_data(b"")


def test_validate_accepts_complete_data():
    blob = _full_blob()
    task = _task()
    for start in range(0, len(blob), 100):
        task.append_data(blob[start:start + 100])
    assert task.validate() is True
    assert task.data == blob


def test_validate_trims_trailing_garbage():
    blob = _full_blob()
    task = _task()
    task.append_data(blob + b"\x07\x08\x09")
    assert task.validate() is True
    assert task.data == blob


def test_validate_requires_data():
    assert _task().validate() is False


def test_validate_requires_meta():
    task = CharacterSaveTask(CharacterSaveType.SAVE_CHARACTER, 5)
    task.append_data(_full_blob())
    assert task.validate() is False


def test_validate_rejects_incomplete_data():
    task = _task()
    task.append_data(_full_blob()[:-10])
    assert task.validate() is False


def test_validate_rejects_truncated_zero_run():
    task = _task()
    task.append_data(HEADER + b"\x01" * 10 + b"\x00")
    assert task.validate() is False
    assert task.data == HEADER + b"\x01" * 10 + b"\x00"