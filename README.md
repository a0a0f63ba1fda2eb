# realmlobby

Building blocks for a lobby server that speaks to the online modes of
*Champions of Norrath* and *Return to Arms*. The package contains:

- `realmlobby.bytestream.ByteBuffer`: the little-endian wire buffer the
  clients use. It handles integers, floats, length-prefixed and
  zero-terminated UTF-8 / UTF-16 strings, and encrypted string and byte blocks.
- `realmlobby.reader.BufferReader`: a bounds-checked reader over bytes that
  takes `struct` formats, little-endian unless the format says otherwise.
  A read past the end raises `EOFError`.
- `realmlobby.aes.Rijndael`: AES-256 in ECB mode.
- `realmlobby.crypt`: zero-padded encryption with the game's default
  symmetric key.
- `realmlobby.rlez`: the zero-run compression used for character save blobs.
- `realmlobby.password`: PBKDF2 password hashes in the
  `pbkdf2$<iterations>$<salt>$<hash>` format.
- `realmlobby.utility`: rounding, byte swapping, IPv4 formatting and text
  conversion helpers.
- `realmlobby.constants`: game types, character classes, races and equipment
  slots.
- `realmlobby.transaction.SQLiteTransaction`: a context manager over a
  `sqlite3` connection that rolls back unless `commit()` was called.
- `realmlobby.slotdata.CharacterSlotData`: the key/value pairs shown on a
  character selection slot.
- `realmlobby.character.RealmCharacter`: the fixed 19504-byte character
  record, with `serialize()`, `deserialize()`, `validate_data()` and `unpack()`.
- `realmlobby.savetask` and `realmlobby.savemanager`: character saves that
  arrive in chunks and are committed to a store.
- `realmlobby.user`, `realmlobby.users`, `realmlobby.gamesession`,
  `realmlobby.gamesessions`, `realmlobby.chatroom`, `realmlobby.chatrooms`:
  in-memory state for users, hosted games and chat rooms.

Only the standard library is needed at run time.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

### Zero-run compression

Each zero byte is followed by a count of the extra zeros that come after it,
up to 255:

```python
from realmlobby import rlez

packed = rlez.compress(b"\x01\x00\x00\x00\x02")
assert packed == b"\x01\x00\x02\x02"
assert rlez.decompress(packed) == b"\x01\x00\x00\x00\x02"
```

### Symmetric encryption with the realm key

Input is padded with zeros to a multiple of 16 bytes before it is encrypted:

```python
from realmlobby import crypt

cipher = crypt.encrypt_symmetric(b"hello realm")
assert len(cipher) == 16
assert crypt.decrypt_symmetric(cipher)[:11] == b"hello realm"
```

The cipher also works with any 32-byte key. Data whose length is not a
multiple of 16 raises `ValueError`:

```python
from realmlobby.aes import Rijndael

key = bytes(range(32))
block = Rijndael().encrypt_ecb(b"sixteen byte msg", key)
assert Rijndael().decrypt_ecb(block, key) == b"sixteen byte msg"
```

### Wire buffers

Writes always append to the end of the buffer. Reads move a separate cursor
forward:

```python
from realmlobby.bytestream import ByteBuffer

out = ByteBuffer()
out.write_utf16("hi")
assert bytes(out) == b"\x02\x00\x00\x00h\x00i\x00"

buf = ByteBuffer(b"\x05\x00\x00\x00hello")
assert buf.read_utf8(None) == "hello"
```

### Character slot metadata

```python
from realmlobby.slotdata import CharacterSlotData

slot = CharacterSlotData()
slot.entries = [("name", "Hero")]
assert CharacterSlotData(slot.serialize()).get_value("name") == "Hero"
```

### Password hashes

```python
from realmlobby.password import hash_password, verify_password

password = "password"
stored = hash_password(password, 1000, 16)
assert stored.startswith("pbkdf2$1000$")
assert verify_password(password, stored)
```

The SHA-256 core here derives its round constants instead of using the
standard table. Its digests therefore do not match `hashlib.sha256`, and
stored hashes only work with this package. The package's `hmac_sha256` and
`pbkdf2_hmac_sha256` are built on that core. `verify_password` raises
`ValueError` for a string that is not in the expected format.

### Lobby state

A new `ChatRoomManager` starts with the six public rooms the clients expect:

```python
from realmlobby.chatrooms import ChatRoomManager

rooms = ChatRoomManager()
print([room.name for room in rooms.public_rooms()])
```

Game sessions hold their members through weak references, so the caller must
keep its `RealmUser` objects alive:

```python
from realmlobby.constants import RealmGameType
from realmlobby.gamesessions import GameSessionManager
from realmlobby.user import RealmUser

games = GameSessionManager()
host = RealmUser(session_id="A1", username="host")
games.create_game_session_con(host, "", "My Game", "Stage", False)
session = games.find_game(host.game_id, RealmGameType.CHAMPIONS_OF_NORRATH)
assert session.game_name == "My Game [Stage]"
assert games.public_games(RealmGameType.CHAMPIONS_OF_NORRATH) == [session]
```

A game is listed by `available_games()` only after `request_open()` succeeds.
That call requires the host's `discovery_addr` to be set.

Messages for clients are handed to each user's `sock` object through its
`send` method. They are the frozen dataclasses `GameDiscovered`,
`ClientDiscovered` and `ClientRequestConnect` in `realmlobby.gamesessions`,
`RoomMessage` in `realmlobby.chatrooms`, and `ForcedLogout` in
`realmlobby.users`. Any object with a `send` method can serve as the socket.
`UserManager` also reads `remote_ip` and sets `disconnected_wait` on it.

## What this package does not do

- It has no network server and no command. It does not accept connections,
  and it does not turn the notification dataclasses into bytes on the wire.
- It has no account or character database. Storage comes from the caller:
  - `CharacterSaveManager` needs an object with
    `create_new_character(account_id, meta, data)` and
    `save_character(account_id, character_id, meta, data)`.
  - `UserManager` needs an object with `delete_session(session_id)`,
    `get_session(session_id, ip_address)` and
    `load_character_data(account_id, character_id)`.