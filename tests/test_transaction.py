import sqlite3

import pytest

from realmlobby.transaction import SQLiteTransaction


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:", isolation_level=None)
    conn.execute("CREATE TABLE items (name TEXT)")
    yield conn
    conn.close()


def _count(conn):
    return conn.execute("SELECT COUNT(*) FROM items").fetchone()[0]


def test_commit_persists(connection):
    with SQLiteTransaction(connection) as transaction:
        connection.execute("INSERT INTO items VALUES ('a')")
        transaction.commit()
    assert transaction.committed
    assert _count(connection) == 1


def test_leaving_without_commit_rolls_back(connection):
    with SQLiteTransaction(connection):
        connection.execute("INSERT INTO items VALUES ('a')")
    assert _count(connection) == 0
    assert not connection.in_transaction


def test_exception_rolls_back(connection):
    with pytest.raises(KeyError):
        with SQLiteTransaction(connection):
            connection.execute("INSERT INTO items VALUES ('a')")
            raise KeyError("boom")
    assert _count(connection) == 0


def test_commit_after_rollback_is_noop(connection):
    transaction = SQLiteTransaction(connection)
    connection.execute("INSERT INTO items VALUES ('a')")
    transaction.rollback()
    transaction.commit()
    assert not transaction.committed
    assert _count(connection) == 0


def test_none_connection_rejected():
    with pytest.raises(ValueError):
        SQLiteTransaction(None)


def test_nested_begin_fails(connection):
    outer = SQLiteTransaction(connection)
    with pytest.raises(RuntimeError):
        SQLiteTransaction(connection)
    outer.rollback()
    assert not connection.in_transaction