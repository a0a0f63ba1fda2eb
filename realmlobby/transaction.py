"""Explicit SQLite transaction that rolls back unless committed."""

from __future__ import annotations

import sqlite3
from types import TracebackType


class SQLiteTransaction:
    """Begins a transaction on creation; leaving the block without commit rolls back."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        if connection is None:
            raise ValueError("Null SQLite database connection")
        self._connection: sqlite3.Connection | None = connection
        self._committed = False
        try:
            connection.execute("BEGIN TRANSACTION")
        except sqlite3.Error as error:
            raise RuntimeError(f"Failed to begin transaction: {error}") from error

    @property
    def committed(self) -> bool:
        return self._committed

    def commit(self) -> None:
        if self._committed or self._connection is None:
            return
        try:
            self._connection.execute("COMMIT")
        except sqlite3.Error as error:
            raise RuntimeError(f"Failed to commit transaction: {error}") from error
        self._committed = True

    def rollback(self) -> None:
        """Roll back unless already committed; later calls do nothing."""
        if self._committed or self._connection is None:
            return
        try:
            self._connection.execute("ROLLBACK")
        except sqlite3.Error:
            pass
        self._connection = None

    def __enter__(self) -> SQLiteTransaction:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        self.rollback()
        return False