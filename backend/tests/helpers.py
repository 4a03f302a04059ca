import sqlite3
from typing import Any, Optional, Sequence


class ScriptedCursor:
    """Cursor protocol implementation driven by a fixed script of rows."""

    def __init__(
        self,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]] = (),
        columns_error: Optional[Exception] = None,
        advance_error_at: Optional[int] = None,
        scan_error_at: Optional[int] = None,
        terminal_error: Optional[BaseException] = None,
    ) -> None:
        self._columns = list(columns)
        self._rows = list(rows)
        self._columns_error = columns_error
        self._advance_error_at = advance_error_at
        self._scan_error_at = scan_error_at
        self._terminal_error = terminal_error
        self._index = -1
        self.columns_calls = 0

    def columns(self) -> list[str]:
        self.columns_calls += 1
        if self._columns_error is not None:
            raise self._columns_error
        return self._columns

    def advance(self) -> bool:
        self._index += 1
        if self._index == self._advance_error_at:
            raise IOError("connection reset")
        return self._index < len(self._rows)

    def scan(self, dest: list[Any]) -> None:
        if self._index == self._scan_error_at:
            raise TypeError("unsupported column type")
        dest[:] = self._rows[self._index]

    def err(self) -> Optional[BaseException]:
        return self._terminal_error


class FakeDBAPICursor:
    """Minimal PEP 249 cursor serving pre-built fetchmany batches."""

    arraysize = 1

    def __init__(self, description: Optional[list[tuple]], batches: Sequence[Any] = ()) -> None:
        self.description = description
        self._batches = list(batches)
        self.fetch_sizes: list[int] = []
        self.closed = False

    def fetchmany(self, size: int) -> list[Any]:
        self.fetch_sizes.append(size)
        if not self._batches:
            return []
        batch = self._batches.pop(0)
        if isinstance(batch, Exception):
            raise batch
        return batch

    def close(self) -> None:
        self.closed = True


def describe(*names: str) -> list[tuple]:
    return [(name, None, None, None, None, None, None) for name in names]


class FlakyConnection:
    """Wraps a connection so the first ``failures`` executes raise OperationalError."""

    def __init__(self, conn: Any, failures: int = 0) -> None:
        self._conn = conn
        self.failures = failures
        self.attempts = 0
        self.cursors: list["TrackingCursor"] = []

    def cursor(self) -> "TrackingCursor":
        cursor = TrackingCursor(self._conn.cursor(), self)
        self.cursors.append(cursor)
        return cursor


class TrackingCursor:
    def __init__(self, cursor: Any, owner: FlakyConnection) -> None:
        self._cursor = cursor
        self._owner = owner
        self.closed = False

    def execute(self, sql: str, params: Sequence[Any] = ()) -> "TrackingCursor":
        self._owner.attempts += 1
        if self._owner.attempts <= self._owner.failures:
            raise sqlite3.OperationalError("database is locked")
        self._cursor.execute(sql, params)
        return self

    def close(self) -> None:
        self.closed = True
        self._cursor.close()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._cursor, name)
