"""
Row Projection - SQL Result Sets to JSON-ready Records

Drains a forward-only cursor over an arbitrary query result and turns every
row into an ordered ``dict`` keyed by column name. No schema knowledge is
needed: driver values are normalized by kind so the records can be handed
straight to a JSON encoder.

Normalization:
- None                              -> None
- bytes / bytearray / memoryview    -> str (decoded, undecodable bytes replaced)
- datetime / date                   -> "YYYY-MM-DDTHH:MM:SSZ" (UTC)
- bool / int / float / anything else -> unchanged

Integer-encoded booleans (SQLite stores BOOLEAN as 0/1) stay integers, and
BLOB columns are decoded as text like any other byte buffer.

Usage:
    from dbutil.rows import rows_to_records

    cur = conn.execute("SELECT id, name FROM users")
    try:
        records = rows_to_records(cur)
    finally:
        cur.close()
"""

from collections import deque
from datetime import date, datetime, time, timezone
from typing import Any, Deque, Optional, Protocol, Sequence

from dbutil.config import settings
from dbutil.errors import (
    ColumnMetadataError,
    CursorIterationError,
    CursorReadError,
    RowScanError,
)

Record = dict[str, Any]


class Cursor(Protocol):
    """Forward-only result cursor consumed by :func:`project`.

    The caller owns the cursor and closes it; :func:`project` only reads.
    """

    def columns(self) -> Sequence[str]:
        """Return the ordered column names of the result set."""
        ...

    def advance(self) -> bool:
        """Move to the next row. Return False once the rows are exhausted."""
        ...

    def scan(self, dest: list[Any]) -> None:
        """Copy the current row's raw values into ``dest``, one per column."""
        ...

    def err(self) -> Optional[BaseException]:
        """Return a fault hit during iteration, if any."""
        ...


class DBAPICursor:
    """Adapts a PEP 249 cursor to the :class:`Cursor` protocol.

    Rows are pulled with ``fetchmany`` into a local buffer. PEP 249 drivers
    raise their faults from the fetch call itself, so :meth:`err` never has
    anything to report.
    """

    def __init__(self, cursor: Any, batch_size: Optional[int] = None) -> None:
        """
        Args:
            cursor: Executed PEP 249 cursor
            batch_size: Rows per fetchmany call, defaults to
                settings.FETCH_BATCH_SIZE or the cursor's arraysize
        """
        self._cursor = cursor
        self._batch_size = (
            batch_size
            or settings.FETCH_BATCH_SIZE
            or getattr(cursor, "arraysize", 1)
        )
        self._buffer: Deque[Sequence[Any]] = deque()
        self._current: Optional[Sequence[Any]] = None
        self._exhausted = False

    def columns(self) -> list[str]:
        description = self._cursor.description
        if description is None:
            raise ValueError("statement did not produce a result set")
        return [column[0] for column in description]

    def advance(self) -> bool:
        if not self._buffer and not self._exhausted:
            batch = self._cursor.fetchmany(max(1, self._batch_size))
            if batch:
                self._buffer.extend(batch)
            else:
                self._exhausted = True

        if not self._buffer:
            self._current = None
            return False

        self._current = self._buffer.popleft()
        return True

    def scan(self, dest: list[Any]) -> None:
        if self._current is None:
            raise RuntimeError("scan called without a current row")

        values = tuple(self._current)
        if len(values) != len(dest):
            raise ValueError(f"row has {len(values)} values, expected {len(dest)}")
        dest[:] = values

    def err(self) -> Optional[BaseException]:
        return None


def normalize_value(value: Any, encoding: str = "utf-8", errors: str = "replace") -> Any:
    """Collapse a raw driver value into a JSON-safe representation.

    Args:
        value: Raw value scanned from a result row
        encoding: Text encoding used for byte buffers
        errors: Codec error handler used for byte buffers

    Returns:
        None, str, bool, int, float, or the value itself for unknown kinds
    """
    if value is None:
        return None

    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode(encoding, errors)

    if isinstance(value, datetime):
        return _format_timestamp(value)

    if isinstance(value, date):
        return _format_timestamp(datetime.combine(value, time.min))

    # bool, int, float and driver-specific kinds pass through
    return value


def _format_timestamp(value: datetime) -> str:
    if value.utcoffset() is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None, microsecond=0).isoformat() + "Z"


def project(
    cursor: Cursor,
    encoding: Optional[str] = None,
    errors: Optional[str] = None,
) -> list[Record]:
    """
    Drain a cursor and return one normalized record per row.

    The column list is read once and reused for every row. Any failure
    aborts the whole call, so a caller never sees a partial result. The
    cursor is consumed but left open.

    Args:
        cursor: Cursor positioned before its first row (or already exhausted)
        encoding: Text encoding for byte buffers, defaults to settings.TEXT_ENCODING
        errors: Codec error handler, defaults to settings.TEXT_DECODE_ERRORS

    Returns:
        Records in cursor order; an empty list when there are no rows

    Raises:
        ColumnMetadataError: If column names cannot be read
        CursorReadError: If advancing the cursor fails
        RowScanError: If a row cannot be scanned
        CursorIterationError: If the cursor reports a fault after exhaustion
    """
    encoding = encoding or settings.TEXT_ENCODING
    errors = errors or settings.TEXT_DECODE_ERRORS

    try:
        columns = list(cursor.columns())
    except Exception as e:
        raise ColumnMetadataError(f"Failed to read column names: {e}") from e

    records: list[Record] = []

    while True:
        try:
            if not cursor.advance():
                break
        except Exception as e:
            raise CursorReadError(f"Failed to read row {len(records)}: {e}") from e

        slots: list[Any] = [None] * len(columns)
        try:
            cursor.scan(slots)
        except Exception as e:
            raise RowScanError(f"Failed to scan row {len(records)}: {e}", len(records)) from e

        record: Record = {}
        for name, raw in zip(columns, slots):
            record[name] = normalize_value(raw, encoding, errors)

        records.append(record)

    fault = cursor.err()
    if fault is not None:
        raise CursorIterationError(f"Cursor failed after {len(records)} rows: {fault}") from fault

    return records


def rows_to_records(cursor: Any, batch_size: Optional[int] = None) -> list[Record]:
    """Project an executed PEP 249 cursor. The cursor is not closed."""
    return project(DBAPICursor(cursor, batch_size=batch_size))
