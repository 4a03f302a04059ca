"""
Database utilities for SQLite connections.

Provides connection management with declared-type parsing so timestamp
columns reach the row projector as datetime objects.

get_conn() registers DATETIME, TIMESTAMP and DATE converters with the
sqlite3 module on first use. sqlite3 keeps converters process-wide, so every
PARSE_DECLTYPES connection in the process sees them from then on.
"""

import logging
import re
import sqlite3
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional, Union

from dbutil.config import settings

logger = logging.getLogger(__name__)

_EPOCH_RE = re.compile(r"-?\d+(\.\d+)?([eE][-+]?\d+)?")

_converters_registered = False


def _convert_timestamp(value: bytes) -> Union[datetime, str]:
    text = value.decode("utf-8", "replace")

    # Unix epoch seconds, stored as INTEGER or REAL
    if _EPOCH_RE.fullmatch(text):
        return datetime.fromtimestamp(float(text), tz=timezone.utc)

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return text


def _convert_date(value: bytes) -> Union[date, datetime, str]:
    text = value.decode("utf-8", "replace")

    if _EPOCH_RE.fullmatch(text):
        return datetime.fromtimestamp(float(text), tz=timezone.utc)

    try:
        return date.fromisoformat(text)
    except ValueError:
        return _convert_timestamp(value)


def register_converters() -> None:
    """Register declared-type converters with sqlite3, once per process.

    Replaces the deprecated sqlite3 default converters. No BOOLEAN converter:
    SQLite booleans stay 0/1 integers. Values that are neither epoch numbers
    nor ISO 8601 text come back as plain strings.
    """
    global _converters_registered
    if _converters_registered:
        return

    sqlite3.register_converter("DATETIME", _convert_timestamp)
    sqlite3.register_converter("TIMESTAMP", _convert_timestamp)
    sqlite3.register_converter("DATE", _convert_date)
    _converters_registered = True


def get_conn(path: Optional[str] = None) -> sqlite3.Connection:
    """
    Get SQLite database connection with declared-type conversion.

    Args:
        path: Database file path or ":memory:", defaults to settings.SQLITE_PATH

    Returns:
        SQLite connection with row_factory set to sqlite3.Row

    Raises:
        sqlite3.Error: If connection fails
    """
    register_converters()

    db_path = path or settings.SQLITE_PATH

    if db_path != ":memory:":
        # Ensure database directory exists
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path, detect_types=sqlite3.PARSE_DECLTYPES)
    conn.row_factory = sqlite3.Row

    logger.debug("Opened SQLite connection: path=%s", db_path)
    return conn
