"""
dbutil - Generic SQL Row Projection

Responsibilities:
- Drain a query cursor into ordered, JSON-ready records without schema knowledge
- Normalize driver values (NULL, byte buffers, timestamps) into stable forms
- Abort with a phase-specific error instead of returning partial results
- Serialize records as a JSON array of objects

Modules:
- dbutil.rows: cursor protocol, PEP 249 adapter and the projector
- dbutil.service: connection-bound RowService with whole-query retries
- dbutil.encoding: orjson encoding of record lists
"""

from dbutil.errors import (
    ColumnMetadataError,
    CursorIterationError,
    CursorReadError,
    ProjectionError,
    RowScanError,
)
from dbutil.rows import Cursor, DBAPICursor, Record, normalize_value, project, rows_to_records

__all__ = [
    "ColumnMetadataError",
    "Cursor",
    "CursorIterationError",
    "CursorReadError",
    "DBAPICursor",
    "ProjectionError",
    "Record",
    "RowScanError",
    "normalize_value",
    "project",
    "rows_to_records",
]
