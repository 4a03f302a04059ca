"""
JSON encoding for projected records.

orjson keeps dict insertion order, so each object's fields come out in
column order.
"""

from typing import Iterable

import orjson

from dbutil.rows import Record


def encode_records(records: Iterable[Record]) -> bytes:
    """Serialize records to a JSON array of objects.

    Values orjson has no native encoding for (Decimal, for one) are written
    with str().

    Args:
        records: Records produced by the row projector

    Returns:
        UTF-8 encoded JSON bytes
    """
    return orjson.dumps(list(records), default=str)
