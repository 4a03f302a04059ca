"""
Row Service - Injectable Query and Projection Access

Wraps the row projector for callers that hold a connection rather than a
cursor. Each query runs on its own cursor, which is closed on every exit
path. Transient driver errors retry the whole query; projection errors
are never retried.

Usage:
    from dbutil.db import get_conn
    from dbutil.service import RowService

    service = RowService(get_conn())
    users = service.query("SELECT * FROM users WHERE id = ?", (1,))
"""

import logging
import sqlite3
import time
from contextlib import closing
from typing import Any, Optional, Sequence

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from dbutil.config import settings
from dbutil.rows import Record, rows_to_records

logger = logging.getLogger(__name__)


class RowService:
    """Database row conversion utilities bound to one connection."""

    def __init__(
        self,
        conn: Optional[sqlite3.Connection] = None,
        max_retries: Optional[int] = None,
        batch_size: Optional[int] = None,
    ) -> None:
        """Initialize row service.

        Args:
            conn: Open PEP 249 connection used by query()
            max_retries: Total query attempts, defaults to settings.QUERY_MAX_RETRIES
            batch_size: Rows per fetch, defaults to settings.FETCH_BATCH_SIZE
        """
        self.conn = conn
        self.max_retries = max_retries or settings.QUERY_MAX_RETRIES
        self.batch_size = batch_size

    def convert_rows(self, cursor: Any) -> list[Record]:
        """Project an executed cursor into records. The cursor stays open."""
        return rows_to_records(cursor, batch_size=self.batch_size)

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[Record]:
        """
        Run a statement and return its rows as records.

        Args:
            sql: Statement to execute
            params: Positional parameters bound to the statement

        Returns:
            Projected records, empty list when the query returns no rows

        Raises:
            RuntimeError: If the service has no connection
            sqlite3.OperationalError: If the query keeps failing after all retries
            ProjectionError: If the result cannot be projected
        """
        if self.conn is None:
            raise RuntimeError("RowService has no connection")

        retrying = Retrying(
            retry=retry_if_exception_type(sqlite3.OperationalError),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=0.1, min=0.1, max=2),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retrying(self._run, sql, params)

    def _run(self, sql: str, params: Sequence[Any]) -> list[Record]:
        start_time = time.time()

        with closing(self.conn.cursor()) as cursor:
            cursor.execute(sql, params)
            records = self.convert_rows(cursor)

        logger.debug(
            "Query projected",
            extra={
                "row_count": len(records),
                "duration_ms": round((time.time() - start_time) * 1000, 3),
            },
        )
        return records
