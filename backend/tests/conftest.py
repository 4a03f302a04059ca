import logging
import sqlite3

import pytest

from dbutil.db import get_conn


@pytest.fixture
def conn():
    connection = get_conn(":memory:")
    yield connection
    connection.close()


@pytest.fixture
def users_conn(conn: sqlite3.Connection) -> sqlite3.Connection:
    conn.execute(
        """
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT,
            email TEXT,
            created_at DATETIME,
            is_active BOOLEAN
        )
        """
    )
    conn.executemany(
        "INSERT INTO users (name, email, created_at, is_active) VALUES (?, ?, ?, ?)",
        [
            ("Alice", None, "2024-03-01 09:30:00", 1),
            ("Bob", "bob@example.com", "2024-03-02 18:05:07.123456", 0),
        ],
    )
    conn.commit()
    return conn


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
