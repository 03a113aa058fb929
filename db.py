"""
db.py
SQLite store: connection lifecycle, parameterized statements, schema creation.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Mapping

import config
from exceptions import StoreError

logger = config.get_logger("db")


class Store:
    """
    Executes parameterized statements against the members database.

    Every call opens and closes its own connection; parameters are always
    bound by sqlite3 using named placeholders (":name").
    """

    def __init__(self, db_file: str | Path | None = None, timeout: float | None = None) -> None:
        self.db_file = Path(db_file) if db_file is not None else config.DB_FILE
        self.timeout = config.DB_TIMEOUT if timeout is None else timeout

    @contextmanager
    def get_conn(self):
        conn = sqlite3.connect(self.db_file, timeout=self.timeout, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def execute_query(self, sql: str, params: Mapping[str, Any] | None = None) -> list[dict]:
        """Run a SELECT and return rows as column -> value dicts."""
        try:
            with self.get_conn() as conn:
                cur = conn.execute(sql, dict(params or {}))
                return [dict(r) for r in cur.fetchall()]
        except sqlite3.Error as exc:
            logger.error("query failed | %s", exc)
            raise StoreError(str(exc)) from exc

    def execute_non_query(self, sql: str, params: Mapping[str, Any] | None = None) -> int:
        """Run an UPDATE/DELETE/DDL statement and return the affected-row count."""
        try:
            with self.get_conn() as conn:
                cur = conn.execute(sql, dict(params or {}))
                return cur.rowcount
        except sqlite3.Error as exc:
            logger.error("statement failed | %s", exc)
            raise StoreError(str(exc)) from exc

    def execute_insert(self, sql: str, params: Mapping[str, Any] | None = None) -> int:
        """Run an INSERT and return the id of the new row."""
        try:
            with self.get_conn() as conn:
                cur = conn.execute(sql, dict(params or {}))
                return cur.lastrowid
        except sqlite3.Error as exc:
            logger.error("insert failed | %s", exc)
            raise StoreError(str(exc)) from exc

    def init_db(self) -> None:
        """
        Initialize the database.
        - Create the members table (membership type must be positive)
        - Index email for lookups (not unique)
        """
        self.execute_non_query(
            """
            CREATE TABLE IF NOT EXISTS members (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                first_name TEXT NOT NULL,
                last_name TEXT NOT NULL,
                email TEXT NOT NULL,
                password_hash TEXT NOT NULL,
                is_active INTEGER NOT NULL CHECK(is_active IN (0, 1)),
                registration_date TEXT NOT NULL,
                renewal_date TEXT NOT NULL,
                membership_type_id INTEGER NOT NULL CHECK(membership_type_id > 0)
            )
            """
        )
        self.execute_non_query("CREATE INDEX IF NOT EXISTS ix_members_email ON members(email)")
        logger.info("database ready | file=%s", self.db_file)
