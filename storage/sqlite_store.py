"""
SQLite diary store for Claude Diary MCP
Copyright 2025 Jurden Bruce

The store exclusively owns the connection. Callers never see it; they get
copied rows back from methods that hold the store lock.
"""

import sqlite3
import logging
import threading
from pathlib import Path
from typing import List, Optional, Tuple, Union

from errors import QueryError, StorageUnavailable
from models import Accomplishment, Session

logger = logging.getLogger("claude-diary.sqlite")

DEFAULT_DB_PATH = Path.home() / ".claude" / "diaries" / "diary.db"

REQUIRED_TABLES = ("sessions", "accomplishments")

# Dates are matched on the stored wall-clock date, not a UTC conversion.
# Ordering normalises the T separator so both stored shapes sort together.
SESSIONS_FOR_DATE_SQL = """
    SELECT id, start_time, end_time, total_duration_ms
    FROM sessions
    WHERE substr(start_time, 1, 10) = ?
    ORDER BY replace(start_time, 'T', ' ') DESC, id DESC
"""

ACCOMPLISHMENTS_FOR_SESSION_SQL = """
    SELECT id, session_id, category, description, duration_ms
    FROM accomplishments
    WHERE session_id = ?
    ORDER BY id
"""


class DiaryStore:
    """Read-only access to the diary database"""

    def __init__(self, db_path: Union[str, Path, None] = None):
        self.db_path = Path(db_path) if db_path is not None else DEFAULT_DB_PATH
        self.conn: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    def connect(self) -> "DiaryStore":
        """Open the database, failing fast if it is missing or unusable

        Raises:
            StorageUnavailable: file missing, unreadable, not a database,
                or without the diary tables
        """
        if not self.db_path.is_file():
            raise StorageUnavailable(f"Diary database not found at {self.db_path}")

        try:
            conn = sqlite3.connect(
                f"{self.db_path.resolve().as_uri()}?mode=ro",
                uri=True,
                check_same_thread=False,
                timeout=30.0,
            )
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Cannot open {self.db_path}: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            # Reading the schema forces SQLite to validate the file header
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            )
            tables = {row["name"] for row in cursor.fetchall()}
        except sqlite3.Error as e:
            conn.close()
            raise StorageUnavailable(f"Cannot read {self.db_path}: {e}") from e

        missing = [name for name in REQUIRED_TABLES if name not in tables]
        if missing:
            conn.close()
            raise StorageUnavailable(
                f"{self.db_path} is missing table(s): {', '.join(missing)}"
            )

        with self._lock:
            self.conn = conn
        logger.info(f"Diary database opened read-only at {self.db_path}")
        return self

    def _require_conn(self) -> sqlite3.Connection:
        if self.conn is None:
            raise QueryError("Database connection is closed")
        return self.conn

    def fetch_sessions(self, date: str) -> List[Session]:
        """Sessions starting on ``date``, newest first"""
        with self._lock:
            conn = self._require_conn()
            try:
                rows = conn.execute(SESSIONS_FOR_DATE_SQL, (date,)).fetchall()
            except sqlite3.Error as e:
                logger.error(f"Session query failed for {date}: {e}")
                raise QueryError(f"sessions query for {date} failed: {e}") from e

        try:
            return [Session.from_row(row) for row in rows]
        except (ValueError, IndexError, KeyError) as e:
            raise QueryError(f"sessions row for {date} could not be decoded: {e}") from e

    def fetch_accomplishments(self, session_id: int) -> List[Accomplishment]:
        """Accomplishments of one session in insertion order"""
        with self._lock:
            conn = self._require_conn()
            try:
                rows = conn.execute(ACCOMPLISHMENTS_FOR_SESSION_SQL, (session_id,)).fetchall()
            except sqlite3.Error as e:
                logger.error(f"Accomplishment query failed for session {session_id}: {e}")
                raise QueryError(
                    f"accomplishments query for session {session_id} failed: {e}"
                ) from e

        try:
            return [Accomplishment.from_row(row) for row in rows]
        except (ValueError, IndexError, KeyError) as e:
            raise QueryError(
                f"accomplishments row for session {session_id} could not be decoded: {e}"
            ) from e

    def load_day(self, date: str) -> List[Tuple[Session, List[Accomplishment]]]:
        """Fetch a day's sessions and their accomplishments as one unit

        The lock is held across the whole sequence so a concurrent report
        cannot interleave its queries with this one.
        """
        with self._lock:
            sessions = self.fetch_sessions(date)
            day = [(session, self.fetch_accomplishments(session.id)) for session in sessions]
        logger.info(f"Loaded {len(day)} session(s) for {date}")
        return day

    def close(self):
        """Close the connection; safe to call more than once"""
        with self._lock:
            if self.conn is None:
                return
            try:
                self.conn.close()
                logger.info("SQLite connection closed")
            finally:
                self.conn = None


def connect(db_path: Union[str, Path, None] = None) -> DiaryStore:
    """Open the diary store at ``db_path`` (default: ~/.claude/diaries/diary.db)"""
    return DiaryStore(db_path).connect()
