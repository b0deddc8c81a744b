"""
Shared fixtures for Claude Diary MCP tests
Copyright 2025 Jurden Bruce
"""

import sqlite3
import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from storage import DiaryStore, connect

SCHEMA = """
    CREATE TABLE sessions (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        start_time TEXT NOT NULL,
        end_time TEXT,
        total_duration_ms INTEGER NOT NULL DEFAULT 0
    );

    CREATE TABLE accomplishments (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        session_id INTEGER NOT NULL,
        category TEXT NOT NULL,
        description TEXT NOT NULL,
        duration_ms INTEGER,
        FOREIGN KEY (session_id) REFERENCES sessions(id)
    );
"""


class DiaryBuilder:
    """Writes fixture rows into a throwaway diary database"""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        conn = sqlite3.connect(str(db_path))
        conn.executescript(SCHEMA)
        conn.commit()
        conn.close()

    def add_session(self, start_time, total_duration_ms=0, end_time=None) -> int:
        conn = sqlite3.connect(str(self.db_path))
        try:
            cursor = conn.execute(
                "INSERT INTO sessions (start_time, end_time, total_duration_ms) VALUES (?, ?, ?)",
                (start_time, end_time, total_duration_ms),
            )
            conn.commit()
            return cursor.lastrowid
        finally:
            conn.close()

    def add_accomplishment(self, session_id, category, description, duration_ms=None) -> int:
        conn = sqlite3.connect(str(self.db_path))
        try:
            cursor = conn.execute(
                "INSERT INTO accomplishments (session_id, category, description, duration_ms) "
                "VALUES (?, ?, ?, ?)",
                (session_id, category, description, duration_ms),
            )
            conn.commit()
            return cursor.lastrowid
        finally:
            conn.close()


@pytest.fixture
def diary(tmp_path) -> DiaryBuilder:
    return DiaryBuilder(tmp_path / "diary.db")


@pytest.fixture
def store(diary) -> DiaryStore:
    diary_store = connect(diary.db_path)
    yield diary_store
    diary_store.close()
