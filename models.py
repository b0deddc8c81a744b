"""
Data models for Claude Diary MCP
Copyright 2025 Jurden Bruce
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional


def _require_int(row, column: str, allow_null: bool = False) -> Optional[int]:
    value = row[column]
    if value is None and allow_null:
        return None
    # bool is an int subclass but never a valid SQLite integer here
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"column {column} must be an integer, got {value!r}")
    return value


def _require_text(row, column: str, allow_null: bool = False) -> Optional[str]:
    value = row[column]
    if value is None and allow_null:
        return None
    if not isinstance(value, str):
        raise ValueError(f"column {column} must be text, got {value!r}")
    return value


@dataclass
class Session:
    """One recorded interval of activity"""
    id: int
    start_time: str
    end_time: Optional[str]
    total_duration_ms: int

    @classmethod
    def from_row(cls, row) -> 'Session':
        """Convert SQLite row to Session

        Raises:
            ValueError: if the row does not decode to a valid session
        """
        duration = _require_int(row, "total_duration_ms")
        if duration < 0:
            raise ValueError(f"column total_duration_ms must be non-negative, got {duration}")
        return cls(
            id=_require_int(row, "id"),
            start_time=_require_text(row, "start_time"),
            end_time=_require_text(row, "end_time", allow_null=True),
            total_duration_ms=duration,
        )


@dataclass
class Accomplishment:
    """One unit of work recorded within a session"""
    id: int
    session_id: int
    category: str
    description: str
    duration_ms: Optional[int] = None

    @classmethod
    def from_row(cls, row) -> 'Accomplishment':
        return cls(
            id=_require_int(row, "id"),
            session_id=_require_int(row, "session_id"),
            category=_require_text(row, "category"),
            description=_require_text(row, "description"),
            duration_ms=_require_int(row, "duration_ms", allow_null=True),
        )


def group_by_category(accomplishments: Iterable[Accomplishment]) -> "OrderedDict[str, List[Accomplishment]]":
    """Group accomplishments by category

    Categories keep the order in which they first appear and each group keeps
    the input order of its accomplishments.
    """
    groups: "OrderedDict[str, List[Accomplishment]]" = OrderedDict()
    for acc in accomplishments:
        groups.setdefault(acc.category, []).append(acc)
    return groups


@dataclass
class DiaryEntry:
    """A session ready for rendering"""
    session: Session
    started_at: datetime
    categories: "OrderedDict[str, List[Accomplishment]]" = field(default_factory=OrderedDict)

    @property
    def has_accomplishments(self) -> bool:
        return any(self.categories.values())
