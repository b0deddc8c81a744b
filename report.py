"""
Markdown report rendering for Claude Diary MCP
Copyright 2025 Jurden Bruce

Rendering is pure: it only sees entries that were already copied out of the
database, so it never needs the store lock.
"""

from typing import List, Sequence

from models import Accomplishment, DiaryEntry

MS_PER_MINUTE = 60000
SEPARATOR = "---"
ACCOMPLISHMENTS_HEADER = "### ✅ **Accomplishments**"


def format_duration(total_duration_ms: int) -> str:
    """Human duration phrase, truncated to whole minutes"""
    minutes = total_duration_ms // MS_PER_MINUTE
    if minutes > 0:
        return f"~{minutes} minutes"
    return "< 1 minute"


def format_accomplishment(acc: Accomplishment) -> str:
    suffix = f" _({acc.duration_ms}ms)_" if acc.duration_ms is not None else ""
    return f"- **{acc.description}**{suffix}"


def render_entry(entry: DiaryEntry) -> str:
    """Render one session subsection, separator included"""
    parts: List[str] = [
        f"## Session {entry.started_at.strftime('%H:%M:%S')} - "
        f"{format_duration(entry.session.total_duration_ms)}\n\n"
    ]

    if entry.has_accomplishments:
        parts.append(f"{ACCOMPLISHMENTS_HEADER}\n\n")
        for category, accomplishments in entry.categories.items():
            if not accomplishments:
                continue
            parts.append(f"#### **{category}**\n")
            for acc in accomplishments:
                parts.append(f"{format_accomplishment(acc)}\n")
            parts.append("\n")

    parts.append(f"{SEPARATOR}\n\n")
    return "".join(parts)


def render(date: str, entries: Sequence[DiaryEntry]) -> str:
    """Render the diary report for one date

    Entries are rendered in the order given. A day without sessions yields a
    single line rather than an error.
    """
    if not entries:
        return f"No diary entries found for {date}"

    output = f"# Diary Entries for {date}\n\n"
    for entry in entries:
        output += render_entry(entry)
    return output
