"""
MCP Tool Definitions and Handlers for Claude Diary MCP
Copyright 2025 Jurden Bruce

Tool responses are human-readable markdown reports.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Callable, Dict, List, Optional

from mcp.types import ErrorData, METHOD_NOT_FOUND, TextContent, Tool

from errors import DiaryError, QueryError, ToolCallError
from models import DiaryEntry, group_by_category
from report import render
from storage import DiaryStore
from utils import format_date, parse_date, parse_start_time, today, yesterday

logger = logging.getLogger("claude-diary.tools")


def get_tool_definitions() -> List[Tool]:
    """Return list of available MCP tools"""
    return [
        Tool(
            name="get_today_diary",
            description="Get diary entries for today",
            inputSchema={"type": "object", "properties": {}},
        ),
        Tool(
            name="get_yesterday_diary",
            description="Get diary entries for yesterday",
            inputSchema={"type": "object", "properties": {}},
        ),
    ]


def build_entries(day) -> List[DiaryEntry]:
    """Turn fetched (session, accomplishments) pairs into renderable entries

    A start time that matches none of the accepted formats means a corrupted
    record, so the whole report fails instead of skipping the session.
    """
    entries = []
    for session, accomplishments in day:
        try:
            started_at = parse_start_time(session.start_time)
        except ValueError as e:
            raise QueryError(
                f"session {session.id} has unparsable start_time {session.start_time!r}: {e}",
                message="DateTime parse error",
            ) from e
        entries.append(DiaryEntry(
            session=session,
            started_at=started_at,
            categories=group_by_category(accomplishments),
        ))
    return entries


async def get_diary_entries(store: DiaryStore, date_str: str) -> str:
    """Report for one YYYY-MM-DD date

    Raises:
        InvalidDate, StorageUnavailable, QueryError
    """
    parse_date(date_str)
    day = await asyncio.to_thread(store.load_day, date_str)
    return render(date_str, build_entries(day))


async def get_today_diary(store: DiaryStore, current: Optional[date] = None) -> str:
    return await get_diary_entries(store, format_date(current or today()))


async def get_yesterday_diary(store: DiaryStore, current: Optional[date] = None) -> str:
    return await get_diary_entries(store, format_date(yesterday(current)))


TOOL_HANDLERS: Dict[str, Callable[[DiaryStore], Awaitable[str]]] = {
    "get_today_diary": get_today_diary,
    "get_yesterday_diary": get_yesterday_diary,
}


async def handle_tool_call(name: str, arguments: Optional[Dict[str, Any]], store: DiaryStore) -> List[TextContent]:
    """Dispatch a tool call and translate diary errors into MCP errors"""
    handler = TOOL_HANDLERS.get(name)
    if handler is None:
        raise ToolCallError(ErrorData(code=METHOD_NOT_FOUND, message=f"Unknown tool: {name}"))

    logger.info(f"Handling {name}")
    try:
        text = await handler(store)
    except DiaryError as e:
        logger.error(f"{name} failed: {e}")
        raise ToolCallError(e.to_error_data()) from e

    return [TextContent(type="text", text=text)]
