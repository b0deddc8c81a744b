"""
Storage backend for Claude Diary MCP
Copyright 2025 Jurden Bruce
"""

from .sqlite_store import DEFAULT_DB_PATH, DiaryStore, connect

__all__ = ['DEFAULT_DB_PATH', 'DiaryStore', 'connect']
