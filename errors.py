"""
Error types for Claude Diary MCP
Copyright 2025 Jurden Bruce

Domain errors are raised inside the diary pipeline and only converted to
MCP error payloads at the tool boundary.
"""

import json
from enum import Enum
from typing import Optional

from mcp.shared.exceptions import McpError
from mcp.types import ErrorData, INTERNAL_ERROR, INVALID_PARAMS


class ErrorKind(Enum):
    INVALID_DATE = "invalid_date"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    QUERY_ERROR = "query_error"


# Both internal kinds share one code; the detail text tells them apart
ERROR_CODES = {
    ErrorKind.INVALID_DATE: INVALID_PARAMS,
    ErrorKind.STORAGE_UNAVAILABLE: INTERNAL_ERROR,
    ErrorKind.QUERY_ERROR: INTERNAL_ERROR,
}


class DiaryError(Exception):
    """Base error carrying a kind, a short message and optional detail"""
    kind: ErrorKind = ErrorKind.QUERY_ERROR
    default_message: str = "Diary error"

    def __init__(self, detail: Optional[str] = None, message: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)

    @property
    def code(self) -> int:
        return ERROR_CODES[self.kind]

    def to_error_data(self) -> ErrorData:
        """Convert to the structured MCP error payload"""
        return ErrorData(code=self.code, message=self.message, data=self.detail)


class InvalidDate(DiaryError):
    kind = ErrorKind.INVALID_DATE
    default_message = "Invalid date format"


class StorageUnavailable(DiaryError):
    kind = ErrorKind.STORAGE_UNAVAILABLE
    default_message = "Database unavailable"


class QueryError(DiaryError):
    kind = ErrorKind.QUERY_ERROR
    default_message = "Database query error"


class ToolCallError(McpError):
    """McpError whose text is the full error payload

    The MCP call_tool wrapper reports a failed call using only ``str(e)``,
    so the code, message and detail all have to live in that string.
    """

    def payload(self) -> dict:
        payload = {"code": self.error.code, "message": self.error.message}
        if self.error.data is not None:
            payload["data"] = self.error.data
        return payload

    def __str__(self) -> str:
        return json.dumps(self.payload(), indent=2)
