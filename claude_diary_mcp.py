#!/usr/bin/env python3
"""
MCP Server for Claude Diary
Copyright 2025 Jurden Bruce

"""

import sys
import os
import asyncio
import logging
import traceback

# Redirect stdout before imports
_original_stdout_fd = os.dup(1)
os.dup2(2, 1)

logging.basicConfig(
    level=logging.INFO,
    stream=sys.stderr,
    format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
)

logger = logging.getLogger("claude-diary")

from mcp.server.models import InitializationOptions
from mcp.server import NotificationOptions, Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from diary_tools import get_tool_definitions, handle_tool_call
from errors import StorageUnavailable
from storage import DEFAULT_DB_PATH, DiaryStore, connect

SERVER_NAME = "claude-diary"
SERVER_VERSION = "0.1.0"
SERVER_INSTRUCTIONS = (
    "A diary server that provides access to Claude's diary entries "
    "stored in a SQLite database"
)

# Global store
diary_store: DiaryStore = None
app = Server(SERVER_NAME)


@app.list_tools()
async def handle_list_tools() -> list[Tool]:
    """List available diary tools"""
    return get_tool_definitions()


@app.call_tool()
async def handle_call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls against the shared diary store"""
    return await handle_tool_call(name, arguments, diary_store)


async def main():
    """Main entry point"""
    global diary_store

    try:
        logger.info(f"Opening diary database at {DEFAULT_DB_PATH}")
        diary_store = connect()

        logger.info("Available tools:")
        for tool in get_tool_definitions():
            logger.info(f"  {tool.name}: {tool.description}")

        # Restore stdout for MCP communication
        os.dup2(_original_stdout_fd, 1)
        sys.stdout = os.fdopen(_original_stdout_fd, "w")

        logger.info("Starting MCP server...")
        async with stdio_server() as (read_stream, write_stream):
            await app.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=SERVER_VERSION,
                    capabilities=app.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                    instructions=SERVER_INSTRUCTIONS,
                ),
            )
    except StorageUnavailable as e:
        logger.error(f"Cannot start: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        logger.error(traceback.format_exc())
        sys.exit(1)
    finally:
        if diary_store:
            diary_store.close()


def run():
    """Console script entry point"""
    asyncio.run(main())


if __name__ == "__main__":
    run()
