#!/usr/bin/env python3
"""Print every open task and every completed task through the MCP server.

Usage:
    TODOIST_API_TOKEN=your_token python scripts/list_open_and_completed.py
"""
import asyncio
import sys

from mcp_session import call, open_session, require_token

TIMEOUT = 12.0
# Large enough to mean "all" for both listings
ALL = 100_000


async def main():
    token = require_token()
    try:
        async with open_session(token) as session:
            tools = await asyncio.wait_for(session.list_tools(), TIMEOUT)
            if not tools.tools:
                raise RuntimeError("MCP tools/list returned no tools")

            text = await call(session, "todoist_get_tasks", {"limit": ALL}, TIMEOUT)
            print("Open tasks (all):\n")
            print(text or "(none)")

            # Pagination runs server-side, so this call gets a longer deadline
            text = await call(session, "todoist_get_completed_tasks", {"limit": ALL}, TIMEOUT * 5)
            print("\nCompleted tasks (all):\n")
            print(text or "(none)")
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
