#!/usr/bin/env python3
"""Create the "Trip to Egypt" project with two tasks, addressed by project name.

Usage:
    TODOIST_API_TOKEN=your_token python scripts/create_trip_egypt.py
"""
import asyncio
import sys

from mcp_session import call, open_session, require_token

TIMEOUT = 15.0
PROJECT = "Trip to Egypt"


async def main():
    token = require_token()
    try:
        async with open_session(token, quiet=False) as session:
            print(await call(session, "todoist_create_project", {"name": PROJECT}, TIMEOUT))
            for content, due in (("Book Hotel", "today"), ("Book Flight", "tomorrow")):
                print(await call(session, "todoist_create_task", {
                    "project_name": PROJECT, "content": content, "due_string": due,
                }, TIMEOUT))
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
