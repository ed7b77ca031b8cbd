#!/usr/bin/env python3
"""Minimal MCP stdio smoke test.

Spawns server.py, lists the tools and fetches up to 3 open tasks. With
FULL=1 it also runs a create/update/delete and create/complete flow on
temporary tasks.

Usage:
    TODOIST_API_TOKEN=your_token python scripts/smoke_mcp.py
    FULL=1 TODOIST_API_TOKEN=your_token python scripts/smoke_mcp.py
"""
import asyncio
import os
import sys
from datetime import datetime, timezone

from mcp_session import call, open_session, require_token

TIMEOUT = 10.0


def first_line(text: str) -> str:
    return text.split("\n")[0]


async def full_flow(session):
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
    name_a = f"MCP Test A {stamp}"
    name_b = f"MCP Test B {stamp}"

    text = await call(session, "todoist_create_task", {
        "content": name_a, "description": "temporary", "due_string": "today", "priority": 3,
    }, TIMEOUT)
    print("\nCreate A ->", first_line(text))

    text = await call(session, "todoist_update_task", {
        "task_name": name_a, "content": f"{name_a} (updated)", "priority": 4,
    }, TIMEOUT)
    print("Update A ->", first_line(text))

    text = await call(session, "todoist_delete_task", {"task_name": name_a}, TIMEOUT)
    print("Delete A ->", text)

    text = await call(session, "todoist_create_task", {
        "content": name_b, "description": "temporary", "due_string": "today", "priority": 2,
    }, TIMEOUT)
    print("\nCreate B ->", first_line(text))

    text = await call(session, "todoist_complete_task", {"task_name": name_b}, TIMEOUT)
    print("Complete B ->", text)


async def main():
    token = require_token()
    try:
        async with open_session(token) as session:
            tools = await asyncio.wait_for(session.list_tools(), TIMEOUT)
            print("Tools:", ", ".join(t.name for t in tools.tools))

            text = await call(session, "todoist_get_tasks", {"limit": 3}, TIMEOUT)
            print("\nSample tasks (up to 3):\n")
            print(text or "(no tasks returned)")

            if os.environ.get("FULL") == "1":
                await full_flow(session)
    except Exception as e:
        print(f"Smoke test failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
