"""Completed-task listing.

The completed-tasks endpoint is cursor-paginated and its item shape varies:
items may come as a bare list or wrapped in {"items": [...]}, and each item
may carry its fields directly or nested under "task". Pages are fetched until
enough items are collected, the cursor runs out, or MAX_PAGES is reached.
"""
import logging
from typing import Any

from mcp.types import CallToolResult

import todoist_api
from tools.formatting import text_result
from tools.resolve import project_id_from_args

logger = logging.getLogger("todoist-mcp")

PAGE_SIZE = 200
MAX_PAGES = 50
DEFAULT_COMPLETED_LIMIT = 20


def extract_items(data: Any) -> list:
    """Items of one page, whichever wrapping the endpoint used."""
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        return data["items"]
    if isinstance(data, list):
        return data
    return []


def next_cursor(data: Any) -> str | None:
    if isinstance(data, dict):
        return data.get("next_cursor") or None
    return None


def _first(*candidates):
    for value in candidates:
        if value:
            return value
    return None


def normalize_completed_item(item: dict) -> dict:
    """Map a completed-task payload onto {id, content, completed_at}.

    Keys are tried in this order, first non-empty value wins:
        id:           id, task_id, task.id
        content:      content, task.content, title
        completed_at: completed_at, completedAt, task.completed_at
    """
    nested = item.get("task") if isinstance(item.get("task"), dict) else {}
    return {
        "id": _first(item.get("id"), item.get("task_id"), nested.get("id")),
        "content": _first(item.get("content"), nested.get("content"), item.get("title")),
        "completed_at": _first(
            item.get("completed_at"), item.get("completedAt"), nested.get("completed_at")
        ),
    }


async def collect_completed_tasks(
    limit: int,
    project_id: str | None = None,
    since: str | None = None,
    until: str | None = None,
) -> list[dict]:
    """Fetch up to `limit` raw completed-task items."""
    collected = []
    cursor = None
    for _ in range(MAX_PAGES):
        data = await todoist_api.get_completed_tasks_page(
            PAGE_SIZE, cursor=cursor, project_id=project_id, since=since, until=until
        )
        items = extract_items(data)
        collected.extend(items[: limit - len(collected)])
        if len(collected) >= limit:
            break
        cursor = next_cursor(data)
        if not cursor:
            break
    else:
        logger.warning(f"Stopped after {MAX_PAGES} pages of completed tasks")
    return collected


async def get_completed_tasks(args: dict) -> CallToolResult:
    project_id = await project_id_from_args(args)
    limit = args.get("limit") or DEFAULT_COMPLETED_LIMIT

    items = await collect_completed_tasks(
        limit, project_id=project_id, since=args.get("since"), until=args.get("until")
    )
    tasks = [normalize_completed_item(it) for it in items if isinstance(it, dict)]

    if not tasks:
        return text_result("No completed tasks found", [])

    lines = []
    for t in tasks:
        line = f"- {t['content'] or '(untitled)'}"
        if t["id"]:
            line += f" (id: {t['id']})"
        if t["completed_at"]:
            line += f"\n  Completed: {t['completed_at']}"
        lines.append(line)
    return text_result("\n".join(lines), tasks)
