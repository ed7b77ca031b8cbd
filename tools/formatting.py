"""Response envelope and text rendering for Todoist tools.

Every tool returns a CallToolResult: a plain-text summary block first and,
for tools that return entities, a second "JSON: <payload>" text block that
mirrors the summary in machine-readable form.
"""
import json
from typing import Any

from mcp.types import CallToolResult, TextContent

JSON_PREFIX = "JSON: "


def json_block(payload: Any) -> TextContent:
    return TextContent(type="text", text=JSON_PREFIX + json.dumps(payload, default=str))


def text_result(text: str, payload: Any = None) -> CallToolResult:
    """Successful result with a summary and, when payload is given, a JSON block."""
    content = [TextContent(type="text", text=text)]
    if payload is not None:
        content.append(json_block(payload))
    return CallToolResult(content=content, isError=False)


def error_result(message: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=message)], isError=True)


def due_string(task: dict) -> str | None:
    due = task.get("due")
    if isinstance(due, dict):
        return due.get("string") or due.get("date")
    return due or None


def task_line(task: dict) -> str:
    return f"- {task.get('content', '')} (id: {task.get('id')})"


def task_details(task: dict, project_name: str | None = None) -> str:
    """Multi-line listing entry for an open task."""
    lines = [task_line(task)]
    if project_name:
        lines.append(f"  Project: {project_name}")
    if task.get("description"):
        lines.append(f"  Description: {task['description']}")
    due = due_string(task)
    if due:
        lines.append(f"  Due: {due}")
    if task.get("priority"):
        lines.append(f"  Priority: {task['priority']}")
    return "\n".join(lines)


def task_summary(task: dict) -> dict:
    """Stable JSON subset of an open task."""
    return {
        "id": task.get("id"),
        "content": task.get("content"),
        "project_id": task.get("project_id"),
        "due": due_string(task),
        "priority": task.get("priority"),
    }


def named_line(entity: dict) -> str:
    return f"- {entity.get('name', '')} (id: {entity.get('id')})"


def named_summary(entity: dict) -> dict:
    return {"id": entity.get("id"), "name": entity.get("name")}
