"""
Todoist API client for the Todoist MCP server.

Async httpx client wrapping the Todoist REST API v2, plus the API v1
completed-tasks endpoint, which is cursor-paginated and called directly.
Reads the API token from the TODOIST_API_TOKEN environment variable.

Every function raises on failure (httpx.HTTPStatusError for non-2xx
responses, httpx.RequestError for transport problems). Callers convert
exceptions into tool error results with describe_error().
"""
import logging
from typing import Any

import httpx

from tools.config import get_api_token, get_timeout

logger = logging.getLogger("todoist-mcp")

REST_BASE = "https://api.todoist.com/rest/v2"
COMPLETED_URL = "https://api.todoist.com/api/v1/tasks/completed"

_client: httpx.AsyncClient | None = None


def _get_client() -> httpx.AsyncClient:
    """Lazy singleton httpx.AsyncClient with bearer token from the environment."""
    global _client
    if _client is None:
        token = get_api_token()
        _client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
            timeout=get_timeout(),
        )
    return _client


def _payload(resp: httpx.Response) -> Any:
    resp.raise_for_status()
    if resp.status_code == 204:
        return None
    return resp.json()


def _compact(fields: dict) -> dict:
    """Drop unset fields so they are not sent to the API."""
    return {k: v for k, v in fields.items() if v is not None}


def describe_error(e: Exception) -> str:
    """Convert an exception raised by this module into a readable message."""
    if isinstance(e, httpx.HTTPStatusError):
        status = e.response.status_code
        error_map = {
            401: "Unauthorized - check your API token",
            403: "Forbidden - insufficient permissions",
            404: "Not found",
            429: "Rate limited - too many requests, try again later",
        }
        msg = error_map.get(status, f"HTTP {status}: {e.response.text[:200]}")
        if status == 429:
            retry_after = e.response.headers.get("Retry-After")
            if retry_after:
                msg += f" (retry after {retry_after}s)"
        return msg
    elif isinstance(e, httpx.TimeoutException):
        return "Request timed out"
    elif isinstance(e, httpx.ConnectError):
        return "Could not connect to Todoist API"
    elif isinstance(e, httpx.RequestError):
        return f"Request error: {str(e)}"
    return str(e)


# ---------------------------------------------------------------------------
# Projects, labels, sections
# ---------------------------------------------------------------------------


async def get_projects() -> list[dict]:
    client = _get_client()
    return _payload(await client.get(f"{REST_BASE}/projects"))


async def add_project(
    name: str,
    parent_id: str | None = None,
    is_favorite: bool | None = None,
) -> dict:
    client = _get_client()
    body = _compact({"name": name, "parent_id": parent_id, "is_favorite": is_favorite})
    return _payload(await client.post(f"{REST_BASE}/projects", json=body))


async def update_project(project_id: str, name: str) -> dict:
    client = _get_client()
    return _payload(await client.post(f"{REST_BASE}/projects/{project_id}", json={"name": name}))


async def delete_project(project_id: str) -> None:
    client = _get_client()
    _payload(await client.delete(f"{REST_BASE}/projects/{project_id}"))


async def get_labels() -> list[dict]:
    client = _get_client()
    return _payload(await client.get(f"{REST_BASE}/labels"))


async def get_sections(project_id: str | None = None) -> list[dict]:
    """List sections, across all projects unless project_id is given."""
    client = _get_client()
    params = _compact({"project_id": project_id})
    return _payload(await client.get(f"{REST_BASE}/sections", params=params))


async def add_section(name: str, project_id: str) -> dict:
    client = _get_client()
    body = {"name": name, "project_id": project_id}
    return _payload(await client.post(f"{REST_BASE}/sections", json=body))


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


async def get_tasks(
    project_id: str | None = None,
    label: str | None = None,
    filter_query: str | None = None,
) -> list[dict]:
    """List open tasks. With no arguments, every open task is returned."""
    client = _get_client()
    params = _compact({
        "project_id": project_id,
        "label": label,
        "filter": filter_query,
    })
    return _payload(await client.get(f"{REST_BASE}/tasks", params=params))


async def add_task(
    content: str,
    description: str | None = None,
    due_string: str | None = None,
    priority: int | None = None,
    project_id: str | None = None,
    section_id: str | None = None,
    parent_id: str | None = None,
) -> dict:
    client = _get_client()
    body = _compact({
        "content": content,
        "description": description,
        "due_string": due_string,
        "priority": priority,
        "project_id": project_id,
        "section_id": section_id,
        "parent_id": parent_id,
    })
    return _payload(await client.post(f"{REST_BASE}/tasks", json=body))


async def update_task(task_id: str, **fields) -> dict:
    """Update content, description, due_string or priority of a task.

    The REST API ignores project_id here; tasks cannot be moved between
    projects with this call.
    """
    client = _get_client()
    return _payload(await client.post(f"{REST_BASE}/tasks/{task_id}", json=_compact(fields)))


async def close_task(task_id: str) -> None:
    client = _get_client()
    _payload(await client.post(f"{REST_BASE}/tasks/{task_id}/close"))


async def delete_task(task_id: str) -> None:
    client = _get_client()
    _payload(await client.delete(f"{REST_BASE}/tasks/{task_id}"))


async def get_completed_tasks_page(
    limit: int,
    cursor: str | None = None,
    project_id: str | None = None,
    since: str | None = None,
    until: str | None = None,
) -> Any:
    """Fetch one page of completed tasks from the API v1 endpoint.

    Returns the decoded body as-is: either a list of items or a dict with
    "items" and "next_cursor".
    """
    client = _get_client()
    params = _compact({
        "limit": limit,
        "cursor": cursor,
        "project_id": project_id,
        "since": since,
        "until": until,
    })
    return _payload(await client.get(COMPLETED_URL, params=params))


async def close_client():
    """Close the shared client, if one was opened."""
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None


def reset_client():
    """Reset the client. Used for testing."""
    global _client
    _client = None
