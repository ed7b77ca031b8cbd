"""Name to ID resolution for Todoist entities.

Projects, labels and sections are matched by case-insensitive exact name
(first match wins). Tasks are matched by case-insensitive substring of their
content, since titles are free text, and must then be narrowed to exactly
one match before a mutation goes ahead.
"""
import logging
from dataclasses import dataclass, field

import todoist_api

logger = logging.getLogger("todoist-mcp")

# Candidates listed when a task name is ambiguous
MAX_CANDIDATES = 10


class ResolutionError(Exception):
    """Raised when a name reference is missing, unknown, or ambiguous."""
    pass


@dataclass
class TaskMatches:
    """Tasks whose content matched a query, and the project scope used."""
    query: str
    matches: list = field(default_factory=list)
    project_name: str | None = None


def find_by_name(items: list[dict], name: str) -> dict | None:
    """First item whose name equals `name`, ignoring case."""
    wanted = name.lower()
    for item in items:
        if item.get("name", "").lower() == wanted:
            return item
    return None


def match_tasks(tasks: list[dict], query: str) -> list[dict]:
    """All tasks whose content contains `query`, ignoring case."""
    needle = query.lower()
    return [t for t in tasks if needle in t.get("content", "").lower()]


async def resolve_project_id(name: str) -> str | None:
    project = find_by_name(await todoist_api.get_projects(), name)
    if project is None:
        logger.warning(f"No project named {name!r}")
        return None
    return project["id"]


async def resolve_label(name: str) -> dict | None:
    label = find_by_name(await todoist_api.get_labels(), name)
    if label is None:
        logger.warning(f"No label named {name!r}")
    return label


async def resolve_section_id(project_id: str, name: str) -> str | None:
    section = find_by_name(await todoist_api.get_sections(project_id), name)
    if section is None:
        logger.warning(f"No section named {name!r} in project {project_id}")
        return None
    return section["id"]


async def project_id_from_args(args: dict, id_key: str = "project_id", name_key: str = "project_name") -> str | None:
    """Explicit project ID if given, else the ID resolved from the name."""
    if args.get(id_key):
        return args[id_key]
    if args.get(name_key):
        return await resolve_project_id(args[name_key])
    return None


async def require_project_id(args: dict) -> str:
    project_id = await project_id_from_args(args)
    if not project_id:
        raise ResolutionError("Provide project_id or a valid project_name")
    return project_id


async def find_tasks_by_name(
    query: str,
    project_name: str | None = None,
    project_id: str | None = None,
) -> TaskMatches:
    """Search open tasks by content, optionally within one project.

    An explicit project_id takes precedence over project_name. A project
    name that does not resolve leaves the search unscoped.
    """
    if project_id is None and project_name:
        project_id = await resolve_project_id(project_name)
    tasks = await todoist_api.get_tasks(project_id=project_id)
    return TaskMatches(
        query=query,
        matches=match_tasks(tasks, query),
        project_name=project_name,
    )


def pick_single(found: TaskMatches, id_field: str = "task_id") -> dict:
    """Return the only match, or raise ResolutionError for zero or many."""
    if not found.matches:
        scope = f' in project "{found.project_name}"' if found.project_name else ""
        raise ResolutionError(f'Could not find a task matching "{found.query}"{scope}')
    if len(found.matches) > 1:
        listing = "\n".join(
            f"- {t.get('content', '')} (id: {t.get('id')})"
            for t in found.matches[:MAX_CANDIDATES]
        )
        raise ResolutionError(
            f'Multiple tasks match "{found.query}". '
            f"Please specify {id_field} to proceed:\n{listing}"
        )
    return found.matches[0]


async def resolve_task(args: dict) -> tuple[str, str]:
    """Resolve the target of update/delete/complete.

    Returns (task_id, content). Content is empty when the task was given by
    ID, since no lookup is made in that case.
    """
    if args.get("task_id"):
        return args["task_id"], ""
    if not args.get("task_name"):
        raise ResolutionError("Provide either task_id or task_name")
    found = await find_tasks_by_name(args["task_name"], project_name=args.get("project_name"))
    task = pick_single(found)
    return task["id"], task.get("content", "")
