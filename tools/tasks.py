"""Task tool handlers: create, list, update, delete, complete."""
import logging

from mcp.types import CallToolResult

import todoist_api
from tools.formatting import due_string, task_details, task_summary, text_result
from tools.resolve import (
    find_tasks_by_name,
    pick_single,
    project_id_from_args,
    resolve_label,
    resolve_section_id,
    resolve_task,
)
from tools.validation import ValidationError

logger = logging.getLogger("todoist-mcp")

DEFAULT_TASK_LIMIT = 10

UPDATE_FIELDS = ("content", "description", "due_string", "priority")


def filter_by_priority(tasks: list[dict], priority: int | None) -> list[dict]:
    if not priority:
        return tasks
    return [t for t in tasks if t.get("priority") == priority]


def apply_limit(tasks: list[dict], limit: int | None) -> list[dict]:
    if limit and limit > 0:
        return tasks[:limit]
    return tasks


async def create_task(args: dict) -> CallToolResult:
    project_id = await project_id_from_args(args)

    section_id = args.get("section_id")
    if not section_id and args.get("section_name"):
        if project_id:
            section_id = await resolve_section_id(project_id, args["section_name"])
        else:
            logger.warning("section_name ignored: no project to look it up in")

    parent_id = args.get("parent_task_id")
    if not parent_id and args.get("parent_task_name"):
        found = await find_tasks_by_name(
            args["parent_task_name"],
            project_name=args.get("project_name"),
            project_id=project_id,
        )
        parent_id = pick_single(found, id_field="parent_task_id")["id"]

    task = await todoist_api.add_task(
        content=args["content"],
        description=args.get("description"),
        due_string=args.get("due_string"),
        priority=args.get("priority"),
        project_id=project_id,
        section_id=section_id,
        parent_id=parent_id,
    )

    lines = [f"Task created:\nTitle: {task.get('content')} (id: {task.get('id')})"]
    if task.get("description"):
        lines.append(f"Description: {task['description']}")
    due = due_string(task)
    if due:
        lines.append(f"Due: {due}")
    if task.get("priority"):
        lines.append(f"Priority: {task['priority']}")
    if task.get("project_id"):
        lines.append(f"ProjectId: {task['project_id']}")
    if args.get("project_name") and not project_id:
        lines.append(f'Note: project "{args["project_name"]}" not found, task was added to the Inbox')
    return text_result("\n".join(lines))


async def get_tasks(args: dict) -> CallToolResult:
    project_id = await project_id_from_args(args)

    label = None
    if args.get("label_name"):
        resolved = await resolve_label(args["label_name"])
        if resolved:
            label = resolved["name"]

    tasks = await todoist_api.get_tasks(
        project_id=project_id,
        label=label,
        filter_query=args.get("filter"),
    )
    tasks = filter_by_priority(tasks, args.get("priority"))
    tasks = apply_limit(tasks, args.get("limit") or DEFAULT_TASK_LIMIT)

    if not tasks:
        return text_result("No tasks found matching the criteria", [])

    projects = await todoist_api.get_projects()
    project_names = {p["id"]: p.get("name") for p in projects}
    text = "\n\n".join(
        task_details(t, project_names.get(t.get("project_id"))) for t in tasks
    )
    return text_result(text, [task_summary(t) for t in tasks])


async def update_task(args: dict) -> CallToolResult:
    fields = {k: args[k] for k in UPDATE_FIELDS if args.get(k)}
    if not fields:
        raise ValidationError(
            "todoist_update_task",
            {"fields": f"provide at least one of: {', '.join(UPDATE_FIELDS)}"},
        )

    task_id, original_content = await resolve_task(args)
    updated = await todoist_api.update_task(task_id, **fields)

    lines = [
        f'Task "{original_content or updated.get("content")}" (id: {updated.get("id")}) updated:',
        f"New Title: {updated.get('content')}",
    ]
    if updated.get("description"):
        lines.append(f"New Description: {updated['description']}")
    due = due_string(updated)
    if due:
        lines.append(f"New Due Date: {due}")
    if updated.get("priority"):
        lines.append(f"New Priority: {updated['priority']}")
    return text_result("\n".join(lines))


async def delete_task(args: dict) -> CallToolResult:
    task_id, content = await resolve_task(args)
    await todoist_api.delete_task(task_id)
    return text_result(f'Successfully deleted task: "{content or task_id}"')


async def complete_task(args: dict) -> CallToolResult:
    task_id, content = await resolve_task(args)
    await todoist_api.close_task(task_id)
    return text_result(f'Successfully completed task: "{content or task_id}"')
