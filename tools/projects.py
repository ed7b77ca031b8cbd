"""Project and label tool handlers."""
from mcp.types import CallToolResult

import todoist_api
from tools.formatting import due_string, named_line, named_summary, text_result
from tools.resolve import project_id_from_args, require_project_id, resolve_label
from tools.tasks import apply_limit, filter_by_priority

DEFAULT_LIMIT_PER_PROJECT = 10


async def list_projects(args: dict) -> CallToolResult:
    projects = await todoist_api.get_projects()
    text = "\n".join(named_line(p) for p in projects) or "No projects found"
    return text_result(text, [named_summary(p) for p in projects])


async def list_labels(args: dict) -> CallToolResult:
    labels = await todoist_api.get_labels()
    text = "\n".join(named_line(label) for label in labels) or "No labels found"
    return text_result(text, [named_summary(label) for label in labels])


async def create_project(args: dict) -> CallToolResult:
    parent_id = await project_id_from_args(
        args, id_key="parent_project_id", name_key="parent_project_name"
    )
    project = await todoist_api.add_project(
        name=args["name"],
        parent_id=parent_id,
        is_favorite=args.get("favorite"),
    )
    text = f"Project created: {project.get('name')} (id: {project.get('id')})"
    if project.get("parent_id"):
        text += f"\nParentId: {project['parent_id']}"
    payload = {
        "id": project.get("id"),
        "name": project.get("name"),
        "parent_id": project.get("parent_id"),
    }
    return text_result(text, payload)


async def rename_project(args: dict) -> CallToolResult:
    project_id = await require_project_id(args)
    updated = await todoist_api.update_project(project_id, name=args["new_name"])
    return text_result(
        f"Project renamed: {updated.get('name')} (id: {updated.get('id')})",
        named_summary(updated),
    )


async def delete_project(args: dict) -> CallToolResult:
    project_id = await require_project_id(args)
    await todoist_api.delete_project(project_id)
    return text_result(f"Project deleted: {project_id}")


async def get_projects_with_tasks(args: dict) -> CallToolResult:
    """Open tasks grouped by project.

    Priority filter and limit apply to each project's list on its own, so
    limit_per_project caps every project separately rather than the total.
    """
    include_empty = bool(args.get("include_empty"))
    limit = args.get("limit_per_project") or DEFAULT_LIMIT_PER_PROJECT

    projects = await todoist_api.get_projects()
    if args.get("project_name"):
        wanted = args["project_name"].lower()
        projects = [p for p in projects if p.get("name", "").lower() == wanted]

    label = None
    if args.get("label_name"):
        resolved = await resolve_label(args["label_name"])
        if resolved:
            label = resolved["name"]

    results = []
    for project in projects:
        tasks = await todoist_api.get_tasks(
            project_id=project["id"],
            label=label,
            filter_query=args.get("filter"),
        )
        tasks = filter_by_priority(tasks, args.get("priority"))
        tasks = apply_limit(tasks, limit)
        if tasks or include_empty:
            results.append((project, tasks))

    if not results:
        return text_result("No projects/tasks found for the given criteria", [])

    blocks = []
    for project, tasks in results:
        header = f"Project: {project.get('name')} (id: {project.get('id')})"
        if not tasks:
            blocks.append(f"{header}\n  (no open tasks)")
            continue
        items = []
        for t in tasks:
            item = f"- {t.get('content')} (id: {t.get('id')})"
            due = due_string(t)
            if due:
                item += f"\n  Due: {due}"
            if t.get("priority"):
                item += f"\n  Priority: {t['priority']}"
            items.append(item)
        blocks.append(header + "\n" + "\n".join(items))

    payload = [
        {
            "project": named_summary(project),
            "tasks": [
                {
                    "id": t.get("id"),
                    "content": t.get("content"),
                    "due": due_string(t),
                    "priority": t.get("priority"),
                }
                for t in tasks
            ],
        }
        for project, tasks in results
    ]
    return text_result("\n\n".join(blocks), payload)
