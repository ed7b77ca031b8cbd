"""Section tool handlers."""
from mcp.types import CallToolResult

import todoist_api
from tools.formatting import named_line, text_result
from tools.resolve import project_id_from_args, require_project_id


def section_summary(section: dict) -> dict:
    return {
        "id": section.get("id"),
        "name": section.get("name"),
        "project_id": section.get("project_id"),
    }


async def list_sections(args: dict) -> CallToolResult:
    # An unresolved project name lists sections across all projects
    project_id = await project_id_from_args(args)
    sections = await todoist_api.get_sections(project_id)

    entries = []
    for s in sections:
        entry = named_line(s)
        if s.get("project_id"):
            entry += f"\n  ProjectId: {s['project_id']}"
        entries.append(entry)
    text = "\n".join(entries) or "No sections found"
    return text_result(text, [section_summary(s) for s in sections])


async def create_section(args: dict) -> CallToolResult:
    project_id = await require_project_id(args)
    section = await todoist_api.add_section(args["name"], project_id)
    return text_result(
        f"Section created: {section.get('name')} (id: {section.get('id')}) "
        f"in project {section.get('project_id')}",
        section_summary(section),
    )
