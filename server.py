#!/usr/bin/env python3
"""
Todoist MCP Server

Local stdio MCP server exposing Todoist tasks, projects, sections and
labels as tools. Projects, labels and sections can be referenced by name;
tasks by ID or by a fragment of their title.

Tools - Tasks:
- todoist_create_task, todoist_get_tasks, todoist_update_task
- todoist_delete_task, todoist_complete_task, todoist_get_completed_tasks

Tools - Projects:
- todoist_list_projects, todoist_create_project, todoist_rename_project
- todoist_delete_project, todoist_get_projects_with_tasks

Tools - Sections & Labels:
- todoist_list_sections, todoist_create_section, todoist_list_labels

Todoist's task update cannot change a task's project, so there is no
move tool; recreate the task in the target project instead.

Requires TODOIST_API_TOKEN in the environment.
"""
import asyncio
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Tool

import todoist_api
from tools import completed, projects, sections, tasks
from tools.config import ConfigError, get_api_token, get_debug_info, get_log_level
from tools.formatting import error_result
from tools.resolve import ResolutionError
from tools.validation import ValidationError, validate_tool_arguments

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("todoist-mcp")

server = Server("todoist-mcp-server")

PRIORITY = {
    "type": "integer",
    "enum": [1, 2, 3, 4],
}

# Names and titles need at least one non-whitespace character
NON_BLANK = r"\S"

# update/delete/complete address a task by exact ID or by title search
TASK_TARGET = {
    "task_id": {"type": "string", "description": "Exact ID of the task (preferred if available)"},
    "task_name": {
        "type": "string",
        "description": "Name/content of the task to search for (case-insensitive substring)",
    },
    "project_name": {
        "type": "string",
        "description": "Optional project name to narrow the search when using task_name",
    },
}
# At least one of these must be given; checked at dispatch, not in inputSchema
ONE_OF_REQUIRED = {
    "todoist_update_task": ("task_id", "task_name"),
    "todoist_delete_task": ("task_id", "task_name"),
    "todoist_complete_task": ("task_id", "task_name"),
}

TOOLS = [
    Tool(
        name="todoist_create_task",
        description="Create a new task in Todoist with optional description, due date, and priority.",
        inputSchema={
            "type": "object",
            "properties": {
                "content": {
                    "type": "string",
                    "minLength": 1,
                    "pattern": NON_BLANK,
                    "description": "The content/title of the task",
                },
                "project_id": {"type": "string", "description": "Project ID to create the task in (optional)"},
                "project_name": {
                    "type": "string",
                    "description": "Project name to create the task in (optional; ignored if project_id provided)",
                },
                "section_id": {"type": "string", "description": "Section ID to create the task in (optional)"},
                "section_name": {
                    "type": "string",
                    "description": "Section name within the task's project (optional; requires a project)",
                },
                "parent_task_id": {"type": "string", "description": "Create as a subtask of this task ID (optional)"},
                "parent_task_name": {
                    "type": "string",
                    "description": "Create as a subtask of the task matching this name (optional; must match exactly one task)",
                },
                "description": {"type": "string", "description": "Detailed description of the task (optional)"},
                "due_string": {
                    "type": "string",
                    "description": "Natural language due date like 'tomorrow', 'next Monday', 'Jan 23' (optional)",
                },
                "priority": {**PRIORITY, "description": "Task priority from 1 (normal) to 4 (urgent) (optional)"},
            },
            "required": ["content"],
        },
    ),
    Tool(
        name="todoist_get_tasks",
        description="Get a list of open tasks from Todoist with various filters.",
        inputSchema={
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "Filter tasks by project ID (optional)"},
                "project_name": {"type": "string", "description": "Filter tasks by project name (optional)"},
                "filter": {
                    "type": "string",
                    "description": "Todoist filter like 'today', 'tomorrow', 'next week', 'priority 1', 'overdue' (optional)",
                },
                "label_name": {"type": "string", "description": "Filter tasks by a single label name (optional)"},
                "priority": {**PRIORITY, "description": "Filter by priority level (1-4) (optional)"},
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "default": tasks.DEFAULT_TASK_LIMIT,
                    "description": "Maximum number of tasks to return",
                },
            },
        },
    ),
    Tool(
        name="todoist_get_completed_tasks",
        description="List completed tasks with optional project and date filters.",
        inputSchema={
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "Filter by project ID (optional)"},
                "project_name": {"type": "string", "description": "Filter by project name (optional)"},
                "since": {"type": "string", "description": "ISO datetime to filter tasks completed since (optional)"},
                "until": {"type": "string", "description": "ISO datetime to filter tasks completed until (optional)"},
                "limit": {
                    "type": "integer",
                    "minimum": 1,
                    "default": completed.DEFAULT_COMPLETED_LIMIT,
                    "description": "Maximum number of completed tasks to return",
                },
            },
        },
    ),
    Tool(
        name="todoist_get_projects_with_tasks",
        description="List projects and their open tasks in a single call.",
        inputSchema={
            "type": "object",
            "properties": {
                "project_name": {"type": "string", "description": "Optional project name to restrict the listing"},
                "include_empty": {
                    "type": "boolean",
                    "default": False,
                    "description": "Include projects with no open tasks",
                },
                "limit_per_project": {
                    "type": "integer",
                    "minimum": 1,
                    "default": projects.DEFAULT_LIMIT_PER_PROJECT,
                    "description": "Max tasks per project (applied to each project separately)",
                },
                "label_name": {"type": "string", "description": "Filter tasks by single label name (optional)"},
                "filter": {"type": "string", "description": "Todoist filter string applied per project (optional)"},
                "priority": {**PRIORITY, "description": "Filter tasks by priority (1-4)"},
            },
        },
    ),
    Tool(
        name="todoist_update_task",
        description=(
            "Update an existing task, addressed by ID or by searching for it by name. "
            "Cannot move a task to another project."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                **TASK_TARGET,
                "content": {"type": "string", "description": "New content/title for the task (optional)"},
                "description": {"type": "string", "description": "New description for the task (optional)"},
                "due_string": {
                    "type": "string",
                    "description": "New due date in natural language like 'tomorrow', 'next Monday' (optional)",
                },
                "priority": {**PRIORITY, "description": "New priority level from 1 (normal) to 4 (urgent) (optional)"},
            },
        },
    ),
    Tool(
        name="todoist_delete_task",
        description="Delete a task from Todoist, addressed by ID or by searching for it by name.",
        inputSchema={
            "type": "object",
            "properties": TASK_TARGET,
        },
    ),
    Tool(
        name="todoist_complete_task",
        description="Mark a task as complete, addressed by ID or by searching for it by name.",
        inputSchema={
            "type": "object",
            "properties": TASK_TARGET,
        },
    ),
    Tool(
        name="todoist_list_projects",
        description="List all projects with their IDs and names.",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="todoist_list_labels",
        description="List all labels with their IDs and names.",
        inputSchema={"type": "object", "properties": {}},
    ),
    Tool(
        name="todoist_list_sections",
        description="List sections, optionally filtered by project (name or ID).",
        inputSchema={
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "Project ID to list sections for (optional)"},
                "project_name": {"type": "string", "description": "Project name to list sections for (optional)"},
            },
        },
    ),
    Tool(
        name="todoist_create_section",
        description="Create a section in a project.",
        inputSchema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "minLength": 1, "pattern": NON_BLANK, "description": "Section name"},
                "project_id": {"type": "string", "description": "Project ID (preferred)"},
                "project_name": {"type": "string", "description": "Project name (used if project_id not provided)"},
            },
            "required": ["name"],
        },
    ),
    Tool(
        name="todoist_create_project",
        description="Create a new project (optionally nested).",
        inputSchema={
            "type": "object",
            "properties": {
                "name": {"type": "string", "minLength": 1, "pattern": NON_BLANK, "description": "Project name"},
                "parent_project_id": {"type": "string", "description": "Optional parent project ID"},
                "parent_project_name": {"type": "string", "description": "Optional parent project name"},
                "favorite": {"type": "boolean", "description": "Mark as favorite (optional)"},
            },
            "required": ["name"],
        },
    ),
    Tool(
        name="todoist_rename_project",
        description="Rename an existing project.",
        inputSchema={
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "ID of the project to rename (preferred)"},
                "project_name": {"type": "string", "description": "Name of the project to rename (if ID unknown)"},
                "new_name": {"type": "string", "minLength": 1, "pattern": NON_BLANK, "description": "New name for the project"},
            },
            "required": ["new_name"],
        },
    ),
    Tool(
        name="todoist_delete_project",
        description="Delete a project and everything in it (destructive).",
        inputSchema={
            "type": "object",
            "properties": {
                "project_id": {"type": "string", "description": "ID of the project to delete (preferred)"},
                "project_name": {"type": "string", "description": "Name of the project to delete (if ID unknown)"},
            },
        },
    ),
]

TOOLS_BY_NAME = {tool.name: tool for tool in TOOLS}

HANDLERS = {
    "todoist_create_task": tasks.create_task,
    "todoist_get_tasks": tasks.get_tasks,
    "todoist_get_completed_tasks": completed.get_completed_tasks,
    "todoist_get_projects_with_tasks": projects.get_projects_with_tasks,
    "todoist_update_task": tasks.update_task,
    "todoist_delete_task": tasks.delete_task,
    "todoist_complete_task": tasks.complete_task,
    "todoist_list_projects": projects.list_projects,
    "todoist_list_labels": projects.list_labels,
    "todoist_list_sections": sections.list_sections,
    "todoist_create_section": sections.create_section,
    "todoist_create_project": projects.create_project,
    "todoist_rename_project": projects.rename_project,
    "todoist_delete_project": projects.delete_project,
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    return TOOLS


# inputSchema is enforced by validate_tool_arguments (jsonschema), with errors keyed by field
@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict) -> CallToolResult:
    logger.info(f"Tool: {name}")

    handler = HANDLERS.get(name)
    if handler is None:
        return error_result(f"Unknown tool: {name}")

    try:
        args = validate_tool_arguments(
            name,
            TOOLS_BY_NAME[name].inputSchema,
            arguments or {},
            one_of=ONE_OF_REQUIRED.get(name),
        )
        return await handler(args)
    except (ValidationError, ResolutionError) as e:
        logger.info(f"{name} rejected: {e}")
        return error_result(str(e))
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        return error_result(f"Error: {todoist_api.describe_error(e)}")


async def main():
    try:
        get_api_token()
    except ConfigError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    logger.info("Starting Todoist MCP Server")
    logger.debug(f"Config: {get_debug_info()}")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await todoist_api.close_client()


def main_sync():
    """Synchronous entry point for uvx/pip scripts."""
    asyncio.run(main())


if __name__ == "__main__":
    main_sync()
