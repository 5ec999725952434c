"""
OmniFocus MCP server.

Registers every OmniFocus tool on a FastMCP instance and exposes a small
typer CLI that starts it.  Handlers live in :mod:`omnifocus_mcp.tools`; the
functions here only bind names, annotations and error reporting.
"""

from typing import Optional

import typer
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .schemas import (
    BatchMarkReviewedInput,
    CompleteTaskInput,
    CreateTaskInput,
    DateWindowInput,
    FlaggedTasksInput,
    ListFoldersInput,
    ListInboxInput,
    ListProjectsInput,
    ListTagsInput,
    MarkProjectReviewedInput,
    ProjectsForReviewInput,
    SearchInput,
    TaskTagInput,
)
from .tools import list_tools, query_tools, review_tools, task_tools
from .tools.responses import tool_boundary
from .utils.config import get_config, load_env_vars
from .utils.logger import configure_logging, get_logger

log = get_logger(__name__)

SERVER_NAME = "omnifocus-mcp-server"
TRANSPORTS = ("stdio", "sse", "streamable-http")

mcp = FastMCP(
    SERVER_NAME,
    instructions=(
        "Tools for reading and updating the user's OmniFocus database on macOS. "
        "Prefer IDs over names once an item has been listed; name lookups fail "
        "when more than one item matches."
    ),
)


def _read_only(title: str) -> ToolAnnotations:
    return ToolAnnotations(
        title=title,
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )


def _mutating(title: str, idempotent: bool = False, destructive: bool = False) -> ToolAnnotations:
    return ToolAnnotations(
        title=title,
        readOnlyHint=False,
        destructiveHint=destructive,
        idempotentHint=idempotent,
        openWorldHint=False,
    )


# ============================================================================
# Listing
# ============================================================================

@mcp.tool(name="omnifocus_list_inbox", annotations=_read_only("List Inbox Tasks"))
@tool_boundary("listing inbox")
def omnifocus_list_inbox(params: ListInboxInput) -> str:
    """List tasks in the OmniFocus inbox.

    Completed tasks are excluded unless includeCompleted is true.
    """
    return list_tools.handle_list_inbox(params)


@mcp.tool(name="omnifocus_list_projects", annotations=_read_only("List Projects"))
@tool_boundary("listing projects")
def omnifocus_list_projects(params: ListProjectsInput) -> str:
    """List projects, filtered by status and optionally by folder name (partial, case-insensitive)."""
    return list_tools.handle_list_projects(params)


@mcp.tool(name="omnifocus_list_folders", annotations=_read_only("List Folders"))
@tool_boundary("listing folders")
def omnifocus_list_folders(params: ListFoldersInput) -> str:
    """List folders. Hidden folders are reported as dropped."""
    return list_tools.handle_list_folders(params)


@mcp.tool(name="omnifocus_list_tags", annotations=_read_only("List Tags"))
@tool_boundary("listing tags")
def omnifocus_list_tags(params: ListTagsInput) -> str:
    """List tags with their task counts."""
    return list_tools.handle_list_tags(params)


# ============================================================================
# Tasks
# ============================================================================

@mcp.tool(name="omnifocus_create_task", annotations=_mutating("Create Task"))
@tool_boundary("creating task")
def omnifocus_create_task(params: CreateTaskInput) -> str:
    """Create a task.

    The task is placed under parentTaskId when given, otherwise at the end of
    the project named exactly projectName, otherwise in the inbox.  Dates are
    ISO 8601 strings.  Tag names that do not exist are skipped.  An optional
    recurrence makes the task repeat.
    """
    return task_tools.handle_create_task(params)


@mcp.tool(
    name="omnifocus_complete_task",
    annotations=_mutating("Complete or Drop Task", idempotent=True, destructive=True),
)
@tool_boundary("updating task")
def omnifocus_complete_task(params: CompleteTaskInput) -> str:
    """Mark a task as completed or dropped, looked up by taskId or taskName."""
    return task_tools.handle_complete_task(params)


@mcp.tool(name="omnifocus_add_tag_to_task", annotations=_mutating("Add Tag to Task", idempotent=True))
@tool_boundary("adding tag")
def omnifocus_add_tag_to_task(params: TaskTagInput) -> str:
    """Add an existing tag to a task. Adding a tag the task already has is a no-op."""
    return task_tools.handle_add_tag_to_task(params)


@mcp.tool(
    name="omnifocus_remove_tag_from_task",
    annotations=_mutating("Remove Tag from Task", idempotent=True),
)
@tool_boundary("removing tag")
def omnifocus_remove_tag_from_task(params: TaskTagInput) -> str:
    """Remove a tag from a task. Removing a tag the task does not have is a no-op."""
    return task_tools.handle_remove_tag_from_task(params)


# ============================================================================
# Queries
# ============================================================================

@mcp.tool(name="omnifocus_search", annotations=_read_only("Search OmniFocus"))
@tool_boundary("searching")
def omnifocus_search(params: SearchInput) -> str:
    """Search tasks, projects, folders and tags by name.

    Tasks also match on their note.  Matching is a case-insensitive substring
    test and limit applies per type.
    """
    return query_tools.handle_search(params)


@mcp.tool(name="omnifocus_get_due_tasks", annotations=_read_only("Get Due Tasks"))
@tool_boundary("getting due tasks")
def omnifocus_get_due_tasks(params: DateWindowInput) -> str:
    """Incomplete tasks due by the end of the day daysAhead days from now, soonest first."""
    return query_tools.handle_get_due_tasks(params)


@mcp.tool(name="omnifocus_get_flagged_tasks", annotations=_read_only("Get Flagged Tasks"))
@tool_boundary("getting flagged tasks")
def omnifocus_get_flagged_tasks(params: FlaggedTasksInput) -> str:
    """List flagged tasks."""
    return query_tools.handle_get_flagged_tasks(params)


@mcp.tool(name="omnifocus_get_planned_tasks", annotations=_read_only("Get Planned Tasks"))
@tool_boundary("getting planned tasks")
def omnifocus_get_planned_tasks(params: DateWindowInput) -> str:
    """Incomplete tasks planned by the end of the day daysAhead days from now, soonest first."""
    return query_tools.handle_get_planned_tasks(params)


# ============================================================================
# Review
# ============================================================================

@mcp.tool(
    name="omnifocus_get_projects_for_review",
    annotations=_read_only("Get Projects for Review"),
)
@tool_boundary("getting projects for review")
def omnifocus_get_projects_for_review(params: ProjectsForReviewInput) -> str:
    """Projects whose next review date falls within daysAhead days (0 means already due).

    Projects without a review date are left out.
    """
    return review_tools.handle_get_projects_for_review(params)


@mcp.tool(name="omnifocus_mark_project_reviewed", annotations=_mutating("Mark Project Reviewed"))
@tool_boundary("marking project reviewed")
def omnifocus_mark_project_reviewed(params: MarkProjectReviewedInput) -> str:
    """Mark a project as reviewed now and schedule its next review.

    With reviewIntervalDays the project's interval is replaced; otherwise its
    current interval decides the next review date.
    """
    return review_tools.handle_mark_project_reviewed(params)


@mcp.tool(name="omnifocus_batch_mark_reviewed", annotations=_mutating("Batch Mark Projects Reviewed"))
@tool_boundary("batch marking projects reviewed")
def omnifocus_batch_mark_reviewed(params: BatchMarkReviewedInput) -> str:
    """Mark several projects (by ID) as reviewed.

    Projects are processed one by one; failures are listed in the result
    instead of aborting the batch.
    """
    return review_tools.handle_batch_mark_reviewed(params)


# ============================================================================
# CLI
# ============================================================================

app = typer.Typer(help="OmniFocus MCP server", add_completion=False)


@app.command()
def serve(
    transport: Optional[str] = typer.Option(
        None,
        "--transport",
        "-t",
        help="MCP transport: stdio, sse or streamable-http (default: $OMNIFOCUS_MCP_TRANSPORT or stdio)",
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", "-l", help="Log level (default: $OMNIFOCUS_MCP_LOG_LEVEL or INFO)"
    ),
):
    """Run the OmniFocus MCP server."""
    load_env_vars()
    configure_logging(log_level, force=True)

    selected = transport or get_config("OMNIFOCUS_MCP_TRANSPORT", "stdio")
    if selected not in TRANSPORTS:
        typer.echo(f"Unknown transport '{selected}'. Choose one of: {', '.join(TRANSPORTS)}", err=True)
        raise typer.Exit(code=2)

    log.info("Starting %s on %s transport", SERVER_NAME, selected)
    mcp.run(transport=selected)


def main():
    app()


if __name__ == "__main__":
    main()
