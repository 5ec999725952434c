"""Listing tools: inbox tasks, projects, folders and tags."""
from typing import Optional

from ..omnifocus_api import jxa_client
from ..omnifocus_api.data_models import (
    OmniFocusFolder,
    OmniFocusProject,
    OmniFocusTag,
    OmniFocusTask,
    parse_list,
)
from ..omnifocus_api.mappers import FOLDER_MAPPER, PROJECT_MAPPER, TAG_MAPPER, TASK_MAPPER
from ..omnifocus_api.sanitization import sanitize_input
from ..schemas import (
    FolderStatusFilter,
    ListFoldersInput,
    ListInboxInput,
    ListProjectsInput,
    ListTagsInput,
    ProjectStatusFilter,
    TagStatusFilter,
)
from .responses import format_listing

# Spellings of String(project.status()) in JXA.
HOST_PROJECT_STATUS = {
    ProjectStatusFilter.ACTIVE: "active status",
    ProjectStatusFilter.DONE: "done status",
    ProjectStatusFilter.DROPPED: "dropped status",
    ProjectStatusFilter.ON_HOLD: "on hold status",
}


def project_status_filter(status: ProjectStatusFilter) -> str:
    """``.filter(...)`` suffix selecting projects in *status* ("" for all)."""
    if status == ProjectStatusFilter.ALL:
        return ""
    return (
        '.filter(function(p) { return String(p.status()) === "%s"; })'
        % HOST_PROJECT_STATUS[status]
    )


def hidden_filter(show_hidden: Optional[bool]) -> str:
    if show_hidden is None:
        return ""
    if show_hidden:
        return ".filter(function(item) { return item.hidden(); })"
    return ".filter(function(item) { return !item.hidden(); })"


def generate_list_inbox_script(include_completed: bool, limit: int) -> str:
    completed_filter = "" if include_completed else ".filter(function(t) { return !t.completed(); })"
    return f"""
{TASK_MAPPER}
var tasks = doc.inboxTasks(){completed_filter}.slice(0, {int(limit)});
JSON.stringify(tasks.map(mapTask));
"""


def generate_list_projects_script(
    status: ProjectStatusFilter, folder_name: Optional[str], limit: int
) -> str:
    """*folder_name* must already be sanitized."""
    folder_filter = ""
    if folder_name:
        folder_filter = f""".filter(function(p) {{
  var pf = p.folder();
  return pf && pf.name().toLowerCase().indexOf("{folder_name}".toLowerCase()) !== -1;
}})"""
    return f"""
{PROJECT_MAPPER}
var projects = doc.flattenedProjects(){project_status_filter(status)}{folder_filter}.slice(0, {int(limit)});
JSON.stringify(projects.map(mapProject));
"""


def generate_list_folders_script(status: FolderStatusFilter, limit: int) -> str:
    show_hidden = {
        FolderStatusFilter.ALL: None,
        FolderStatusFilter.ACTIVE: False,
        FolderStatusFilter.DROPPED: True,
    }[status]
    return f"""
{FOLDER_MAPPER}
var folders = doc.flattenedFolders(){hidden_filter(show_hidden)}.slice(0, {int(limit)});
JSON.stringify(folders.map(mapFolder));
"""


def generate_list_tags_script(status: TagStatusFilter, limit: int) -> str:
    # JXA only exposes `hidden`, so on-hold and dropped tags are indistinguishable.
    show_hidden = {
        TagStatusFilter.ALL: None,
        TagStatusFilter.ACTIVE: False,
        TagStatusFilter.ON_HOLD: True,
        TagStatusFilter.DROPPED: True,
    }[status]
    return f"""
{TAG_MAPPER}
var allTags = doc.flattenedTags(){hidden_filter(show_hidden)}.slice(0, {int(limit)});
JSON.stringify(allTags.map(mapTag));
"""


def handle_list_inbox(params: ListInboxInput) -> str:
    script = generate_list_inbox_script(params.include_completed, params.limit)
    tasks = parse_list(jxa_client.execute_and_parse_json(script), OmniFocusTask)
    return format_listing("tasks", tasks, "No tasks found in inbox.")


def handle_list_projects(params: ListProjectsInput) -> str:
    folder_name = sanitize_input(params.folder_name) if params.folder_name else None
    script = generate_list_projects_script(params.status, folder_name, params.limit)
    projects = parse_list(jxa_client.execute_and_parse_json(script), OmniFocusProject)
    return format_listing("projects", projects, "No projects found matching criteria.")


def handle_list_folders(params: ListFoldersInput) -> str:
    script = generate_list_folders_script(params.status, params.limit)
    folders = parse_list(jxa_client.execute_and_parse_json(script), OmniFocusFolder)
    return format_listing("folders", folders, "No folders found.")


def handle_list_tags(params: ListTagsInput) -> str:
    script = generate_list_tags_script(params.status, params.limit)
    tags = parse_list(jxa_client.execute_and_parse_json(script), OmniFocusTag)
    return format_listing("tags", tags, "No tags found.")
