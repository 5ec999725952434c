"""Task mutation tools: create, complete/drop, add and remove tags."""
from typing import List, Optional

from ..omnifocus_api import jxa_client
from ..omnifocus_api.data_models import OmniFocusTask
from ..omnifocus_api.lookups import TASK, find_by_id_or_name
from ..omnifocus_api.mappers import TASK_MAPPER
from ..omnifocus_api.sanitization import sanitize_array, sanitize_input
from ..schemas import (
    CompleteTaskInput,
    CreateTaskInput,
    Frequency,
    RecurrenceInput,
    RepeatFrom,
    TaskAction,
    TaskTagInput,
)
from ..utils.logger import get_logger
from .responses import format_record

log = get_logger(__name__)

NOTE_MAX_LENGTH = 10000
TAG_NAME_MAX_LENGTH = 200


def generate_recurrence_script(recurrence: RecurrenceInput) -> str:
    """Statements assigning ``task.repetitionMethod`` and ``task.repetitionRule``."""
    method = (
        "start-after-completion"
        if recurrence.repeat_from == RepeatFrom.COMPLETION_DATE
        else "fixed"
    )
    fields = [
        f"recurrence: app.RecurrenceType.{recurrence.frequency.value}",
        f"interval: {int(recurrence.interval)}",
    ]
    if recurrence.frequency == Frequency.WEEKLY and recurrence.days_of_week:
        days = ", ".join(f"app.RecurrenceDay.{day.value.lower()}" for day in recurrence.days_of_week)
        fields.append(f"daysOfWeek: [{days}]")
    elif recurrence.frequency == Frequency.MONTHLY and recurrence.day_of_month:
        fields.append(f"dayOfMonth: {int(recurrence.day_of_month)}")
    elif recurrence.frequency == Frequency.YEARLY and recurrence.month_of_year:
        fields.append(f"monthOfYear: {int(recurrence.month_of_year)}")
        if recurrence.day_of_month:
            fields.append(f"dayOfMonth: {int(recurrence.day_of_month)}")

    return (
        f'task.repetitionMethod = app.RepetitionMethod["{method}"];\n'
        f"task.repetitionRule = app.RecurrenceRule({{ {', '.join(fields)} }});\n"
    )


def generate_create_task_script(
    name: str,
    note: Optional[str] = None,
    project_name: Optional[str] = None,
    parent_task_id: Optional[str] = None,
    due_date: Optional[str] = None,
    defer_date: Optional[str] = None,
    planned_date: Optional[str] = None,
    flagged: bool = False,
    estimated_minutes: Optional[int] = None,
    tag_names: Optional[List[str]] = None,
    recurrence: Optional[RecurrenceInput] = None,
) -> str:
    """Build the creation script.  All text arguments must be sanitized.

    Placement: under *parent_task_id* when given, else at the end of the
    project named exactly *project_name*, else in the inbox.
    """
    if parent_task_id:
        placement = f"""
var parentTask = doc.flattenedTasks().find(function(t) {{ return t.id() === "{parent_task_id}"; }});
if (!parentTask) {{ throw new Error("Parent task not found with ID: {parent_task_id}"); }}
var task = app.Task({{name: "{name}"}});
parentTask.tasks.push(task);
"""
    elif project_name:
        placement = f"""
var project = doc.flattenedProjects().find(function(p) {{ return p.name() === "{project_name}"; }});
if (!project) {{ throw new Error("Project not found: {project_name}"); }}
var task = app.Task({{name: "{name}"}});
project.tasks.push(task);
"""
    else:
        placement = f"""
var task = app.InboxTask({{name: "{name}"}});
doc.inboxTasks.push(task);
"""

    lines = [TASK_MAPPER, placement]
    if note:
        lines.append(f'task.note = "{note}";')
    if due_date:
        lines.append(f'task.dueDate = new Date("{due_date}");')
    if defer_date:
        lines.append(f'task.deferDate = new Date("{defer_date}");')
    if planned_date:
        lines.append(f'try {{ task.plannedDate = new Date("{planned_date}"); }} catch(e) {{}}')
    if flagged:
        lines.append("task.flagged = true;")
    if estimated_minutes:
        lines.append(f"task.estimatedMinutes = {int(estimated_minutes)};")
    if tag_names:
        quoted = ", ".join(f'"{tag}"' for tag in tag_names)
        # Unknown tag names are skipped rather than created.
        lines.append(f"""
var tagNamesToAdd = [{quoted}];
var allTags = doc.flattenedTags();
tagNamesToAdd.forEach(function(tagName) {{
  var tag = allTags.find(function(t) {{ return t.name() === tagName; }});
  if (tag) {{ app.add(tag, {{ to: task.tags }}); }}
}});""")
    if recurrence:
        lines.append(generate_recurrence_script(recurrence))
    lines.append("JSON.stringify(mapTask(task));")
    return "\n".join(lines) + "\n"


def generate_complete_task_script(
    task_id: Optional[str], task_name: Optional[str], action: TaskAction
) -> str:
    action_code = "task.markDropped();" if action == TaskAction.DROP else "task.markComplete();"
    return f"""
{TASK_MAPPER}
{find_by_id_or_name("task", TASK, task_id, task_name)}
{action_code}
JSON.stringify(mapTask(task));
"""


def generate_add_tag_script(task_id: Optional[str], task_name: Optional[str], tag_name: str) -> str:
    return f"""
{TASK_MAPPER}
{find_by_id_or_name("task", TASK, task_id, task_name)}
var tag = doc.flattenedTags().find(function(t) {{ return t.name() === "{tag_name}"; }});
if (!tag) {{ throw new Error("Tag not found: {tag_name}"); }}

var existingTag = task.tags().find(function(t) {{ return t.name() === "{tag_name}"; }});
if (!existingTag) {{
  app.add(tag, {{ to: task.tags }});
}}
JSON.stringify(mapTask(task));
"""


def generate_remove_tag_script(task_id: Optional[str], task_name: Optional[str], tag_name: str) -> str:
    return f"""
{TASK_MAPPER}
{find_by_id_or_name("task", TASK, task_id, task_name)}
var tagOnTask = task.tags().find(function(t) {{ return t.name() === "{tag_name}"; }});
if (tagOnTask) {{
  app.remove(tagOnTask, {{ from: task.tags }});
}}
JSON.stringify(mapTask(task));
"""


def _sanitize_optional(value: Optional[str], max_length: int = 500) -> Optional[str]:
    return sanitize_input(value, max_length) if value else None


def handle_create_task(params: CreateTaskInput) -> str:
    script = generate_create_task_script(
        name=sanitize_input(params.name),
        note=_sanitize_optional(params.note, NOTE_MAX_LENGTH),
        project_name=_sanitize_optional(params.project_name),
        parent_task_id=_sanitize_optional(params.parent_task_id),
        due_date=_sanitize_optional(params.due_date),
        defer_date=_sanitize_optional(params.defer_date),
        planned_date=_sanitize_optional(params.planned_date),
        flagged=params.flagged,
        estimated_minutes=params.estimated_minutes,
        tag_names=sanitize_array(params.tag_names, TAG_NAME_MAX_LENGTH) if params.tag_names else None,
        recurrence=params.recurrence,
    )
    task = OmniFocusTask.from_dict(jxa_client.execute_and_parse_json(script))
    log.info("Created task %s (%s)", task.id, task.name)
    return format_record("Task created successfully", task)


def handle_complete_task(params: CompleteTaskInput) -> str:
    script = generate_complete_task_script(
        _sanitize_optional(params.task_id),
        _sanitize_optional(params.task_name),
        params.action,
    )
    task = OmniFocusTask.from_dict(jxa_client.execute_and_parse_json(script))
    verb = "dropped" if params.action == TaskAction.DROP else "completed"
    return format_record(f"Task {verb}", task)


def handle_add_tag_to_task(params: TaskTagInput) -> str:
    script = generate_add_tag_script(
        _sanitize_optional(params.task_id),
        _sanitize_optional(params.task_name),
        sanitize_input(params.tag_name, TAG_NAME_MAX_LENGTH),
    )
    task = OmniFocusTask.from_dict(jxa_client.execute_and_parse_json(script))
    return format_record("Tag added", task)


def handle_remove_tag_from_task(params: TaskTagInput) -> str:
    script = generate_remove_tag_script(
        _sanitize_optional(params.task_id),
        _sanitize_optional(params.task_name),
        sanitize_input(params.tag_name, TAG_NAME_MAX_LENGTH),
    )
    task = OmniFocusTask.from_dict(jxa_client.execute_and_parse_json(script))
    return format_record("Tag removed", task)
