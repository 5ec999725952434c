"""Read-only query tools: search, due, flagged and planned tasks."""
from typing import Dict, List

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
from ..schemas import DateWindowInput, FlaggedTasksInput, SearchInput, SearchType
from .responses import format_listing, to_json

SEARCH_QUERY_MAX_LENGTH = 200

# search type -> (mapper snippet, collection, map function, model, also match notes)
_SEARCH_TARGETS = {
    SearchType.TASKS: (TASK_MAPPER, "doc.flattenedTasks()", "mapTask", OmniFocusTask, True),
    SearchType.PROJECTS: (PROJECT_MAPPER, "doc.flattenedProjects()", "mapProject", OmniFocusProject, False),
    SearchType.FOLDERS: (FOLDER_MAPPER, "doc.flattenedFolders()", "mapFolder", OmniFocusFolder, False),
    SearchType.TAGS: (TAG_MAPPER, "doc.flattenedTags()", "mapTag", OmniFocusTag, False),
}

# Task accessors whose value is a date; the planned date is missing on older
# OmniFocus versions, hence the guarded read.
_DATE_READERS = {
    "due": "function readDate(t) { return t.dueDate(); }",
    "planned": (
        "function readDate(t) {\n"
        "  try { return t.plannedDate ? t.plannedDate() : null; } catch(e) { return null; }\n"
        "}"
    ),
}


def generate_search_script(search_type: SearchType, query: str, limit: int) -> str:
    """Case-insensitive substring search of one object type.  *query* must be sanitized."""
    mapper, collection, map_fn, _, match_notes = _SEARCH_TARGETS[search_type]
    note_clause = ""
    if match_notes:
        note_clause = """
  var note = item.note();
  if (note && String(note).toLowerCase().indexOf(q) !== -1) { return true; }"""
    return f"""
{mapper}
var q = "{query}".toLowerCase();
var matched = {collection}.filter(function(item) {{
  if (item.name().toLowerCase().indexOf(q) !== -1) {{ return true; }}{note_clause}
  return false;
}}).slice(0, {int(limit)});
JSON.stringify(matched.map({map_fn}));
"""


def generate_date_window_script(date_kind: str, days_ahead: int, include_overdue: bool, limit: int) -> str:
    """Incomplete tasks whose *date_kind* date falls on or before today + *days_ahead*."""
    overdue_clause = "" if include_overdue else "if (d < now) { return false; }"
    return f"""
{TASK_MAPPER}
{_DATE_READERS[date_kind]}
var now = new Date();
var futureDate = new Date();
futureDate.setDate(futureDate.getDate() + {int(days_ahead)});
futureDate.setHours(23, 59, 59, 999);

var entries = [];
doc.flattenedTasks().forEach(function(t) {{
  if (t.completed()) {{ return; }}
  var d = readDate(t);
  if (!d) {{ return; }}
  {overdue_clause}
  if (d <= futureDate) {{ entries.push({{ task: t, date: d }}); }}
}});
entries.sort(function(a, b) {{ return a.date - b.date; }});
JSON.stringify(entries.slice(0, {int(limit)}).map(function(e) {{ return mapTask(e.task); }}));
"""


def generate_flagged_tasks_script(include_completed: bool, limit: int) -> str:
    completed_clause = "" if include_completed else "if (t.completed()) { return false; }"
    return f"""
{TASK_MAPPER}
var tasks = doc.flattenedTasks().filter(function(t) {{
  if (!t.flagged()) {{ return false; }}
  {completed_clause}
  return true;
}}).slice(0, {int(limit)});
JSON.stringify(tasks.map(mapTask));
"""


def handle_search(params: SearchInput) -> str:
    query = sanitize_input(params.query, SEARCH_QUERY_MAX_LENGTH)
    if params.search_type == SearchType.ALL:
        search_types = list(_SEARCH_TARGETS)
    else:
        search_types = [params.search_type]

    results: Dict[str, List[dict]] = {}
    for search_type in search_types:
        model = _SEARCH_TARGETS[search_type][3]
        script = generate_search_script(search_type, query, params.limit)
        items = parse_list(jxa_client.execute_and_parse_json(script), model)
        results[search_type.value] = [item.to_dict() for item in items]

    total = sum(len(items) for items in results.values())
    if total == 0:
        return f'No results found for "{params.query}".'
    return to_json({"query": params.query, "totalCount": total, "results": results})


def handle_get_due_tasks(params: DateWindowInput) -> str:
    script = generate_date_window_script("due", params.days_ahead, params.include_overdue, params.limit)
    tasks = parse_list(jxa_client.execute_and_parse_json(script), OmniFocusTask)
    return format_listing(
        "tasks", tasks, f"No tasks due within {params.days_ahead} days.", daysAhead=params.days_ahead
    )


def handle_get_flagged_tasks(params: FlaggedTasksInput) -> str:
    script = generate_flagged_tasks_script(params.include_completed, params.limit)
    tasks = parse_list(jxa_client.execute_and_parse_json(script), OmniFocusTask)
    return format_listing("tasks", tasks, "No flagged tasks found.")


def handle_get_planned_tasks(params: DateWindowInput) -> str:
    script = generate_date_window_script("planned", params.days_ahead, params.include_overdue, params.limit)
    tasks = parse_list(jxa_client.execute_and_parse_json(script), OmniFocusTask)
    return format_listing(
        "tasks", tasks, f"No tasks planned within {params.days_ahead} days.", daysAhead=params.days_ahead
    )
