"""Project review tools: find projects due for review and mark them reviewed."""
from typing import Optional

from ..omnifocus_api import jxa_client
from ..omnifocus_api.batch_operations import run_batch
from ..omnifocus_api.data_models import OmniFocusProject, parse_list
from ..omnifocus_api.lookups import PROJECT, find_by_id, find_by_id_or_name
from ..omnifocus_api.mappers import PROJECT_MAPPER
from ..omnifocus_api.sanitization import sanitize_input
from ..schemas import (
    BatchMarkReviewedInput,
    MarkProjectReviewedInput,
    ProjectsForReviewInput,
    ProjectStatusFilter,
)
from .list_tools import project_status_filter
from .responses import format_listing, format_record

DEFAULT_REVIEW_INTERVAL_DAYS = 7

# Converts a JXA review interval record ({unit: "week", steps: 2}) to days.
_INTERVAL_DAYS = r"""
function reviewIntervalDays(ri, fallback) {
  if (!ri || !ri.steps) { return fallback; }
  var unitDays = { day: 1, days: 1, week: 7, weeks: 7, month: 30, months: 30, year: 365, years: 365 };
  var perUnit = unitDays[String(ri.unit).toLowerCase()];
  return perUnit ? ri.steps * perUnit : fallback;
}
"""


def generate_projects_for_review_script(
    status: ProjectStatusFilter, days_ahead: int, limit: int
) -> str:
    """Projects whose next review date is at or before now + *days_ahead* days, soonest first."""
    return f"""
{PROJECT_MAPPER}
var cutoff = new Date(new Date().getTime() + {int(days_ahead)} * 86400000);
var entries = [];
doc.flattenedProjects(){project_status_filter(status)}.forEach(function(p) {{
  var nextReview = null;
  try {{ nextReview = p.nextReviewDate(); }} catch(e) {{ return; }}
  if (nextReview && nextReview <= cutoff) {{ entries.push({{ project: p, date: nextReview }}); }}
}});
entries.sort(function(a, b) {{ return a.date - b.date; }});
JSON.stringify(entries.slice(0, {int(limit)}).map(function(e) {{ return mapProject(e.project); }}));
"""


def generate_mark_reviewed_script(lookup: str, review_interval_days: Optional[int]) -> str:
    """Mark the project bound by *lookup* (a lookups fragment) as reviewed now.

    With *review_interval_days* the interval is stored on the project; either
    way the next review date becomes now + interval.
    """
    if review_interval_days:
        interval = f"""
project.reviewInterval = {{ unit: "day", steps: {int(review_interval_days)} }};
var intervalDays = {int(review_interval_days)};"""
    else:
        interval = f"""
var intervalDays = {DEFAULT_REVIEW_INTERVAL_DAYS};
try {{ intervalDays = reviewIntervalDays(project.reviewInterval(), intervalDays); }} catch(e) {{}}"""
    return f"""
{PROJECT_MAPPER}
{_INTERVAL_DAYS}
{lookup}
var now = new Date();
{interval}
project.lastReviewDate = now;
project.nextReviewDate = new Date(now.getTime() + intervalDays * 86400000);
JSON.stringify(mapProject(project));
"""


def mark_project_reviewed_by_id(project_id: str, review_interval_days: Optional[int]) -> OmniFocusProject:
    """Mark one project reviewed; *project_id* is raw caller input."""
    lookup = find_by_id("project", PROJECT, sanitize_input(project_id))
    script = generate_mark_reviewed_script(lookup, review_interval_days)
    return OmniFocusProject.from_dict(jxa_client.execute_and_parse_json(script))


def handle_get_projects_for_review(params: ProjectsForReviewInput) -> str:
    script = generate_projects_for_review_script(params.status, params.days_ahead, params.limit)
    projects = parse_list(jxa_client.execute_and_parse_json(script), OmniFocusProject)
    return format_listing(
        "projects", projects, "No projects need review.", daysAhead=params.days_ahead
    )


def handle_mark_project_reviewed(params: MarkProjectReviewedInput) -> str:
    project_id = sanitize_input(params.project_id) if params.project_id else None
    project_name = sanitize_input(params.project_name) if params.project_name else None
    lookup = find_by_id_or_name("project", PROJECT, project_id, project_name)
    script = generate_mark_reviewed_script(lookup, params.review_interval_days)
    project = OmniFocusProject.from_dict(jxa_client.execute_and_parse_json(script))
    return format_record("Project marked as reviewed", project)


def handle_batch_mark_reviewed(params: BatchMarkReviewedInput) -> str:
    result = run_batch(
        params.project_ids,
        lambda project_id: mark_project_reviewed_by_id(project_id, params.review_interval_days),
    )
    return format_record("Batch review complete", result)
