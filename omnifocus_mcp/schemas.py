"""Input models for the OmniFocus MCP tools.

Wire names are camelCase (``includeCompleted``, ``taskId``) to match what
assistants already send; attribute names stay snake_case.  Unknown fields are
rejected and every bound is declared here, so FastMCP refuses bad calls
before any script is built.
"""

from enum import Enum
from typing import List, Optional

from dateutil.parser import isoparse
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _ToolInput(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _normalize_iso_date(value: Optional[str]) -> Optional[str]:
    """Validate an ISO-8601 string and return it in canonical form."""
    if value is None:
        return None
    try:
        return isoparse(value.strip()).isoformat()
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"'{value}' is not a valid ISO 8601 date") from exc


# ============================================================================
# ENUMS
# ============================================================================

class ProjectStatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    DONE = "done"
    DROPPED = "dropped"
    ON_HOLD = "onHold"


class FolderStatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    DROPPED = "dropped"


class TagStatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    ON_HOLD = "onHold"
    DROPPED = "dropped"


class TaskAction(str, Enum):
    COMPLETE = "complete"
    DROP = "drop"


class SearchType(str, Enum):
    TASKS = "tasks"
    PROJECTS = "projects"
    FOLDERS = "folders"
    TAGS = "tags"
    ALL = "all"


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Weekday(str, Enum):
    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


class RepeatFrom(str, Enum):
    DUE_DATE = "due-date"
    COMPLETION_DATE = "completion-date"


# ============================================================================
# LISTING
# ============================================================================

class ListInboxInput(_ToolInput):
    include_completed: bool = Field(default=False, description="Include completed tasks in results")
    limit: int = Field(default=50, ge=1, le=500, description="Maximum number of tasks to return")


class ListProjectsInput(_ToolInput):
    status: ProjectStatusFilter = Field(
        default=ProjectStatusFilter.ACTIVE, description="Filter by project status"
    )
    folder_name: Optional[str] = Field(
        default=None, description="Filter by folder name (case-insensitive partial match)"
    )
    limit: int = Field(default=50, ge=1, le=500, description="Maximum number of projects to return")


class ListFoldersInput(_ToolInput):
    status: FolderStatusFilter = Field(
        default=FolderStatusFilter.ACTIVE, description="Filter by folder status"
    )
    limit: int = Field(default=50, ge=1, le=200, description="Maximum number of folders to return")


class ListTagsInput(_ToolInput):
    status: TagStatusFilter = Field(default=TagStatusFilter.ACTIVE, description="Filter by tag status")
    limit: int = Field(default=50, ge=1, le=200, description="Maximum number of tags to return")


# ============================================================================
# TASKS
# ============================================================================

class RecurrenceInput(_ToolInput):
    frequency: Frequency = Field(..., description="Recurrence frequency")
    interval: int = Field(
        default=1, ge=1, description="Interval between repetitions (e.g., every 2 weeks)"
    )
    days_of_week: Optional[List[Weekday]] = Field(
        default=None, description="Days of week for weekly recurrence (e.g., ['Monday', 'Friday'])"
    )
    day_of_month: Optional[int] = Field(
        default=None, ge=1, le=31, description="Day of month for monthly recurrence (1-31)"
    )
    month_of_year: Optional[int] = Field(
        default=None, ge=1, le=12, description="Month of year for yearly recurrence (1-12)"
    )
    repeat_from: RepeatFrom = Field(
        default=RepeatFrom.DUE_DATE,
        description="Whether to repeat from due date or completion date",
    )


class CreateTaskInput(_ToolInput):
    name: str = Field(..., min_length=1, max_length=500, description="The task name/title")
    note: Optional[str] = Field(
        default=None, max_length=10000, description="Optional note/description for the task"
    )
    project_name: Optional[str] = Field(
        default=None,
        description="Name of project to add task to (creates in inbox if not specified)",
    )
    parent_task_id: Optional[str] = Field(
        default=None, description="ID of parent task to create this as a subtask"
    )
    due_date: Optional[str] = Field(
        default=None, description="Due date in ISO 8601 format (e.g., '2024-12-31T17:00:00')"
    )
    defer_date: Optional[str] = Field(default=None, description="Defer/start date in ISO 8601 format")
    planned_date: Optional[str] = Field(
        default=None,
        description="Planned date in ISO 8601 format - when you intend to work on the task",
    )
    flagged: bool = Field(default=False, description="Whether to flag the task")
    estimated_minutes: Optional[int] = Field(
        default=None, ge=1, le=9999, description="Estimated time in minutes"
    )
    tag_names: Optional[List[str]] = Field(
        default=None, max_length=100, description="Array of tag names to apply"
    )
    recurrence: Optional[RecurrenceInput] = Field(
        default=None, description="Recurrence pattern for repeating tasks"
    )

    @field_validator("due_date", "defer_date", "planned_date")
    @classmethod
    def _validate_dates(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_iso_date(value)


class _TaskReference(_ToolInput):
    task_id: Optional[str] = Field(
        default=None,
        description="The task ID. Takes priority if both taskId and taskName are provided.",
    )
    task_name: Optional[str] = Field(
        default=None, description="The task name to search for. Used if taskId is not provided."
    )

    @model_validator(mode="after")
    def _require_task_reference(self):
        if not self.task_id and not self.task_name:
            raise ValueError("Either taskId or taskName must be provided")
        return self


class CompleteTaskInput(_TaskReference):
    action: TaskAction = Field(
        default=TaskAction.COMPLETE,
        description="'complete' marks the task done, 'drop' marks it as dropped/cancelled",
    )


class TaskTagInput(_TaskReference):
    tag_name: str = Field(..., min_length=1, description="The name of the tag")


# ============================================================================
# QUERIES
# ============================================================================

class SearchInput(_ToolInput):
    query: str = Field(..., min_length=1, max_length=200, description="Search query string")
    search_type: SearchType = Field(default=SearchType.ALL, description="Type of items to search")
    limit: int = Field(default=20, ge=1, le=100, description="Maximum results per type")


class DateWindowInput(_ToolInput):
    days_ahead: int = Field(
        default=7, ge=0, le=365, description="Number of days ahead to look (0 = today only)"
    )
    include_overdue: bool = Field(default=True, description="Include overdue tasks")
    limit: int = Field(default=50, ge=1, le=500, description="Maximum tasks to return")


class FlaggedTasksInput(_ToolInput):
    include_completed: bool = Field(default=False, description="Include completed tasks")
    limit: int = Field(default=50, ge=1, le=500, description="Maximum tasks to return")


# ============================================================================
# REVIEW
# ============================================================================

class ProjectsForReviewInput(_ToolInput):
    days_ahead: int = Field(
        default=0,
        ge=0,
        le=365,
        description="Include projects due for review within this many days (0 = overdue only)",
    )
    status: ProjectStatusFilter = Field(
        default=ProjectStatusFilter.ACTIVE, description="Filter by project status"
    )
    limit: int = Field(default=50, ge=1, le=500, description="Maximum number of projects to return")


class MarkProjectReviewedInput(_ToolInput):
    project_id: Optional[str] = Field(
        default=None,
        description="The project ID. Takes priority if both projectId and projectName are provided.",
    )
    project_name: Optional[str] = Field(
        default=None, description="The project name to search for. Used if projectId is not provided."
    )
    review_interval_days: Optional[int] = Field(
        default=None,
        ge=1,
        le=365,
        description="New review interval in days (keeps the project's interval if omitted)",
    )

    @model_validator(mode="after")
    def _require_project_reference(self):
        if not self.project_id and not self.project_name:
            raise ValueError("Either projectId or projectName must be provided")
        return self


class BatchMarkReviewedInput(_ToolInput):
    project_ids: List[str] = Field(
        ..., min_length=1, max_length=100, description="IDs of the projects to mark as reviewed"
    )
    review_interval_days: Optional[int] = Field(
        default=None,
        ge=1,
        le=365,
        description="New review interval in days applied to every project",
    )
