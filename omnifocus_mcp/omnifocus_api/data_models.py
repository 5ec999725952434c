"""
Data models representing OmniFocus objects (tasks, projects, folders, tags).

Records are rebuilt from the JSON printed by the mapper snippets on every
call; keys are camelCase on both sides so the caller sees the same shape the
scripts emit.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .jxa_client import OmniFocusResponseError


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    ON_HOLD = "onHold"
    DONE = "done"
    DROPPED = "dropped"
    UNKNOWN = "unknown"


class ItemStatus(str, Enum):
    """Status of folders and tags, derived from their hidden flag."""
    ACTIVE = "active"
    DROPPED = "dropped"


# Spellings returned by String(project.status()) in JXA.
_HOST_PROJECT_STATUS = {
    "active status": ProjectStatus.ACTIVE,
    "on hold status": ProjectStatus.ON_HOLD,
    "done status": ProjectStatus.DONE,
    "dropped status": ProjectStatus.DROPPED,
}


def normalize_project_status(raw: Optional[str]) -> ProjectStatus:
    if not raw:
        return ProjectStatus.UNKNOWN
    text = str(raw).strip()
    if text in _HOST_PROJECT_STATUS:
        return _HOST_PROJECT_STATUS[text]
    try:
        return ProjectStatus(text)
    except ValueError:
        return ProjectStatus.UNKNOWN


def _item_status(raw: Any, kind: str) -> ItemStatus:
    try:
        return ItemStatus(raw or "active")
    except ValueError as exc:
        raise OmniFocusResponseError(f"Unexpected OmniFocus {kind} status: {raw!r}") from exc


def _require(data: Mapping[str, Any], key: str, kind: str) -> Any:
    if key not in data:
        raise OmniFocusResponseError(f"OmniFocus {kind} record is missing '{key}': {dict(data)}")
    return data[key]


def _record(data: Any, kind: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise OmniFocusResponseError(f"Expected an OmniFocus {kind} object, got: {data!r}")
    return data


@dataclass
class OmniFocusTask:
    id: str
    name: str
    note: str = ""
    completed: bool = False
    dropped: bool = False
    flagged: bool = False
    due_date: Optional[str] = None
    defer_date: Optional[str] = None
    planned_date: Optional[str] = None
    estimated_minutes: Optional[int] = None
    tags: List[str] = field(default_factory=list)
    project_name: Optional[str] = None
    in_inbox: bool = False
    repetition_rule: Optional[str] = None
    repetition_method: Optional[str] = None
    parent_task_id: Optional[str] = None
    parent_task_name: Optional[str] = None
    has_children: bool = False
    child_task_count: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "OmniFocusTask":
        data = _record(data, "task")
        child_count = int(data.get("childTaskCount") or 0)
        return cls(
            id=str(_require(data, "id", "task")),
            name=str(_require(data, "name", "task")),
            note=data.get("note") or "",
            completed=bool(data.get("completed", False)),
            dropped=bool(data.get("dropped", False)),
            flagged=bool(data.get("flagged", False)),
            due_date=data.get("dueDate"),
            defer_date=data.get("deferDate"),
            planned_date=data.get("plannedDate"),
            estimated_minutes=data.get("estimatedMinutes"),
            tags=list(data.get("tags") or []),
            project_name=data.get("projectName"),
            in_inbox=bool(data.get("inInbox", False)),
            repetition_rule=data.get("repetitionRule"),
            repetition_method=data.get("repetitionMethod"),
            parent_task_id=data.get("parentTaskId"),
            parent_task_name=data.get("parentTaskName"),
            has_children=bool(data.get("hasChildren", child_count > 0)),
            child_task_count=child_count,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "note": self.note,
            "completed": self.completed,
            "dropped": self.dropped,
            "flagged": self.flagged,
            "dueDate": self.due_date,
            "deferDate": self.defer_date,
            "plannedDate": self.planned_date,
            "estimatedMinutes": self.estimated_minutes,
            "tags": list(self.tags),
            "projectName": self.project_name,
            "inInbox": self.in_inbox,
            "repetitionRule": self.repetition_rule,
            "repetitionMethod": self.repetition_method,
            "parentTaskId": self.parent_task_id,
            "parentTaskName": self.parent_task_name,
            "hasChildren": self.has_children,
            "childTaskCount": self.child_task_count,
        }


@dataclass
class OmniFocusProject:
    id: str
    name: str
    note: str = ""
    status: ProjectStatus = ProjectStatus.UNKNOWN
    completed: bool = False
    flagged: bool = False
    due_date: Optional[str] = None
    defer_date: Optional[str] = None
    folder_name: Optional[str] = None
    task_count: int = 0
    sequential: bool = False
    next_review_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "OmniFocusProject":
        data = _record(data, "project")
        return cls(
            id=str(_require(data, "id", "project")),
            name=str(_require(data, "name", "project")),
            note=data.get("note") or "",
            status=normalize_project_status(data.get("status")),
            completed=bool(data.get("completed", False)),
            flagged=bool(data.get("flagged", False)),
            due_date=data.get("dueDate"),
            defer_date=data.get("deferDate"),
            folder_name=data.get("folderName"),
            task_count=int(data.get("taskCount") or 0),
            sequential=bool(data.get("sequential", False)),
            next_review_date=data.get("nextReviewDate"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "note": self.note,
            "status": self.status.value,
            "completed": self.completed,
            "flagged": self.flagged,
            "dueDate": self.due_date,
            "deferDate": self.defer_date,
            "folderName": self.folder_name,
            "taskCount": self.task_count,
            "sequential": self.sequential,
            "nextReviewDate": self.next_review_date,
        }


@dataclass
class OmniFocusFolder:
    id: str
    name: str
    status: ItemStatus = ItemStatus.ACTIVE
    project_count: int = 0
    folder_count: int = 0
    parent_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "OmniFocusFolder":
        data = _record(data, "folder")
        return cls(
            id=str(_require(data, "id", "folder")),
            name=str(_require(data, "name", "folder")),
            status=_item_status(data.get("status"), "folder"),
            project_count=int(data.get("projectCount") or 0),
            folder_count=int(data.get("folderCount") or 0),
            parent_name=data.get("parentName"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "projectCount": self.project_count,
            "folderCount": self.folder_count,
            "parentName": self.parent_name,
        }


@dataclass
class OmniFocusTag:
    id: str
    name: str
    status: ItemStatus = ItemStatus.ACTIVE
    task_count: int = 0
    allows_next_action: bool = True
    parent_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "OmniFocusTag":
        data = _record(data, "tag")
        return cls(
            id=str(_require(data, "id", "tag")),
            name=str(_require(data, "name", "tag")),
            status=_item_status(data.get("status"), "tag"),
            task_count=int(data.get("taskCount") or 0),
            allows_next_action=bool(data.get("allowsNextAction", True)),
            parent_name=data.get("parentName"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status.value,
            "taskCount": self.task_count,
            "allowsNextAction": self.allows_next_action,
            "parentName": self.parent_name,
        }


def parse_list(data: Any, model: type) -> list:
    """Deserialize a JSON array of records into *model* instances."""
    if not isinstance(data, list):
        raise OmniFocusResponseError(f"Expected a JSON array from OmniFocus, got: {data!r}")
    return [model.from_dict(item) for item in data]
