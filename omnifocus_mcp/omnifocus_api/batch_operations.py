"""
Bulk operations on OmniFocus data.

Items are processed one at a time, one script per item: every call hits the
same running OmniFocus, so there is nothing to gain from running them in
parallel.  A failing item is recorded and the loop moves on.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List

from ..utils.logger import get_logger
from .jxa_client import OmniFocusError
from .sanitization import SanitizationError

log = get_logger(__name__)


@dataclass
class BatchFailure:
    project_id: str
    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"projectId": self.project_id, "error": self.error}


@dataclass
class BatchResult:
    successful: List[Any] = field(default_factory=list)
    failed: List[BatchFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.successful) + len(self.failed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRequested": self.total,
            "successCount": len(self.successful),
            "failureCount": len(self.failed),
            "successful": [item.to_dict() for item in self.successful],
            "failed": [failure.to_dict() for failure in self.failed],
        }


def run_batch(item_ids: Iterable[str], operation: Callable[[str], Any]) -> BatchResult:
    """Fold *operation* over *item_ids* into a :class:`BatchResult`.

    Only OmniFocus and sanitization failures are isolated per item; anything
    else is a programming error and propagates.
    """
    result = BatchResult()
    for item_id in item_ids:
        try:
            result.successful.append(operation(item_id))
        except (OmniFocusError, SanitizationError) as exc:
            log.warning("Batch item %s failed: %s", item_id, exc)
            result.failed.append(BatchFailure(project_id=item_id, error=str(exc)))
    log.info(
        "Batch finished: %d succeeded, %d failed", len(result.successful), len(result.failed)
    )
    return result
