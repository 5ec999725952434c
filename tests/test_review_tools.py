import json

import pytest

from omnifocus_mcp.omnifocus_api.batch_operations import BatchResult, run_batch
from omnifocus_mcp.omnifocus_api.jxa_client import OmniFocusNotRunningError, OmniFocusScriptError
from omnifocus_mcp.schemas import BatchMarkReviewedInput, MarkProjectReviewedInput, ProjectsForReviewInput
from omnifocus_mcp.tools import review_tools


def _batch_payload(out):
    headline = "Batch review complete:\n"
    assert out.startswith(headline)
    return json.loads(out[len(headline):])


class TestProjectsForReview:

    def test_lists_due_projects(self, fake_executor, project_record):
        fake_executor.queue([project_record])

        out = review_tools.handle_get_projects_for_review(ProjectsForReviewInput(days_ahead=14))

        payload = json.loads(out)
        assert payload["count"] == 1
        assert payload["daysAhead"] == 14
        assert payload["projects"][0]["nextReviewDate"] == "2026-10-25T09:00:00.000Z"
        script = fake_executor.last_script
        assert "new Date().getTime() + 14 * 86400000" in script
        assert '"active status"' in script
        assert "nextReview <= cutoff" in script
        assert "entries.sort(function(a, b) { return a.date - b.date; });" in script

    def test_empty(self, fake_executor):
        fake_executor.queue([])
        out = review_tools.handle_get_projects_for_review(ProjectsForReviewInput(status="all"))
        assert out == "No projects need review."
        assert "String(p.status()) ===" not in fake_executor.last_script


class TestMarkReviewed:

    def test_with_interval(self, fake_executor, project_record):
        fake_executor.queue(project_record)

        out = review_tools.handle_mark_project_reviewed(
            MarkProjectReviewedInput(project_id="proj-1", review_interval_days=14)
        )

        assert out.startswith("Project marked as reviewed:\n")
        script = fake_executor.last_script
        assert 'item.id() === "proj-1"' in script
        assert 'project.reviewInterval = { unit: "day", steps: 14 };' in script
        assert "project.lastReviewDate = now;" in script
        assert "project.nextReviewDate = new Date(now.getTime() + intervalDays * 86400000);" in script

    def test_keeps_existing_interval(self, fake_executor, project_record):
        fake_executor.queue(project_record)

        review_tools.handle_mark_project_reviewed(MarkProjectReviewedInput(project_name="Quarterly"))

        script = fake_executor.last_script
        assert "project.reviewInterval =" not in script
        assert "reviewIntervalDays(project.reviewInterval(), intervalDays)" in script
        assert "No project found matching name: Quarterly" in script

    def test_lookup_failure_propagates(self, fake_executor):
        fake_executor.queue(OmniFocusScriptError("OmniFocus script error: Error: Project not found with ID: nope"))

        with pytest.raises(OmniFocusScriptError, match="Project not found with ID: nope"):
            review_tools.handle_mark_project_reviewed(MarkProjectReviewedInput(project_id="nope"))


class TestBatchMarkReviewed:

    def test_partial_failures_are_isolated(self, fake_executor, project_record):
        fake_executor.queue(
            dict(project_record, id="p1"),
            OmniFocusScriptError("OmniFocus script error: Error: Project not found with ID: p2"),
            dict(project_record, id="p3"),
        )

        out = review_tools.handle_batch_mark_reviewed(
            BatchMarkReviewedInput(project_ids=["p1", "p2", "p3"], review_interval_days=7)
        )

        payload = _batch_payload(out)
        assert payload["totalRequested"] == 3
        assert payload["successCount"] == 2
        assert payload["failureCount"] == 1
        assert [p["id"] for p in payload["successful"]] == ["p1", "p3"]
        assert payload["failed"] == [
            {"projectId": "p2", "error": "OmniFocus script error: Error: Project not found with ID: p2"}
        ]
        assert len(fake_executor.scripts) == 3
        assert all("steps: 7" in script for script in fake_executor.scripts)

    def test_all_failures_do_not_raise(self, fake_executor):
        fake_executor.queue(OmniFocusNotRunningError(), OmniFocusNotRunningError())

        payload = _batch_payload(
            review_tools.handle_batch_mark_reviewed(BatchMarkReviewedInput(project_ids=["a", "b"]))
        )

        assert payload["successCount"] == 0
        assert payload["failureCount"] == 2
        assert payload["successful"] == []

    def test_unsafe_id_fails_only_that_item(self, fake_executor, project_record):
        fake_executor.queue(project_record)

        payload = _batch_payload(
            review_tools.handle_batch_mark_reviewed(
                BatchMarkReviewedInput(project_ids=["__proto__", "proj-1"])
            )
        )

        assert payload["failed"][0]["projectId"] == "__proto__"
        assert "prototype pollution" in payload["failed"][0]["error"]
        assert payload["successCount"] == 1
        assert len(fake_executor.scripts) == 1


class TestRunBatch:

    def test_unexpected_errors_propagate(self):
        def _boom(item_id):
            raise KeyError(item_id)

        with pytest.raises(KeyError):
            run_batch(["x"], _boom)

    def test_empty_result(self):
        result = BatchResult()
        assert result.to_dict() == {
            "totalRequested": 0,
            "successCount": 0,
            "failureCount": 0,
            "successful": [],
            "failed": [],
        }
