import json

import pytest

from omnifocus_mcp.omnifocus_api.sanitization import SanitizationError
from omnifocus_mcp.schemas import ListFoldersInput, ListInboxInput, ListProjectsInput, ListTagsInput
from omnifocus_mcp.tools import list_tools


class TestListInbox:

    def test_returns_count_and_tasks(self, fake_executor, task_record):
        fake_executor.queue([task_record])

        out = list_tools.handle_list_inbox(ListInboxInput())

        payload = json.loads(out)
        assert payload["count"] == 1
        assert payload["tasks"][0]["name"] == "Write report"
        assert "doc.inboxTasks()" in fake_executor.last_script
        assert "!t.completed()" in fake_executor.last_script
        assert ".slice(0, 50)" in fake_executor.last_script

    def test_include_completed_and_limit(self, fake_executor):
        fake_executor.queue([])

        list_tools.handle_list_inbox(ListInboxInput(include_completed=True, limit=5))

        assert "!t.completed()" not in fake_executor.last_script
        assert ".slice(0, 5)" in fake_executor.last_script

    def test_empty(self, fake_executor):
        fake_executor.queue([])
        assert list_tools.handle_list_inbox(ListInboxInput()) == "No tasks found in inbox."


class TestListProjects:

    def test_status_filter_uses_host_spelling(self, fake_executor, project_record):
        fake_executor.queue([project_record])

        out = list_tools.handle_list_projects(ListProjectsInput(status="onHold"))

        assert '"on hold status"' in fake_executor.last_script
        assert json.loads(out)["projects"][0]["status"] == "active"

    def test_all_statuses_has_no_filter(self, fake_executor):
        fake_executor.queue([])
        list_tools.handle_list_projects(ListProjectsInput(status="all"))
        assert "String(p.status()) ===" not in fake_executor.last_script

    def test_folder_name_is_sanitized(self, fake_executor):
        fake_executor.queue([])
        list_tools.handle_list_projects(ListProjectsInput(folder_name='Work "A"'))
        assert 'Work \\"A\\"' in fake_executor.last_script

    def test_dangerous_folder_name_never_runs(self, fake_executor):
        with pytest.raises(SanitizationError):
            list_tools.handle_list_projects(ListProjectsInput(folder_name="${x}"))
        assert fake_executor.scripts == []

    def test_empty(self, fake_executor):
        fake_executor.queue([])
        assert (
            list_tools.handle_list_projects(ListProjectsInput())
            == "No projects found matching criteria."
        )


class TestListFoldersAndTags:

    def test_active_folders_exclude_hidden(self, fake_executor):
        fake_executor.queue([{"id": "f", "name": "Work", "status": "active"}])

        out = list_tools.handle_list_folders(ListFoldersInput())

        assert "!item.hidden()" in fake_executor.last_script
        assert json.loads(out)["folders"][0]["name"] == "Work"

    def test_dropped_folders_are_hidden(self, fake_executor):
        fake_executor.queue([])
        assert list_tools.handle_list_folders(ListFoldersInput(status="dropped")) == "No folders found."
        assert "return item.hidden();" in fake_executor.last_script

    @pytest.mark.parametrize("status", ["onHold", "dropped"])
    def test_on_hold_and_dropped_tags_are_hidden(self, fake_executor, status):
        fake_executor.queue([])
        assert list_tools.handle_list_tags(ListTagsInput(status=status)) == "No tags found."
        assert "return item.hidden();" in fake_executor.last_script

    def test_all_tags(self, fake_executor):
        fake_executor.queue([{"id": "g", "name": "Urgent", "taskCount": 2}])
        out = list_tools.handle_list_tags(ListTagsInput(status="all"))
        assert "item.hidden()" not in fake_executor.last_script
        assert json.loads(out) == {
            "count": 1,
            "tags": [
                {
                    "id": "g",
                    "name": "Urgent",
                    "status": "active",
                    "taskCount": 2,
                    "allowsNextAction": True,
                    "parentName": None,
                }
            ],
        }
