"""Shared fixtures for the OmniFocus MCP test suite."""

import json

import pytest

from omnifocus_mcp.omnifocus_api import jxa_client


class FakeExecutor:
    """Stands in for ``jxa_client.execute_omnifocus_script``.

    Records every script it is given and replays queued responses in order.
    A queued exception is raised instead of returned; Python objects are
    JSON-encoded the way a script's ``JSON.stringify`` output would be.
    """

    def __init__(self):
        self.scripts = []
        self._responses = []

    def queue(self, *responses):
        self._responses.extend(responses)
        return self

    @property
    def last_script(self):
        return self.scripts[-1]

    def __call__(self, script):
        self.scripts.append(script)
        if not self._responses:
            raise AssertionError("FakeExecutor called with no queued response")
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, str):
            return response
        return json.dumps(response)


@pytest.fixture
def fake_executor(monkeypatch):
    executor = FakeExecutor()
    monkeypatch.setattr(jxa_client, "execute_omnifocus_script", executor)
    return executor


@pytest.fixture
def task_record():
    return {
        "id": "task-1",
        "name": "Write report",
        "note": "",
        "completed": False,
        "dropped": False,
        "flagged": True,
        "dueDate": "2026-10-20T17:00:00.000Z",
        "deferDate": None,
        "plannedDate": None,
        "estimatedMinutes": 30,
        "tags": ["Work"],
        "projectName": "Quarterly",
        "inInbox": False,
        "repetitionRule": None,
        "repetitionMethod": None,
        "parentTaskId": None,
        "parentTaskName": None,
        "hasChildren": False,
        "childTaskCount": 0,
    }


@pytest.fixture
def project_record():
    return {
        "id": "proj-1",
        "name": "Quarterly",
        "note": "",
        "status": "active status",
        "completed": False,
        "flagged": False,
        "dueDate": None,
        "deferDate": None,
        "folderName": "Work",
        "taskCount": 4,
        "sequential": False,
        "nextReviewDate": "2026-10-25T09:00:00.000Z",
    }
