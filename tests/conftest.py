import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeDatabase:
    """In-memory stand-in for ideor.database with the same async functions."""

    def __init__(self):
        self.projects = {}
        self.tasks = {}
        self.evaluations = {}

    async def get_project(self, user_id, project_id):
        return self.projects.get((user_id, project_id))

    async def list_projects(self, user_id):
        return [p for (uid, _), p in self.projects.items() if uid == user_id]

    async def save_project(self, user_id, project):
        self.projects[(user_id, project.id)] = project
        return project

    async def delete_project(self, user_id, project_id):
        self.projects.pop((user_id, project_id), None)
        task_ids = [tid for (uid, tid), t in self.tasks.items() if uid == user_id and t.project_id == project_id]
        for task_id in task_ids:
            del self.tasks[(user_id, task_id)]
            for key in [k for k, e in self.evaluations.items() if k[0] == user_id and e.task_id == task_id]:
                del self.evaluations[key]

    async def get_task(self, user_id, task_id):
        return self.tasks.get((user_id, task_id))

    async def list_tasks(self, user_id, project_id):
        return [t for (uid, _), t in self.tasks.items() if uid == user_id and t.project_id == project_id]

    async def save_task(self, user_id, task):
        self.tasks[(user_id, task.id)] = task
        return task

    async def add_evaluation(self, user_id, evaluation):
        self.evaluations[(user_id, evaluation.id)] = evaluation
        return evaluation

    async def list_evaluations(self, user_id, task_id):
        found = [e for (uid, _), e in self.evaluations.items() if uid == user_id and e.task_id == task_id]
        return sorted(found, key=lambda e: e.created_at)


class FakeWriter:
    """DocumentWriter replacement returning canned model output."""
    model_name = "gemini-test"

    def __init__(self, reply='```json\n{"resumo": "ok"}\n```'):
        self.reply = reply
        self.prompts = []

    async def write(self, prompt):
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def fake_writer():
    return FakeWriter()
