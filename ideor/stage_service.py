# Stage tasks of a project and the rules for moving through the workflow

import logging
from typing import Any, Dict, List, Optional

from ideor import database
from ideor.entities import ProjectTask, TaskStatus, utc_now
from ideor.errors import ValidationFailedError
from ideor.project_service import ProjectService
from ideor.prompts.stages import DOCUMENT_STAGES

logger = logging.getLogger(__name__)

# Phase 2 stage keys in workflow order
PHASE2_STAGES = [stage.value for stage in DOCUMENT_STAGES]

REQUIRED_EVALUATED_TASKS = len(PHASE2_STAGES)

TASK_EDITABLE_FIELDS = ("title", "description", "phase", "content", "status", "evaluation_result")


def _stage_index(phase: str) -> int:
    return PHASE2_STAGES.index(phase) if phase in PHASE2_STAGES else len(PHASE2_STAGES)


class StageService:
    def __init__(self, db=database, projects: Optional[ProjectService] = None):
        self.db = db
        self.projects = projects or ProjectService(db)

    async def create_task(self, project_id: str, user_id: str, fields: Dict[str, Any]) -> Optional[ProjectTask]:
        project = await self.projects.get(project_id, user_id)
        if project is None:
            logger.warning(f"User {user_id} not authorized for project {project_id}")
            return None

        values = {k: v for k, v in fields.items() if k in TASK_EDITABLE_FIELDS and v is not None}
        if "status" in values:
            values["status"] = self._parse_status(values["status"])
        task = ProjectTask(project_id=project_id, **values)
        await self.db.save_task(user_id, task)
        logger.info(f"Task {task.id} created for project {project_id}")
        return task

    async def get_task(self, task_id: str, user_id: str) -> Optional[ProjectTask]:
        task = await self.db.get_task(user_id, task_id)
        if task is None:
            return None
        if await self.projects.get(task.project_id, user_id) is None:
            logger.warning(f"User {user_id} not authorized for task {task_id}")
            return None
        return task

    async def list_tasks(self, project_id: str, user_id: str) -> Optional[List[ProjectTask]]:
        """Tasks ordered by phase then creation time; None when the project is not accessible."""
        if await self.projects.get(project_id, user_id) is None:
            return None
        tasks = await self.db.list_tasks(user_id, project_id)
        return sorted(tasks, key=lambda t: (t.phase, t.created_at))

    async def count_evaluations(self, task_id: str, user_id: str) -> int:
        return len(await self.db.list_evaluations(user_id, task_id))

    async def update_task(self, task_id: str, user_id: str, changes: Dict[str, Any]) -> Optional[ProjectTask]:
        task = await self.get_task(task_id, user_id)
        if task is None:
            return None

        values = {k: v for k, v in changes.items() if k in TASK_EDITABLE_FIELDS and v is not None}
        if "status" in values:
            values["status"] = self._parse_status(values["status"])
        updated = task.model_copy(update={**values, "updated_at": utc_now()})
        await self.db.save_task(user_id, updated)
        return updated

    async def change_status(self, task_id: str, user_id: str, new_status: str) -> Optional[ProjectTask]:
        status = self._parse_status(new_status)
        return await self.update_task(task_id, user_id, {"status": status})

    @staticmethod
    def _parse_status(value) -> TaskStatus:
        try:
            return TaskStatus(value)
        except ValueError:
            valid = ", ".join(s.value for s in TaskStatus)
            raise ValidationFailedError(f"Invalid status '{value}'. Must be one of: {valid}")

    async def can_advance(self, project_id: str, user_id: str) -> bool:
        project = await self.projects.get(project_id, user_id)
        if project is None:
            return False

        if project.current_phase == "fase1":
            return bool((project.name or "").strip())

        if project.current_phase == "fase2":
            tasks = await self.db.list_tasks(user_id, project_id)
            evaluated = sum(1 for t in tasks if t.status == TaskStatus.EVALUATED)
            return evaluated >= REQUIRED_EVALUATED_TASKS

        return False

    async def next_stage(self, project_id: str, user_id: str) -> Optional[str]:
        """
        The stage the user should work on next.

        The first stage without a task wins; once every stage has a task, the
        earliest one not yet evaluated. None when all stages are evaluated.
        """
        tasks = await self.list_tasks(project_id, user_id)
        if tasks is None:
            return None

        stage_tasks = [t for t in tasks if t.phase in PHASE2_STAGES]
        existing = {t.phase for t in stage_tasks}
        for stage in PHASE2_STAGES:
            if stage not in existing:
                return stage

        pending = sorted((t for t in stage_tasks if t.status != TaskStatus.EVALUATED),
                         key=lambda t: _stage_index(t.phase))
        return pending[0].phase if pending else None
