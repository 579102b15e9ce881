# Project operations scoped to the authenticated owner
# A project that does not exist or belongs to someone else is reported as None

import logging
from typing import Any, Dict, List, Optional

from ideor import database
from ideor.entities import Project, utc_now

logger = logging.getLogger(__name__)

# Fields a client may set on create/update
EDITABLE_FIELDS = (
    "name",
    "description",
    "score",
    "valuation",
    "progress_breakdown",
    "current_phase",
    "category",
    "generated_options",
    "product_structure",
    "target_audience",
)


class ProjectService:
    def __init__(self, db=database):
        self.db = db

    async def get(self, project_id: str, user_id: str) -> Optional[Project]:
        project = await self.db.get_project(user_id, project_id)
        if project is None or project.owner_id != user_id:
            return None
        return project

    async def list_for_user(self, user_id: str) -> List[Project]:
        projects = await self.db.list_projects(user_id)
        owned = [p for p in projects if p.owner_id == user_id]
        return sorted(owned, key=lambda p: p.updated_at, reverse=True)

    async def count_tasks(self, project_id: str, user_id: str) -> int:
        return len(await self.db.list_tasks(user_id, project_id))

    async def create(self, user_id: str, fields: Dict[str, Any]) -> Project:
        values = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS and v is not None}
        project = Project(owner_id=user_id, **values)
        await self.db.save_project(user_id, project)
        logger.info(f"Created project {project.id} for user {user_id}")
        return project

    async def update(self, project_id: str, user_id: str, changes: Dict[str, Any]) -> Optional[Project]:
        """Apply the non-None fields of ``changes``."""
        project = await self.get(project_id, user_id)
        if project is None:
            return None

        values = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS and v is not None}
        updated = project.model_copy(update={**values, "updated_at": utc_now()})
        await self.db.save_project(user_id, updated)
        return updated

    async def delete(self, project_id: str, user_id: str) -> bool:
        project = await self.get(project_id, user_id)
        if project is None:
            return False
        await self.db.delete_project(user_id, project_id)
        logger.info(f"Deleted project {project_id} for user {user_id}")
        return True

    async def change_phase(self, project_id: str, user_id: str, new_phase: str) -> Optional[Project]:
        return await self.update(project_id, user_id, {"current_phase": new_phase})

    async def update_progress(self, project_id: str, user_id: str,
                              progress: Dict[str, Any]) -> Optional[Project]:
        project = await self.get(project_id, user_id)
        if project is None:
            return None
        updated = project.model_copy(update={"progress_breakdown": dict(progress or {}),
                                             "updated_at": utc_now()})
        await self.db.save_project(user_id, updated)
        return updated

    async def save_generated_options(self, project_id: str, user_id: str,
                                     ideas: List[str]) -> Optional[Project]:
        """Store idea suggestions on the project; runs after the response is sent."""
        project = await self.update(project_id, user_id, {"generated_options": list(ideas)})
        if project is None:
            logger.warning(f"Could not store generated ideas: project {project_id} not found for {user_id}")
        return project
