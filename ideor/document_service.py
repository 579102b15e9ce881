"""
Generation of stage documents through Gemini.

Each call renders the stage prompt, sends it to the DocumentWriter, stores
the (fence-stripped) output as the stage task's content and records the
exchange as an IaEvaluation.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional

from ideor import database
from ideor.entities import IaEvaluation, ProjectTask, TaskStatus
from ideor.llm import DocumentWriter
from ideor.normalizer import strip_fences
from ideor.prompts.builder import PromptVariant, build_prompt, build_refine_prompt, configured_variant
from ideor.prompts.stages import STAGE_TITLES, parse_document_stage
from ideor.stage_service import StageService

logger = logging.getLogger(__name__)


def estimate_tokens(text: str) -> int:
    """Rough token count (about four characters per token)."""
    return len(text or "") // 4


def parse_output(content: str) -> Any:
    """Parsed JSON document, or the raw text wrapped as {"raw": ...} when it is not JSON."""
    try:
        return json.loads(content)
    except (json.JSONDecodeError, TypeError):
        return {"raw": content}


class DocumentService:
    def __init__(self, writer: DocumentWriter, stages: Optional[StageService] = None,
                 db=database, variant: Optional[PromptVariant] = None):
        self.writer = writer
        self.db = db
        self.stages = stages or StageService(db)
        self.variant = variant or configured_variant()

    async def _record(self, user_id: str, task_id: str, prompt: str, content: str) -> IaEvaluation:
        evaluation = IaEvaluation(
            task_id=task_id,
            input_text=prompt,
            output_json=parse_output(content),
            model_used=self.writer.model_name,
            tokens_used=estimate_tokens(prompt + content),
        )
        return await self.db.add_evaluation(user_id, evaluation)

    async def generate(self, project_id: str, user_id: str, stage: str,
                       inputs: Mapping[str, str]) -> Optional[ProjectTask]:
        """
        Generate the document for ``stage`` and store it as a new evaluated task.

        Raises UnknownStageError for a stage outside etapa1..etapa7; returns None
        when the project is not accessible to the user.
        """
        stage = parse_document_stage(stage)
        if await self.stages.projects.get(project_id, user_id) is None:
            return None

        logger.info(f"Generating {stage.value} document for project {project_id} ({self.variant.value} prompts)")
        prompt = build_prompt(stage, inputs, self.variant)
        content = strip_fences(await self.writer.write(prompt))

        title = STAGE_TITLES[stage]
        task = await self.stages.create_task(project_id, user_id, {
            "title": title,
            "description": f"Documento gerado automaticamente para a {title}",
            "phase": stage.value,
            "content": content,
            "status": TaskStatus.EVALUATED,
        })
        if task is None:
            return None

        await self._record(user_id, task.id, prompt, content)
        logger.info(f"Document generated for task {task.id}")
        return task

    async def regenerate(self, task_id: str, user_id: str,
                         inputs: Mapping[str, str]) -> Optional[ProjectTask]:
        """Rebuild a task's document from new inputs, keeping the task's stage."""
        task = await self.stages.get_task(task_id, user_id)
        if task is None:
            return None

        stage = parse_document_stage(task.phase)
        prompt = build_prompt(stage, inputs, self.variant)
        content = strip_fences(await self.writer.write(prompt))

        updated = await self.stages.update_task(task_id, user_id, {
            "content": content,
            "status": TaskStatus.EVALUATED,
        })
        if updated is None:
            return None

        await self._record(user_id, task_id, prompt, content)
        logger.info(f"Document regenerated for task {task_id}")
        return updated

    async def refine(self, task_id: str, user_id: str, feedback: str) -> Optional[ProjectTask]:
        """Revise existing content with user feedback; None when there is nothing to refine."""
        task = await self.stages.get_task(task_id, user_id)
        if task is None or not (task.content or "").strip():
            return None

        prompt = build_refine_prompt(task.content, feedback)
        content = strip_fences(await self.writer.write(prompt))

        updated = await self.stages.update_task(task_id, user_id, {"content": content})
        if updated is None:
            return None

        await self._record(user_id, task_id, prompt, content)
        logger.info(f"Document refined for task {task_id}")
        return updated

    async def history(self, task_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        """Model calls recorded for a task, oldest first."""
        task = await self.stages.get_task(task_id, user_id)
        if task is None:
            return None
        evaluations = await self.db.list_evaluations(user_id, task_id)
        return {"task_id": task_id, "evaluations": [e.model_dump(mode="json") for e in evaluations]}
