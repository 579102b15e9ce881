# Startup idea suggestion routes
# /suggest needs exactly the requested count; /segment accepts fewer ideas

import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from fastapi.responses import JSONResponse

from ideor.auth import UserInfo, require_auth
from ideor.config import clamp_idea_count
from ideor.deps import get_ideator, get_project_service
from ideor.llm import Ideator
from ideor.project_service import ProjectService
from ideor.schemas import IdeasResponse, PromptRequest, SegmentIdeasRequest, SuggestIdeasRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ideas", tags=["ideas"])

SEGMENT_REQUIRED = {"error": "SegmentDescription é obrigatório."}


def _ideas_json(ideas) -> JSONResponse:
    return JSONResponse(IdeasResponse(ideas=ideas).model_dump(by_alias=True))


@router.post("/suggest")
async def suggest_ideas(body: SuggestIdeasRequest,
                        background_tasks: BackgroundTasks,
                        user: UserInfo = Depends(require_auth),
                        ideator: Ideator = Depends(get_ideator),
                        projects: ProjectService = Depends(get_project_service)):
    """Ideas built from a seed idea and a segment description."""
    if not body.segment_description.strip():
        return JSONResponse(SEGMENT_REQUIRED, status_code=400)

    count = clamp_idea_count(body.count)
    ideas = await ideator.suggest_ideas(body.seed_idea or "", body.segment_description, count)

    if body.project_id:
        background_tasks.add_task(projects.save_generated_options, body.project_id, user.uid, ideas)
    return _ideas_json(ideas)


@router.post("/segment")
async def segment_ideas(body: SegmentIdeasRequest,
                        background_tasks: BackgroundTasks,
                        user: UserInfo = Depends(require_auth),
                        ideator: Ideator = Depends(get_ideator),
                        projects: ProjectService = Depends(get_project_service)):
    """Title/subtitle ideas for a segment; may return fewer than requested."""
    if not body.segment_description.strip():
        return JSONResponse(SEGMENT_REQUIRED, status_code=400)

    count = clamp_idea_count(body.count)
    ideas = await ideator.segment_ideas(body.segment_description, count)
    if len(ideas) < count:
        logger.info(f"Segment ideas: returning {len(ideas)} of {count} requested")

    if body.project_id:
        background_tasks.add_task(projects.save_generated_options, body.project_id, user.uid, ideas)
    return _ideas_json(ideas)


@router.post("/generate")
async def generate_content(body: PromptRequest,
                           user: UserInfo = Depends(require_auth),
                           ideator: Ideator = Depends(get_ideator)):
    """Send a free-form prompt and return the model text unchanged."""
    text = await ideator.generate_content(body.prompt)
    return JSONResponse({"text": text})
