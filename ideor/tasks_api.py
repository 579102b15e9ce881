# Stage task routes

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ideor.auth import UserInfo, require_auth
from ideor.deps import get_stage_service
from ideor.schemas import ChangeTaskStatusRequest, CreateTaskRequest, TaskResponse, UpdateTaskRequest
from ideor.stage_service import StageService

router = APIRouter(tags=["tasks"])

PROJECT_NOT_FOUND = {"error": "Project not found or access denied"}
TASK_NOT_FOUND = {"error": "Task not found or access denied"}


async def _task_body(task, user_id: str, stages: StageService) -> dict:
    evaluations_count = await stages.count_evaluations(task.id, user_id)
    return TaskResponse.from_entity(task, evaluations_count).model_dump(by_alias=True)


async def _task_json(task, user_id: str, stages: StageService, status_code: int = 200) -> JSONResponse:
    return JSONResponse(await _task_body(task, user_id, stages), status_code=status_code)


@router.get("/api/projects/{project_id}/tasks")
async def list_tasks(project_id: str,
                     user: UserInfo = Depends(require_auth),
                     stages: StageService = Depends(get_stage_service)):
    tasks = await stages.list_tasks(project_id, user.uid)
    if tasks is None:
        return JSONResponse(PROJECT_NOT_FOUND, status_code=404)
    return JSONResponse([await _task_body(t, user.uid, stages) for t in tasks])


@router.post("/api/projects/{project_id}/tasks")
async def create_task(project_id: str, body: CreateTaskRequest,
                      user: UserInfo = Depends(require_auth),
                      stages: StageService = Depends(get_stage_service)):
    """Create a draft task for a stage."""
    task = await stages.create_task(project_id, user.uid, body.model_dump())
    if task is None:
        return JSONResponse(PROJECT_NOT_FOUND, status_code=404)
    return await _task_json(task, user.uid, stages, status_code=201)


@router.get("/api/tasks/{task_id}")
async def get_task(task_id: str,
                   user: UserInfo = Depends(require_auth),
                   stages: StageService = Depends(get_stage_service)):
    task = await stages.get_task(task_id, user.uid)
    if task is None:
        return JSONResponse(TASK_NOT_FOUND, status_code=404)
    return await _task_json(task, user.uid, stages)


@router.put("/api/tasks/{task_id}")
async def update_task(task_id: str, body: UpdateTaskRequest,
                      user: UserInfo = Depends(require_auth),
                      stages: StageService = Depends(get_stage_service)):
    task = await stages.update_task(task_id, user.uid, body.model_dump())
    if task is None:
        return JSONResponse(TASK_NOT_FOUND, status_code=404)
    return await _task_json(task, user.uid, stages)


@router.put("/api/tasks/{task_id}/status")
async def change_task_status(task_id: str, body: ChangeTaskStatusRequest,
                             user: UserInfo = Depends(require_auth),
                             stages: StageService = Depends(get_stage_service)):
    # an invalid status raises ValidationFailedError (400)
    task = await stages.change_status(task_id, user.uid, body.new_status)
    if task is None:
        return JSONResponse(TASK_NOT_FOUND, status_code=404)
    return await _task_json(task, user.uid, stages)
