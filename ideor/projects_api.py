# Project CRUD routes, stage progression queries and PDF export

import logging

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse

from ideor.auth import UserInfo, require_auth
from ideor.deps import get_pdf_exporter, get_project_service, get_stage_service
from ideor.pdf_export import PdfExporter
from ideor.project_service import ProjectService
from ideor.schemas import (
    CanAdvanceResponse,
    ChangePhaseRequest,
    CreateProjectRequest,
    NextStageResponse,
    ProjectResponse,
    UpdateProgressRequest,
    UpdateProjectRequest,
)
from ideor.stage_service import StageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/projects", tags=["projects"])

PROJECT_NOT_FOUND = {"error": "Project not found or access denied"}


async def _project_body(project, projects: ProjectService) -> dict:
    tasks_count = await projects.count_tasks(project.id, project.owner_id)
    return ProjectResponse.from_entity(project, tasks_count).model_dump(by_alias=True)


async def _project_json(project, projects: ProjectService, status_code: int = 200) -> JSONResponse:
    return JSONResponse(await _project_body(project, projects), status_code=status_code)


@router.get("")
async def list_projects(user: UserInfo = Depends(require_auth),
                        projects: ProjectService = Depends(get_project_service)):
    """List the user's projects, most recently updated first."""
    items = await projects.list_for_user(user.uid)
    return JSONResponse([await _project_body(p, projects) for p in items])


@router.get("/{project_id}")
async def get_project(project_id: str,
                      user: UserInfo = Depends(require_auth),
                      projects: ProjectService = Depends(get_project_service)):
    project = await projects.get(project_id, user.uid)
    if project is None:
        return JSONResponse(PROJECT_NOT_FOUND, status_code=404)
    return await _project_json(project, projects)


@router.post("")
async def create_project(body: CreateProjectRequest,
                         user: UserInfo = Depends(require_auth),
                         projects: ProjectService = Depends(get_project_service)):
    project = await projects.create(user.uid, body.model_dump())
    return await _project_json(project, projects, status_code=201)


@router.put("/{project_id}")
async def update_project(project_id: str, body: UpdateProjectRequest,
                         user: UserInfo = Depends(require_auth),
                         projects: ProjectService = Depends(get_project_service)):
    project = await projects.update(project_id, user.uid, body.model_dump())
    if project is None:
        return JSONResponse(PROJECT_NOT_FOUND, status_code=404)
    return await _project_json(project, projects)


@router.delete("/{project_id}")
async def delete_project(project_id: str,
                         user: UserInfo = Depends(require_auth),
                         projects: ProjectService = Depends(get_project_service)):
    if not await projects.delete(project_id, user.uid):
        return JSONResponse(PROJECT_NOT_FOUND, status_code=404)
    return Response(status_code=204)


@router.put("/{project_id}/phase")
async def change_phase(project_id: str, body: ChangePhaseRequest,
                       user: UserInfo = Depends(require_auth),
                       projects: ProjectService = Depends(get_project_service)):
    project = await projects.change_phase(project_id, user.uid, body.new_phase)
    if project is None:
        return JSONResponse(PROJECT_NOT_FOUND, status_code=404)
    return await _project_json(project, projects)


@router.put("/{project_id}/progress")
async def update_progress(project_id: str, body: UpdateProgressRequest,
                          user: UserInfo = Depends(require_auth),
                          projects: ProjectService = Depends(get_project_service)):
    project = await projects.update_progress(project_id, user.uid, body.progress)
    if project is None:
        return JSONResponse(PROJECT_NOT_FOUND, status_code=404)
    return await _project_json(project, projects)


@router.get("/{project_id}/next-stage")
async def next_stage(project_id: str,
                     user: UserInfo = Depends(require_auth),
                     stages: StageService = Depends(get_stage_service)):
    stage = await stages.next_stage(project_id, user.uid)
    message = "All stages completed" if stage is None else f"Next available stage: {stage}"
    return JSONResponse(NextStageResponse(next_stage=stage, message=message).model_dump(by_alias=True))


@router.get("/{project_id}/can-advance")
async def can_advance(project_id: str,
                      user: UserInfo = Depends(require_auth),
                      stages: StageService = Depends(get_stage_service)):
    allowed = await stages.can_advance(project_id, user.uid)
    return JSONResponse(CanAdvanceResponse(can_advance=allowed, project_id=project_id).model_dump(by_alias=True))


@router.get("/{project_id}/export/pdf")
async def export_pdf(project_id: str,
                     user: UserInfo = Depends(require_auth),
                     exporter: PdfExporter = Depends(get_pdf_exporter)):
    """Download every generated stage document as a single PDF."""
    pdf = await exporter.export_project(project_id, user.uid)
    if pdf is None:
        return JSONResponse({"error": "Project not found, access denied or no documents to export"},
                            status_code=404)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="relatorio-{project_id}.pdf"'},
    )
