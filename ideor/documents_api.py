# Stage document generation routes

import logging
from typing import Dict

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from ideor.auth import UserInfo, require_auth
from ideor.deps import get_document_service
from ideor.document_service import DocumentService, estimate_tokens
from ideor.schemas import GenerateDocumentRequest, GenerateDocumentResponse, RefineDocumentRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])

TASK_NOT_FOUND = {"error": "Task not found or access denied"}


def _document_json(task, model_used: str) -> JSONResponse:
    content = task.content or ""
    response = GenerateDocumentResponse(
        task_id=task.id,
        phase=task.phase,
        generated_content=content,
        model_used=model_used,
        tokens_used=estimate_tokens(content),
        status=task.status.value,
    )
    return JSONResponse(response.model_dump(by_alias=True))


@router.post("/api/projects/{project_id}/documents/generate")
async def generate_document(project_id: str, body: GenerateDocumentRequest,
                            user: UserInfo = Depends(require_auth),
                            documents: DocumentService = Depends(get_document_service)):
    """Generate the document of a stage and store it as an evaluated task."""
    task = await documents.generate(project_id, user.uid, body.phase, body.inputs)
    if task is None:
        return JSONResponse({"error": "Project not found or access denied"}, status_code=404)
    return _document_json(task, documents.writer.model_name)


@router.post("/api/documents/{task_id}/regenerate")
async def regenerate_document(task_id: str,
                              inputs: Dict[str, str] = Body(...),
                              user: UserInfo = Depends(require_auth),
                              documents: DocumentService = Depends(get_document_service)):
    task = await documents.regenerate(task_id, user.uid, inputs)
    if task is None:
        return JSONResponse(TASK_NOT_FOUND, status_code=404)
    return _document_json(task, documents.writer.model_name)


@router.post("/api/documents/{task_id}/refine")
async def refine_document(task_id: str, body: RefineDocumentRequest,
                          user: UserInfo = Depends(require_auth),
                          documents: DocumentService = Depends(get_document_service)):
    task = await documents.refine(task_id, user.uid, body.feedback)
    if task is None:
        return JSONResponse(TASK_NOT_FOUND, status_code=404)
    return _document_json(task, documents.writer.model_name)


@router.get("/api/documents/{task_id}/evaluations")
async def document_evaluations(task_id: str,
                               user: UserInfo = Depends(require_auth),
                               documents: DocumentService = Depends(get_document_service)):
    """Model calls recorded for a task, oldest first."""
    history = await documents.history(task_id, user.uid)
    if history is None:
        return JSONResponse(TASK_NOT_FOUND, status_code=404)
    return JSONResponse(history)
