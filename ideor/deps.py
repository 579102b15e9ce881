# FastAPI dependency providers for services and Gemini clients
# Routes depend on these so tests can swap them through app.dependency_overrides

from ideor import database
from ideor.document_service import DocumentService
from ideor.llm import DocumentWriter, Ideator
from ideor.pdf_export import PdfExporter
from ideor.project_service import ProjectService
from ideor.stage_service import StageService

# Gemini clients are created on first use and shared; they hold token counters
_ideator = None
_document_writer = None


def get_ideator() -> Ideator:
    global _ideator
    if _ideator is None:
        _ideator = Ideator()
    return _ideator


def get_document_writer() -> DocumentWriter:
    global _document_writer
    if _document_writer is None:
        _document_writer = DocumentWriter()
    return _document_writer


def get_project_service() -> ProjectService:
    return ProjectService(database)


def get_stage_service() -> StageService:
    return StageService(database)


def get_document_service() -> DocumentService:
    return DocumentService(get_document_writer(), StageService(database), database)


def get_pdf_exporter() -> PdfExporter:
    return PdfExporter(database)
